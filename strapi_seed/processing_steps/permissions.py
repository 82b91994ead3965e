"""
Step 1: Public Permissions
Opens read access to the blog content types for anonymous visitors
"""
from typing import Any, Dict

from ..config import PUBLIC_PERMISSIONS
from ..permissions import set_public_permissions


def run_permissions_step(step_config: Dict, workflow_context: Dict) -> Dict[str, Any]:
    settings = workflow_context["settings"]

    set_public_permissions(
        workflow_context["client"],
        PUBLIC_PERMISSIONS,
        max_retries=settings.role_max_retries,
        retry_delay=settings.role_retry_delay,
        sleep=workflow_context["sleep"],
    )

    return {
        "controllers": sorted(PUBLIC_PERMISSIONS),
        "message": f"Public permissions set for {len(PUBLIC_PERMISSIONS)} content types",
    }
