from typing import Any, Dict

import structlog

from ..blocks import update_blocks
from ..entries import create_entry
from ..utils import utc_now_iso

logger = structlog.get_logger(__name__)


def run_about_step(step_config: Dict, workflow_context: Dict) -> Dict[str, Any]:
    """
    Step 6: About Page
    """
    about = workflow_context["fixture"].about
    updated_blocks = update_blocks(about.blocks, workflow_context["media"])

    entry = about.to_entry()
    entry.update(publishedAt=utc_now_iso(), blocks=updated_blocks)
    create_entry(workflow_context["client"], "about", entry)

    logger.info("about_page_imported", blocks=len(updated_blocks))
    return {
        "created": 1,
        "message": "About page imported",
    }
