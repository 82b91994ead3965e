"""
Step 5: Global Settings
Creates the global single type with its favicon and default share image
"""
from typing import Any, Dict

import structlog

from ..entries import create_entry
from ..utils import utc_now_iso

logger = structlog.get_logger(__name__)

FAVICON_FILE = "favicon.png"
SHARE_IMAGE_FILE = "default-image.png"


def run_global_settings_step(step_config: Dict, workflow_context: Dict) -> Dict[str, Any]:
    media = workflow_context["media"]
    global_data = workflow_context["fixture"].global_

    favicon = media.resolve([FAVICON_FILE])
    share_image = media.resolve([SHARE_IMAGE_FILE])

    entry = global_data.to_entry()
    entry.update(
        favicon=favicon,
        publishedAt=utc_now_iso(),
        defaultSeo={**global_data.defaultSeo, "shareImage": share_image},
    )
    create_entry(workflow_context["client"], "global", entry)

    logger.info("global_settings_imported")
    return {
        "created": 1,
        "message": "Global settings imported",
    }
