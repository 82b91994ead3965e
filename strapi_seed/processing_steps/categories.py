from typing import Any, Dict

import structlog

from ..entries import create_entry

logger = structlog.get_logger(__name__)


def run_categories_step(step_config: Dict, workflow_context: Dict) -> Dict[str, Any]:
    """
    Step 2: Categories
    Creates every fixture category and remembers the ids Strapi assigned
    """
    client = workflow_context["client"]
    fixture = workflow_context["fixture"]
    id_map = workflow_context["id_maps"]["category"]

    for position, category in enumerate(fixture.categories, 1):
        created = create_entry(client, "category", category.to_entry())
        id_map.add(position, category, created)

    logger.info("categories_imported", count=len(id_map))
    return {
        "created": len(id_map),
        "message": f"Imported {len(id_map)} categories",
    }
