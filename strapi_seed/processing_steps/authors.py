from typing import Any, Dict

import structlog

from ..entries import create_entry

logger = structlog.get_logger(__name__)


def run_authors_step(step_config: Dict, workflow_context: Dict) -> Dict[str, Any]:
    """
    Step 3: Authors
    Uploads avatars and creates every fixture author
    """
    client = workflow_context["client"]
    media = workflow_context["media"]
    fixture = workflow_context["fixture"]
    id_map = workflow_context["id_maps"]["author"]

    for position, author in enumerate(fixture.authors, 1):
        entry = author.to_entry()
        if author.avatar:
            entry["avatar"] = media.resolve([author.avatar])

        created = create_entry(client, "author", entry)
        id_map.add(position, author, created)

    logger.info("authors_imported", count=len(id_map))
    return {
        "created": len(id_map),
        "message": f"Imported {len(id_map)} authors",
    }
