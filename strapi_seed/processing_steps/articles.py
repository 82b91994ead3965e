"""
Step 4: Articles
Articles need the categories and authors from the previous steps: their
fixture references are swapped for the ids Strapi assigned.
"""
from typing import Any, Dict

import structlog

from ..blocks import update_blocks
from ..entries import create_entry
from ..utils import utc_now_iso

logger = structlog.get_logger(__name__)


def run_articles_step(step_config: Dict, workflow_context: Dict) -> Dict[str, Any]:
    client = workflow_context["client"]
    media = workflow_context["media"]
    fixture = workflow_context["fixture"]
    categories = workflow_context["id_maps"]["category"]
    authors = workflow_context["id_maps"]["author"]

    created_count = 0
    for article in fixture.articles:
        cover = media.resolve([f"{article.slug}.jpg"])
        updated_blocks = update_blocks(article.blocks, media)

        entry = article.to_entry()
        entry.update(
            cover=cover,
            publishedAt=utc_now_iso(),
            blocks=updated_blocks,
            category=categories.resolve(article.category),
            author=authors.resolve(article.author),
        )
        create_entry(client, "article", entry)
        created_count += 1

    logger.info("articles_imported", count=created_count)
    return {
        "created": created_count,
        "message": f"Imported {created_count} articles",
    }
