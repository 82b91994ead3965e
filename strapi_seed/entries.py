"""
Entry creation for the blog content types.
"""
from typing import Any, Dict

import structlog

from .api import StrapiClient

logger = structlog.get_logger(__name__)

# Content type name -> (REST path, is single type)
CONTENT_TYPES = {
    "category": ("categories", False),
    "author": ("authors", False),
    "article": ("articles", False),
    "global": ("global", True),
    "about": ("about", True),
}


def create_entry(client: StrapiClient, model: str, entry: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create one entry of a content type

    Collection types are created with POST, single types with PUT.

    Returns:
        The created record, including the id Strapi assigned

    Raises:
        KeyError: If the content type is unknown
        StrapiAPIError: If Strapi rejects the entry (logged, then re-raised)
    """
    if model not in CONTENT_TYPES:
        raise KeyError(f"Unknown content type: {model}")
    path, is_single = CONTENT_TYPES[model]

    try:
        if is_single:
            created = client.put_single(path, entry)
        else:
            created = client.create(path, entry)
    except Exception as e:
        logger.error("entry_create_failed", model=model, fields=sorted(entry), error=str(e))
        raise

    logger.info("entry_created", model=model, id=created.get("id"))
    return created
