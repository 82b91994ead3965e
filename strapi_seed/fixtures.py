"""
Seed fixture loading
"""
import json
import os

import structlog
from pydantic import ValidationError

from .exceptions import FixtureError
from .models import SeedFixture

logger = structlog.get_logger(__name__)


def load_fixture(path: str) -> SeedFixture:
    """
    Read data.json and validate its record sets

    Raises:
        FixtureError: If the file is missing, not JSON, or has the wrong shape
    """
    if not os.path.exists(path):
        raise FixtureError(f"Seed data file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise FixtureError(f"Seed data file {path} is not valid JSON: {e}") from e

    try:
        fixture = SeedFixture.model_validate(raw)
    except ValidationError as e:
        raise FixtureError(f"Seed data file {path} is invalid: {e}") from e

    logger.info(
        "fixture_loaded",
        path=path,
        categories=len(fixture.categories),
        authors=len(fixture.authors),
        articles=len(fixture.articles),
    )
    return fixture
