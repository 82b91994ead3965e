"""
strapi-seed - Command Line Entry Point
Imports the example blog content into a running Strapi instance.
"""
import argparse
import sys

import structlog
from pydantic import ValidationError

from .api import StrapiClient
from .config import Settings
from .exceptions import SeedError
from .fixtures import load_fixture
from .utils import SetupStore, setup_logging
from .workflow import reset_setup_flag, seed_example_app

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strapi-seed",
        description="Seed a Strapi blog with example categories, authors, articles and pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Seed a local Strapi with the token from SEED_STRAPI_API_TOKEN
  strapi-seed

  # Seed another instance from another fixture
  strapi-seed --url https://cms.example.com --data-file fixtures/data.json

  # Allow the next run to import again
  strapi-seed --reset
        """,
    )

    parser.add_argument("--url", help="Strapi base URL (default: SEED_STRAPI_URL)")
    parser.add_argument("--token", help="Full-access API token (default: SEED_STRAPI_API_TOKEN)")
    parser.add_argument("--data-file", help="Seed fixture JSON (default: SEED_DATA_FILE)")
    parser.add_argument("--uploads-dir", help="Directory holding the media files (default: SEED_UPLOADS_DIR)")
    parser.add_argument("--state-file", help="Where the setup flag is kept (default: SEED_STATE_FILE)")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Import even if this target was already seeded",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear the setup flag for this target and exit",
    )
    parser.add_argument("--log-level", help="Logging level (default: SEED_LOG_LEVEL)")
    parser.add_argument("--log-format", choices=["console", "json"], help="Log output format")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with command line flags on top"""
    overrides = {
        "strapi_url": args.url,
        "strapi_api_token": args.token,
        "data_file": args.data_file,
        "uploads_dir": args.uploads_dir,
        "state_file": args.state_file,
        "log_level": args.log_level,
        "log_format": args.log_format,
    }
    return Settings(**{key: value for key, value in overrides.items() if value is not None})


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args)
    except ValidationError as e:
        logger.error("invalid_settings", errors=[
            {"field": ".".join(str(loc) for loc in error["loc"]), "message": error["msg"]}
            for error in e.errors()
        ])
        return 1
    setup_logging(settings.log_level, settings.log_format)

    store = SetupStore(settings.state_file, settings.strapi_url, settings.environment)

    if args.reset:
        if reset_setup_flag(store):
            logger.info("setup_flag_cleared", target=settings.strapi_url)
        else:
            logger.info("setup_flag_not_set", target=settings.strapi_url)
        return 0

    try:
        fixture = load_fixture(settings.data_file)
        with StrapiClient(
            base_url=settings.strapi_url,
            api_token=settings.strapi_api_token,
            timeout=settings.request_timeout,
        ) as client:
            report = seed_example_app(client, store, settings, fixture, force=args.force)
    except (SeedError, ValueError) as e:
        logger.error("seed_aborted", error=str(e), error_type=type(e).__name__)
        return 1

    logger.info("seed_report", **report.model_dump())
    return 0


if __name__ == "__main__":
    sys.exit(main())
