"""
Seed orchestration: runs the processing steps in order, once per target.
"""
import importlib
import time
from enum import Enum
from typing import Any, Callable, Dict

import structlog

from .api import StrapiClient
from .config import PROCESSING_STEPS, Settings
from .media import MediaLibrary
from .models import SeedFixture, SeedReport
from .relations import IdMap
from .utils import SetupStore

logger = structlog.get_logger(__name__)

INIT_FLAG_KEY = "initHasRun"


class SeedState(str, Enum):
    NOT_RUN = "NOT_RUN"
    PERMISSIONS_SET = "PERMISSIONS_SET"
    CATEGORIES_IMPORTED = "CATEGORIES_IMPORTED"
    AUTHORS_IMPORTED = "AUTHORS_IMPORTED"
    ARTICLES_IMPORTED = "ARTICLES_IMPORTED"
    GLOBAL_IMPORTED = "GLOBAL_IMPORTED"
    ABOUT_IMPORTED = "ABOUT_IMPORTED"
    DONE = "DONE"


def load_step_modules() -> Dict[str, Callable]:
    """Load the step function of every entry in PROCESSING_STEPS"""
    step_modules = {}
    for step in PROCESSING_STEPS:
        module = importlib.import_module(f"{__package__}.processing_steps.{step['id']}")
        step_modules[step["module"]] = getattr(module, step["module"])
    return step_modules


STEP_MODULES = load_step_modules()


def is_first_run(store: SetupStore) -> bool:
    """Read the setup flag and set it; True only the first time"""
    init_has_run = store.get(INIT_FLAG_KEY)
    store.set(INIT_FLAG_KEY, True)
    return not init_has_run


def build_workflow_context(
    client: StrapiClient,
    settings: Settings,
    fixture: SeedFixture,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """Shared context handed to every step"""
    return {
        "client": client,
        "settings": settings,
        "fixture": fixture,
        "sleep": sleep,
        "media": MediaLibrary(client, settings.uploads_dir),
        "id_maps": {
            "category": IdMap("category"),
            "author": IdMap("author"),
        },
        "state": SeedState.NOT_RUN,
        "completed_steps": [],
        "results": {},
    }


def import_seed_data(workflow_context: Dict[str, Any]) -> Dict[str, Any]:
    """
    Run every processing step in order.
    A failing step stops the run; earlier steps are not rolled back.
    """
    for step_config in PROCESSING_STEPS:
        step_id = step_config["id"]
        step_function = STEP_MODULES[step_config["module"]]

        logger.info("step_started", step=step_id, description=step_config["description"])
        step_start_time = time.time()
        try:
            step_result = step_function(step_config=step_config, workflow_context=workflow_context)
        except Exception as step_error:
            logger.error("step_failed", step=step_id, state=workflow_context["state"].value, error=str(step_error))
            raise

        workflow_context["results"][step_id] = step_result
        workflow_context["completed_steps"].append(step_id)
        workflow_context["state"] = SeedState(step_config["state"])
        logger.info(
            "step_completed",
            step=step_id,
            state=workflow_context["state"].value,
            duration=round(time.time() - step_start_time, 2),
            message=step_result.get("message"),
        )

    workflow_context["state"] = SeedState.DONE
    return workflow_context


def seed_example_app(
    client: StrapiClient,
    store: SetupStore,
    settings: Settings,
    fixture: SeedFixture,
    force: bool = False,
    sleep: Callable[[float], None] = time.sleep,
) -> SeedReport:
    """
    Import the seed data unless it was already imported into this target

    Args:
        force: Import even if the setup flag says a previous run happened

    Raises:
        Exception: Whatever stopped the failing step, after logging it
    """
    start_time = time.time()
    first_run = is_first_run(store)

    if not first_run and not force:
        logger.info(
            "seed_skipped",
            reason="Seed data has already been imported into this target. Run with --reset or --force, or remove it from SEED_STATE_FILE, to import again.",
        )
        return SeedReport(state=SeedState.DONE.value, skipped=True)

    workflow_context = build_workflow_context(client, settings, fixture, sleep)
    try:
        logger.info("seed_started", target=client.base_url)
        import_seed_data(workflow_context)
        logger.info("seed_finished", message="Ready to go")
    except Exception:
        logger.error("seed_failed", message="Could not import seed data", state=workflow_context["state"].value)
        raise

    return build_report(workflow_context, time.time() - start_time)


def build_report(workflow_context: Dict[str, Any], duration: float) -> SeedReport:
    media = workflow_context["media"]
    return SeedReport(
        state=workflow_context["state"].value,
        completed_steps=list(workflow_context["completed_steps"]),
        created={
            step_id: result.get("created", 0)
            for step_id, result in workflow_context["results"].items()
            if "created" in result
        },
        uploaded_files=list(media.uploaded),
        reused_files=list(media.reused),
        duration_seconds=round(duration, 2),
    )


def reset_setup_flag(store: SetupStore) -> bool:
    """Forget a previous run so the next one imports again"""
    return store.delete(INIT_FLAG_KEY)
