"""
Public role permission setup.

Strapi's users-permissions plugin exposes a role's permissions as a tree:

    {"api::article": {"controllers": {"article": {"find": {"enabled": true, "policy": ""}}}}}

Writing a role back replaces its whole tree, so requested actions are merged
into the current tree before the update.
"""
import copy
import time
from typing import Callable, Dict, List

import structlog

from .api import StrapiClient
from .exceptions import PublicRoleNotFoundError

logger = structlog.get_logger(__name__)

PUBLIC_ROLE_TYPE = "public"


def merge_permissions(current: Dict, new_permissions: Dict[str, List[str]]) -> Dict:
    """
    Enable each (controller, action) pair in a copy of a role's permission tree.
    Existing entries are kept; missing ones are added.
    """
    merged = copy.deepcopy(current or {})
    for controller, actions in new_permissions.items():
        controllers = merged.setdefault(f"api::{controller}", {}).setdefault("controllers", {})
        controller_actions = controllers.setdefault(controller, {})
        for action in actions:
            entry = controller_actions.setdefault(action, {"policy": ""})
            entry["enabled"] = True
    return merged


def find_public_role(
    client: StrapiClient,
    max_retries: int = 10,
    retry_delay: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict:
    """
    Find the public role, polling while Strapi finishes bootstrapping

    Raises:
        PublicRoleNotFoundError: If the role is still missing after max_retries attempts
    """
    for attempt in range(1, max_retries + 1):
        public_roles = [role for role in client.get_roles() if role.get("type") == PUBLIC_ROLE_TYPE]
        if public_roles:
            logger.info("public_role_found", role_id=public_roles[0]["id"], attempt=attempt)
            return public_roles[0]

        logger.warning(
            "public_role_not_found",
            attempt=attempt,
            max_retries=max_retries,
            retry_in=retry_delay,
        )
        if attempt < max_retries:
            sleep(retry_delay)

    logger.error("public_role_lookup_failed", max_retries=max_retries)
    raise PublicRoleNotFoundError(
        f"Public role not found after {max_retries} attempts, cannot set permissions"
    )


def set_public_permissions(
    client: StrapiClient,
    new_permissions: Dict[str, List[str]],
    max_retries: int = 10,
    retry_delay: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict:
    """
    Enable the given actions for anonymous visitors

    Args:
        client: Strapi client
        new_permissions: Content type name -> list of actions, e.g. {"article": ["find", "findOne"]}

    Returns:
        The permission tree written to the public role
    """
    public_role = find_public_role(client, max_retries, retry_delay, sleep)
    role = client.get_role(public_role["id"])

    merged = merge_permissions(role.get("permissions", {}), new_permissions)
    client.update_role(
        public_role["id"],
        {
            "name": role.get("name", public_role.get("name")),
            "description": role.get("description", public_role.get("description", "")),
            "type": PUBLIC_ROLE_TYPE,
            "permissions": merged,
        },
    )

    logger.info("public_permissions_set", controllers=sorted(new_permissions))
    return merged
