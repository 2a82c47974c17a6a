"""Resource ceiling computation for validated application descriptions."""

import logging

from ceilcheck.models.app import App

logger = logging.getLogger(__name__)


def resource_ceilings(app: App) -> dict[str, int]:
    """Compute the ceiling of every resource touched by a prioritized task.

    The ceiling is the highest priority among the resource's accessors. `init`
    has no priority and never contributes; resources only `init` touches get
    no entry. Accesses to undeclared resources are ignored.

    Args:
        app: Application description, normally one that passed validation

    Returns:
        Mapping from resource name to ceiling priority, in declaration order
    """
    ceilings: dict[str, int] = {}
    for priority, _, access in app.resource_accesses():
        if priority is None or access.resource not in app.resources:
            continue
        ceilings[access.resource] = max(priority, ceilings.get(access.resource, priority))

    ordered = {name: ceilings[name] for name in app.resources if name in ceilings}
    logger.debug(f"Computed ceilings for {len(ordered)} of {len(app.resources)} resources")
    return ordered
