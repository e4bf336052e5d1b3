"""Module reconciliation: computing display order for content modules.

The explicit order array from the layout configuration is treated as a
priority list, not a filter. Ids it names come first in its sequence;
every other module follows in document order. Stale ids that name no
module are dropped silently.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


def _module_id(module: Any) -> Any:
    """Return a module's id if it can be used as a lookup key."""
    if not isinstance(module, dict):
        return None
    module_id = module.get("id")
    try:
        hash(module_id)
    except TypeError:
        return None
    return module_id


def reconcile(modules: Any, order: Any = None) -> list[Any]:
    """Compute the render order for a list of raw modules.

    Args:
        modules: Raw mainContent entries in document order
        order: Optional sequence of module ids to show first

    Returns:
        Modules named in ``order`` (in that order), followed by all
        remaining modules in their original order. Falls back to
        ``modules`` unchanged when no order applies or the result
        would be empty.

    Examples:
        >>> reconcile([{"id": "a"}, {"id": "b"}, {"id": "c"}], ["c", "a"])
        [{'id': 'c'}, {'id': 'a'}, {'id': 'b'}]
    """
    if not isinstance(modules, list):
        return []
    if not order or not isinstance(order, list):
        return modules

    lookup: dict[Any, Any] = {}
    for module in modules:
        module_id = _module_id(module)
        if module_id is not None:
            lookup[module_id] = module

    ordered_ids = []
    for module_id in order:
        try:
            if module_id in lookup and module_id not in ordered_ids:
                ordered_ids.append(module_id)
        except TypeError:
            logger.warning(f"Ignoring unusable id in module order: {module_id!r}")

    ordered = [lookup[module_id] for module_id in ordered_ids]
    placed = set(ordered_ids)
    for module in modules:
        if _module_id(module) not in placed:
            ordered.append(module)

    if not ordered:
        logger.warning("Module order resulted in empty list. Using document order.")
        return modules

    logger.debug(f"Applied module order to {len(ordered)} modules")
    return ordered


def is_renderable(module: Any) -> bool:
    """Return True if a raw module has the fields rendering requires."""
    return isinstance(module, dict) and bool(module.get("id")) and bool(module.get("type"))
