"""
Resolution of declared cross-object requirements.

Requirements are resolved after every field of an object has been
assigned and only ever query the ``DecodeContext``. An unresolved
requirement is not an error: it degrades to None.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.logging import get_logger
from .context import DecodeContext
from .descriptor import Ancestor, IndexLookup, Requirement, TargetDescriptor


logger = get_logger("instagram_sdk.serialization.requirements")


def resolve_requirement(
    requirement: Requirement,
    obj: Any,
    context: DecodeContext,
) -> Optional[Any]:
    """
    Resolve one requirement for ``obj`` or return None.
    """

    if isinstance(requirement, IndexLookup):
        value = getattr(obj, requirement.local_field, None)
        if value is None:
            return None
        found = context.lookup(requirement.registry_key, value)
        if found is None:
            logger.debug(
                "Unresolved index lookup %s=%r for %s",
                requirement.registry_key,
                value,
                type(obj).__name__,
            )
        return found

    if isinstance(requirement, Ancestor):
        for tag, ancestor in context.ancestors():
            if requirement.kind is None or tag == requirement.kind:
                return ancestor
        logger.debug(
            "No enclosing %s for %s",
            requirement.kind or "object",
            type(obj).__name__,
        )
        return None

    raise TypeError(f"Unknown requirement type: {requirement!r}")


def deliver(obj: Any, requirement: Requirement, value: Optional[Any]) -> None:
    """
    Hand a resolved value to the object's ``on_requirement`` hook, or
    assign it to the requirement's target attribute.
    """

    hook = getattr(obj, "on_requirement", None)
    if callable(hook):
        hook(requirement, value)
    else:
        setattr(obj, requirement.target, value)


def resolve_requirements(
    obj: Any,
    descriptor: TargetDescriptor,
    context: DecodeContext,
) -> Dict[str, Any]:
    """
    Resolve and deliver every requirement in declaration order.

    Returns the resolved values keyed by target name for the post-decode hook.
    """

    resolved: Dict[str, Any] = {}
    for requirement in descriptor.requirements:
        value = resolve_requirement(requirement, obj, context)
        deliver(obj, requirement, value)
        resolved[requirement.target] = value
    return resolved
