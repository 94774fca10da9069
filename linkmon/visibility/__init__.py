"""
Line-of-sight module: registry and public API for visibility predicates.

This module provides:
- The predicate signature every line-of-sight strategy follows.
- A registry system for looking predicates up by name (CLI, configs).

Usage Example:
--------------

from linkmon.visibility import get_los, register_los

@register_los
def my_occlusion_test(agent_a, agent_b, environment):
    # ... implement logic ...
    return True

has_los = get_los("my_occlusion_test")
model = ChannelModel(cfg, has_line_of_sight=has_los)

"""
from __future__ import annotations

from typing import Any, Callable, Dict, List

from ..simulator.scenario import AgentPose

# Public API: expose registry and the predicate signature
__all__ = [
    "LineOfSightFn",
    "register_los",
    "get_los",
    "available_los",
    "placeholder",
]

LineOfSightFn = Callable[[AgentPose, AgentPose, Any], bool]

# Predicate registry: maps predicate names to callables
_REGISTRY: Dict[str, LineOfSightFn] = {}


# ------------------------------------------------------------------
# Registry helpers
# ------------------------------------------------------------------

def register_los(fn: LineOfSightFn) -> LineOfSightFn:
    """
    Decorator registering a line-of-sight predicate under its function name.
    Raises if duplicate or invalid registration is attempted.
    """
    if not callable(fn):
        raise TypeError("@register_los can only decorate callables")

    key = fn.__name__
    if key in _REGISTRY:
        raise KeyError(f"Line-of-sight predicate '{key}' is already registered")
    _REGISTRY[key] = fn
    return fn


def get_los(name: str) -> LineOfSightFn:
    """
    Retrieve a predicate by name from the registry.
    Raises KeyError if not found.
    """
    try:
        return _REGISTRY[name]
    except KeyError as exc:
        raise KeyError(
            f"Line-of-sight predicate '{name}' not found in registry. Available: {list(_REGISTRY)}"
        ) from exc


def available_los() -> List[str]:
    """Names of every registered predicate, in registration order."""
    return list(_REGISTRY)


from . import placeholder
