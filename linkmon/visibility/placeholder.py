"""Placeholder line-of-sight predicates.

No occlusion test against the environment exists yet.  `always_visible` is the
reference behaviour of the channel model and reports every pair as visible;
`never_visible` forces the non-line-of-sight branch for what-if runs.  Neither
looks at the environment handle.  A real geometric test can be registered next
to them without touching the channel model.
"""
from __future__ import annotations

from . import register_los


@register_los
def always_visible(agent_a, agent_b, environment) -> bool:
    """Placeholder: every pair has line of sight."""
    return True


@register_los
def never_visible(agent_a, agent_b, environment) -> bool:
    """Every pair is obstructed."""
    return False
