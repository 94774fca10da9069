import pytest

from linkmon.simulator.scenario import AgentPose
from linkmon.visibility import available_los, get_los, register_los
from linkmon.visibility.placeholder import always_visible, never_visible


def test_builtin_predicates_registered():
    assert "always_visible" in available_los()
    assert "never_visible" in available_los()
    assert get_los("always_visible") is always_visible


def test_placeholder_ignores_environment():
    a, b = AgentPose(0, 0), AgentPose(1e6, 1e6)
    assert always_visible(a, b, environment={"walls": [1, 2, 3]}) is True
    assert never_visible(a, b, environment=None) is False


def test_unknown_predicate():
    with pytest.raises(KeyError, match="not found"):
        get_los("ray_traced")


def test_duplicate_registration_rejected():
    with pytest.raises(KeyError, match="already registered"):
        register_los(always_visible)


def test_non_callable_rejected():
    with pytest.raises(TypeError):
        register_los("always_visible")
