from __future__ import annotations

import pytest

from undo_queues.history import FailurePolicy, RegistryConfig


def test_defaults() -> None:
    config = RegistryConfig.from_env({})

    assert config.default_capacity == 50
    assert config.failure_policy is FailurePolicy.ADVANCE
    assert config.capacity_for("anything") == 50


def test_from_env_reads_all_settings() -> None:
    config = RegistryConfig.from_env(
        {
            "UNDO_QUEUES_CAPACITY": "20",
            "UNDO_QUEUES_FAILURE_POLICY": "HOLD",
            "UNDO_QUEUES_QUEUE_CAPACITIES": "build=5, terrain = 7,",
        }
    )

    assert config.default_capacity == 20
    assert config.failure_policy is FailurePolicy.HOLD
    assert config.capacity_overrides == {"build": 5, "terrain": 7}
    assert config.capacity_for("build") == 5
    assert config.capacity_for("other") == 20


@pytest.mark.parametrize(
    "environ",
    [
        {"UNDO_QUEUES_CAPACITY": "many"},
        {"UNDO_QUEUES_CAPACITY": "0"},
        {"UNDO_QUEUES_FAILURE_POLICY": "retry"},
        {"UNDO_QUEUES_QUEUE_CAPACITIES": "build"},
        {"UNDO_QUEUES_QUEUE_CAPACITIES": "build=-1"},
    ],
)
def test_from_env_rejects_invalid_values(environ: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        RegistryConfig.from_env(environ)


def test_constructor_validates_capacities() -> None:
    with pytest.raises(ValueError):
        RegistryConfig(default_capacity=0)
    with pytest.raises(ValueError):
        RegistryConfig(capacity_overrides={"build": 0})
