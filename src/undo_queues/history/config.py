"""Registry configuration, optionally sourced from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from .timeline import DEFAULT_CAPACITY, NOTHING_TO_REDO, NOTHING_TO_UNDO, FailurePolicy

ENV_PREFIX = "UNDO_QUEUES_"


@dataclass(slots=True)
class RegistryConfig:
    default_capacity: int = DEFAULT_CAPACITY
    capacity_overrides: Dict[str, int] = field(default_factory=dict)
    failure_policy: FailurePolicy = FailurePolicy.ADVANCE
    nothing_to_undo: str = NOTHING_TO_UNDO
    nothing_to_redo: str = NOTHING_TO_REDO

    def __post_init__(self) -> None:
        self.failure_policy = FailurePolicy(self.failure_policy)
        _check_capacity("default_capacity", self.default_capacity)
        for name, capacity in self.capacity_overrides.items():
            _check_capacity(f"capacity for queue '{name}'", capacity)

    def capacity_for(self, name: str) -> int:
        return self.capacity_overrides.get(name, self.default_capacity)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RegistryConfig":
        """Build a config from ``UNDO_QUEUES_*`` variables.

        ``CAPACITY`` sets the default depth, ``FAILURE_POLICY`` is ``advance``
        or ``hold`` and ``QUEUE_CAPACITIES`` takes ``name=N`` pairs separated
        by commas. Unset variables keep their defaults.
        """

        env = os.environ if environ is None else environ
        config = cls()

        raw_capacity = env.get(f"{ENV_PREFIX}CAPACITY")
        if raw_capacity:
            config.default_capacity = _parse_int("CAPACITY", raw_capacity)
            _check_capacity("default_capacity", config.default_capacity)

        raw_policy = env.get(f"{ENV_PREFIX}FAILURE_POLICY")
        if raw_policy:
            try:
                config.failure_policy = FailurePolicy(raw_policy.strip().lower())
            except ValueError as exc:
                raise ValueError(
                    f"Unknown failure policy '{raw_policy}' "
                    f"(expected one of: {', '.join(p.value for p in FailurePolicy)})"
                ) from exc

        raw_overrides = env.get(f"{ENV_PREFIX}QUEUE_CAPACITIES")
        if raw_overrides:
            config.capacity_overrides = _parse_overrides(raw_overrides)

        return config


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{key} must be an integer, got '{raw}'") from exc


def _parse_overrides(raw: str) -> Dict[str, int]:
    overrides: Dict[str, int] = {}
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, sep, value = chunk.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Malformed queue capacity '{chunk}', expected name=N")
        capacity = _parse_int("QUEUE_CAPACITIES", value)
        _check_capacity(f"capacity for queue '{name}'", capacity)
        overrides[name] = capacity
    return overrides


def _check_capacity(label: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{label} must be at least 1, got {value}")


__all__ = ["RegistryConfig"]
