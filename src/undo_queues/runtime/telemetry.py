"""telelog-backed logging for undo queues.

Histories and the registry talk to telelog only through this module:
``record_event`` / ``record_queue_event`` for one-off structured lines and
``span`` / ``queue_span`` for profiled blocks. ``configure`` swaps the
active telelog config; by default it is built from ``UNDO_QUEUES_*``
environment variables.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "UNDO_QUEUES_"
DEFAULT_LOGGER_NAME = "undo_queues"
HISTORY_COMPONENT = "history"

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [
        (str(key), value if isinstance(value, str) else repr(value))
        for key, value in data.items()
    ]


def _config_from_env() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())
    config.with_console_output(not _env_flag("DISABLE_CONSOLE"))
    config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)
    if _env("LOG_FILE"):
        config.with_file_output(_env("LOG_FILE"))
    if _env_flag("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))
    return config


def _config_from_preset(preset: str) -> Any:
    config = tl.Config()
    if preset == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif preset == "production":
        # queue churn is only interesting when something fails
        config.with_min_level("WARNING")
        config.with_console_output(False)
        config.with_file_output(_env("LOG_FILE") or "undo_queues.log")
        config.with_buffering(True)
    else:
        raise ValueError(f"Unknown preset '{preset}'.")
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Adopt ``config``, a named ``preset``, or a fresh env-derived config."""

    global _CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = _config_from_preset(preset.lower())
    _CONFIG = config if config is not None else _config_from_env()
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or _env("LOGGER") or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGERS:
        if _CONFIG is None:
            configure()
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _CONFIG)
    return _LOGGERS[logger_name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    with_data = getattr(log, f"{name}_with", None)
    if with_data is not None:
        with_data(message, _pairs(payload))
        return
    method = getattr(log, name, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


def record_queue_event(
    name: str,
    queue: str,
    cursor: int,
    *,
    level: str = "info",
    logger_name: Optional[str] = None,
    **data: Any,
) -> None:
    """``record_event`` with the queue name and cursor position attached."""

    record_event(
        name,
        level=level,
        data={"queue": queue, "cursor": cursor, **data},
        logger_name=logger_name,
    )


@dataclass
class SpanHandle:
    logger: Any
    span_name: str

    def fail(self, reason: str) -> None:
        payload = {"span": self.span_name, "reason": reason}
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, optionally tracked as ``component``.

    ``metadata`` is pushed as logger context for the duration of the block.
    An exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    context = {key: str(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(logger=log, span_name=name)
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context:
                log.remove_context(key)


def queue_span(
    operation: str,
    queue: str,
    cursor: int,
    *,
    logger_name: Optional[str] = None,
):
    """Span named ``history::<operation>`` carrying the queue and cursor."""

    return span(
        f"{HISTORY_COMPONENT}::{operation}",
        logger_name=logger_name,
        component=HISTORY_COMPONENT,
        metadata={"queue": queue, "cursor": cursor},
    )


__all__ = [
    "configure",
    "get_logger",
    "record_event",
    "record_queue_event",
    "span",
    "queue_span",
]
