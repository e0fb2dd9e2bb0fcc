"""structlog setup for the console.

Every event goes through the same chain: request-scoped context, level,
logger name and an ISO timestamp. Only the final renderer differs between
``console`` output (local work) and ``json`` output (deployed instances,
where each line also carries the app, environment and organization).
"""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from charity_console.config import Settings, get_settings

# Chatty libraries that stay at INFO or above even when we log at DEBUG.
QUIET_LOGGERS = (
    "httpcore",
    "httpx",
    "uvicorn.access",
    "google_genai",
    "google.auth",
    "google.api_core",
    "urllib3",
    "asyncio",
)

FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def _uppercase_level(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    level = "warning" if method_name == "warn" else method_name
    event_dict["level"] = level.upper()
    return event_dict


def _stamp_deployment(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag JSON events with where they came from."""
    settings = get_settings()
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("environment", settings.environment.value)
    event_dict.setdefault("organization", settings.organization_name)
    return event_dict


def _shared_chain(json_output: bool) -> list[Processor]:
    chain: list[Processor] = [structlog.contextvars.merge_contextvars]
    if json_output:
        chain += [_uppercase_level, _stamp_deployment]
    else:
        chain.append(structlog.stdlib.add_log_level)
    chain += [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    return chain


def build_processors(log_format: str) -> list[Processor]:
    """Return the full processor chain for ``console`` or ``json`` output."""
    if log_format == "json":
        return _shared_chain(json_output=True) + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return _shared_chain(json_output=False) + [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Wire structlog onto the stdlib root logger.

    Called once from the API lifespan, before the first request is logged.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.value)

    structlog.configure(
        processors=build_processors(settings.log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    if settings.log_file is not None:
        _attach_file_handler(settings.log_file, level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


def _attach_file_handler(path: Path, level: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    logging.getLogger().addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Module-level logger, e.g. ``logger = get_logger(__name__)``.

    Events are snake_case verbs with keyword fields::

        logger.info("family_suspended", family_id=family.id)
    """
    return structlog.stdlib.get_logger(name)


def bind_context(**values: Any) -> None:
    """Attach fields (request id, namespace) to every event in this context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
