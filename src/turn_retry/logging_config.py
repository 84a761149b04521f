"""Structured logging configuration using structlog.

The host runtime owns the terminal, so diagnostics either go to a file next
to the audit log or to stderr; never to stdout. Only the `turn_retry`
logger tree is configured, leaving the host's own logging untouched.
"""

import logging
import sys
from pathlib import Path

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

PACKAGE_LOGGER = "turn_retry"


def add_extension_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the extension name."""
    event_dict.setdefault("extension", "turn-retry")
    return event_dict


def _shared_processors(is_production: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_extension_context,
    ]
    if is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def _build_handler(log_file: Path | None) -> logging.Handler:
    if log_file is None:
        return logging.StreamHandler(sys.stderr)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_file, encoding="utf-8")


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    log_file: Path | None = None,
) -> None:
    """Configure structlog for the extension.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: "production" renders JSON lines, anything else a plain
            key=value console format without colors
        log_file: Diagnostic log file; stderr when None

    Safe to call again on reinstall: the package handler is replaced, not
    duplicated.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"
    processors = _shared_processors(is_production)

    renderer: Processor
    if is_production:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = _build_handler(log_file)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=processors)
    )
    handler.setLevel(level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)
        old.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        destination=str(log_file) if log_file else "stderr",
    )


def bind_session_context(session_id: str | None, cwd: str | None) -> None:
    """Attach the session identity to every later log event in this context."""
    structlog.contextvars.bind_contextvars(session_id=session_id, cwd=cwd)
