"""
Logging setup for Argument.

structlog renders through the stdlib logging tree, so records from
SQLAlchemy or Pillow end up in the same JSONL file as our own. Settings come
from config/settings/logging.yaml; the CLI flags override them.

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Note saved", note_id=note.id)

Records written by command handlers carry ``source="cli"`` through
``log_with_source``.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import Processor

from argument.core.config import find_project_root, get_app_config
from argument.core.config_schema import FileHandlerSchema, LoggingSchema

LOG_SOURCES = frozenset({"cli", "internal"})

# Chatty third-party loggers held at WARNING regardless of our level.
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "PIL")


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(renderer: Processor, chain: list[Processor]) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=chain)


def _file_handler(settings: FileHandlerSchema, formatter: logging.Formatter) -> logging.Handler:
    """Rotating JSONL handler; relative paths resolve against the project root."""
    log_path = find_project_root() / settings.path
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=settings.max_bytes,
        backupCount=settings.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
    config: LoggingSchema | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Args:
        level: Log level name, overrides ``logging.yaml``.
        format_type: ``json`` or ``console`` for the stderr handler.
        enable_console: Write records to stderr.
        enable_file_logging: Write records to the rotating JSONL file.
        config: Logging settings to use instead of the project's YAML.

    Raises:
        ValueError: If the level name is not a logging level.
    """
    settings = config if config is not None else get_app_config().logging

    level_name = (level or settings.level).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    console_enabled = settings.handlers.console.enabled if enable_console is None else enable_console
    file_enabled = settings.handlers.file.enabled if enable_file_logging is None else enable_file_logging

    chain = _shared_processors()
    structlog.configure(
        processors=chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = _formatter(structlog.processors.JSONRenderer(), chain)

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if console_enabled:
        if (format_type or settings.format) == "console":
            console_formatter = _formatter(structlog.dev.ConsoleRenderer(colors=True), chain)
        else:
            console_formatter = json_formatter
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(console_formatter)
        root.addHandler(stream)

    if file_enabled:
        root.addHandler(_file_handler(settings.handlers.file, json_formatter))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log ``message`` tagged with where it came from.

    Raises:
        ValueError: If ``source`` is not one of ``LOG_SOURCES``.
        AttributeError: If ``level`` is not a logger method.
    """
    if source not in LOG_SOURCES:
        raise ValueError(f"Unknown log source: {source}")
    getattr(logger, level.lower())(message, source=source, **kwargs)
