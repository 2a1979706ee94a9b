"""Structured logging configuration for the mealcart engine."""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from mealcart.config import get_settings

# Context variables for shopping-list runs
week_ctx: ContextVar[str | None] = ContextVar("week", default=None)
recipe_id_ctx: ContextVar[str | None] = ContextVar("recipe_id", default=None)


def _context_items() -> list[tuple[str, str]]:
    items = []
    if week := week_ctx.get():
        items.append(("week", week))
    if recipe_id := recipe_id_ctx.get():
        items.append(("recipe_id", recipe_id))
    return items


class StructuredJsonFormatter(logging.Formatter):
    """JSON formatter for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        log_data.update(_context_items())

        # Add extra fields from the record
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, ensure_ascii=False)


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter with context for development."""

    def format(self, record: logging.LogRecord) -> str:
        context_parts = []
        if week := week_ctx.get():
            context_parts.append(f"week={week}")
        if recipe_id := recipe_id_ctx.get():
            context_parts.append(f"recipe={recipe_id[:8]}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        message = record.getMessage()

        formatted = f"{timestamp} | {level} | {record.name}{context_str} | {message}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that automatically includes context variables."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        extra = kwargs.get("extra", {})
        extra.update(_context_items())
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger for the given module name."""
    logger = logging.getLogger(name)
    return ContextLogger(logger, {})


def configure_logging(
    log_level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to the configured log level.
        json_format: Use JSON format for logs. If None, auto-detect based on environment.
        log_file: Optional file path to write logs to.
    """
    if json_format is None:
        json_format = os.getenv("LOG_FORMAT", "").lower() == "json" or (
            not sys.stdout.isatty() and os.getenv("ENVIRONMENT", "development") == "production"
        )

    if log_level is None:
        log_level = get_settings().log_level

    level_str = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    formatter: logging.Formatter
    if json_format:
        formatter = StructuredJsonFormatter()
    else:
        formatter = ContextualFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    module_levels = {
        "mealcart": level,
        "mealcart.normalize": level,
        "mealcart.plan": level,
    }

    for module_name, module_level in module_levels.items():
        logging.getLogger(module_name).setLevel(module_level)

    logger = get_logger(__name__)
    logger.info(
        f"Logging configured: level={level_str}, format={'json' if json_format else 'text'}"
    )


def set_context(week: str | None = None, recipe_id: str | None = None) -> None:
    """Set logging context variables."""
    if week is not None:
        week_ctx.set(week)
    if recipe_id is not None:
        recipe_id_ctx.set(recipe_id)


def clear_context() -> None:
    """Clear all logging context variables."""
    week_ctx.set(None)
    recipe_id_ctx.set(None)


class LoggingContext:
    """Context manager for setting logging context."""

    _vars: dict[str, ContextVar] = {
        "week": week_ctx,
        "recipe_id": recipe_id_ctx,
    }

    def __init__(self, week: str | None = None, recipe_id: str | None = None):
        self.week = week
        self.recipe_id = recipe_id
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LoggingContext":
        if self.week is not None:
            self._tokens["week"] = week_ctx.set(self.week)
        if self.recipe_id is not None:
            self._tokens["recipe_id"] = recipe_id_ctx.set(self.recipe_id)
        return self

    def __exit__(self, *args: Any) -> None:
        for name, token in self._tokens.items():
            self._vars[name].reset(token)
