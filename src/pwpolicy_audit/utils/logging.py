"""Logging setup for pwpolicy-audit.

Library modules log under the ``pwpolicy_audit`` namespace and never
configure handlers themselves; the CLI calls :func:`configure_logging`.
Drift evaluation binds the suite version and the component being compared
as context so each line can be traced back to a policy set.
"""

import logging
import sys
from typing import IO, Any

LOGGER_NAMESPACE = "pwpolicy_audit"


def _format_context_value(value: Any) -> str:
    text = str(getattr(value, "value", value))
    if not text or any(c.isspace() for c in text):
        return f'"{text}"'
    return text


class StructuredFormatter(logging.Formatter):
    """Formatter that appends bound context as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "context", None)
        if not fields:
            return message
        pairs = " ".join(f"{k}={_format_context_value(v)}" for k, v in fields.items())
        return f"{message} {pairs}"


def configure_logging(
    level: str = "INFO",
    structured: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Configure the pwpolicy_audit logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        structured: Include timestamps, logger names and bound context
        stream: Where to write; stderr by default so reports on stdout stay clean
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module, prefixed with the package namespace."""
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


class PolicyLogAdapter(logging.LoggerAdapter):
    """Logger adapter carrying policy context such as version and component."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **context: Any) -> "PolicyLogAdapter":
        """Return an adapter with additional context."""
        return PolicyLogAdapter(self.logger, {**self.extra, **context})


def get_logger_with_context(name: str, **context: Any) -> PolicyLogAdapter:
    """Get a logger that tags every message with ``context``."""
    return PolicyLogAdapter(get_logger(name), context)
