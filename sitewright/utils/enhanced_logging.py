# sitewright/utils/enhanced_logging.py
from typing import Dict, Any, Optional

from loguru import logger as _root_logger


class EnhancedLogger:
    """Logger with context tracking, backed by loguru."""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self._name = name
        self._context: Dict[str, Any] = dict(context or {})

    def add_context(self, key: str, value: Any) -> None:
        """Add context information for subsequent log messages."""
        self._context[key] = value

    def remove_context(self, key: str) -> None:
        """Remove context information."""
        if key in self._context:
            del self._context[key]

    def clear_context(self) -> None:
        """Clear all context information."""
        self._context.clear()

    def with_context(self, **context) -> 'EnhancedLogger':
        """Create a new logger with added context."""
        return EnhancedLogger(self._name, {**self._context, **context})

    @property
    def context(self) -> Dict[str, Any]:
        """A copy of the bound context."""
        return dict(self._context)

    def _bound(self, extra: Optional[Dict[str, Any]] = None):
        context = {**self._context}
        if extra:
            context.update(extra)
        # depth=1 skips the public level method that logs through the bound logger
        return _root_logger.opt(depth=1).bind(logger_name=self._name, **context)

    def debug(self, msg: str, *args, **kwargs) -> None:
        """Log a debug message with context."""
        extra = kwargs.pop("extra", None)
        self._bound(extra).debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        """Log an info message with context."""
        extra = kwargs.pop("extra", None)
        self._bound(extra).info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        """Log a warning message with context."""
        extra = kwargs.pop("extra", None)
        self._bound(extra).warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        """Log an error message with context."""
        extra = kwargs.pop("extra", None)
        self._bound(extra).error(msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        """Log a critical message with context."""
        extra = kwargs.pop("extra", None)
        self._bound(extra).critical(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs) -> None:
        """Log an error message together with the active exception's traceback."""
        extra = kwargs.pop("extra", None)
        self._bound(extra).exception(msg, *args, **kwargs)

    @property
    def name(self) -> str:
        """Get the logger name."""
        return self._name
