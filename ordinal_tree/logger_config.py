import datetime
import functools
import json
import logging
import traceback
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any


class ErrorCategory(Enum):
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


_CATEGORY_LEVELS = {
    ErrorCategory.CRITICAL: logging.CRITICAL,
    ErrorCategory.ERROR: logging.ERROR,
    ErrorCategory.WARNING: logging.WARNING,
    ErrorCategory.INFO: logging.INFO,
}

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = set(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


class StructuredLogFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, tz=datetime.timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            log_entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


# --- Logging Setup ---
tree_call_logger = logging.getLogger("tree_call_logger")
tree_call_logger.setLevel(logging.INFO)
# Prevent logs from propagating to the root logger if not desired
tree_call_logger.propagate = False

error_logger = logging.getLogger("error_logger")
error_logger.setLevel(logging.INFO)
error_logger.propagate = False
if not error_logger.handlers:
    _error_handler = logging.StreamHandler()
    _error_handler.setFormatter(StructuredLogFormatter())
    error_logger.addHandler(_error_handler)


def configure_logging(log_file: str | Path | None, level: str = "INFO", structured: bool = True) -> None:
    """Apply logging settings.

    A rotating file handler is attached to the call logger when ``log_file``
    is given (maxBytes: 10MB per file, backupCount: 5 files, total ~50MB).
    ``structured=False`` switches the error logger to plain text lines.
    """
    tree_call_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in error_logger.handlers:
        if structured:
            handler.setFormatter(StructuredLogFormatter())
        else:
            handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    for handler in list(tree_call_logger.handlers):
        if isinstance(handler, RotatingFileHandler):
            tree_call_logger.removeHandler(handler)
            handler.close()
    if log_file is None:
        return

    log_path = Path(log_file).resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(log_path, maxBytes=10 * 1024 * 1024, backupCount=5)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    file_handler.setFormatter(formatter)
    tree_call_logger.addHandler(file_handler)


def log_structured_error(
    category: ErrorCategory,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    operation: str | None = None,
    **extra_fields: Any,
) -> None:
    """Log an error with a category, operation name and context fields."""
    extra: dict[str, Any] = {"error_category": category.value}
    if operation:
        extra["operation"] = operation
    if context:
        extra.update(context)
    extra.update(extra_fields)
    if exception is not None:
        extra["exception_type"] = type(exception).__name__

    error_logger.log(
        _CATEGORY_LEVELS[category],
        message,
        extra=extra,
        exc_info=exception is not None,
    )


def safe_operation(
    operation_name: str,
    func,
    *args,
    error_category: ErrorCategory = ErrorCategory.ERROR,
    **kwargs,
) -> tuple[bool, Any, Exception | None]:
    """Run ``func`` and return ``(success, result, error)`` instead of raising."""
    try:
        return True, func(*args, **kwargs), None
    except Exception as e:
        log_structured_error(
            category=error_category,
            message=f"Operation '{operation_name}' failed: {e}",
            exception=e,
            operation=operation_name,
        )
        return False, None, e


def _compact(value: Any) -> str:
    if hasattr(value, "model_dump_json"):
        return value.model_dump_json(indent=None, exclude_none=True)
    return repr(value)


# --- Decorator for Logging Tree Operation Calls ---
def log_tree_call(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        func_name = getattr(func, "__name__", "unknown_function")

        try:
            logged_args = [_compact(arg) for arg in args]
            logged_kwargs = {k: _compact(v) for k, v in kwargs.items()}
            arg_str = f"args={logged_args}, kwargs={logged_kwargs}"
        except Exception as e:
            arg_str = f"args/kwargs logging error: {e}"

        tree_call_logger.info(f"Calling operation: {func_name} with {arg_str}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            tree_call_logger.error(f"Operation {func_name} raised exception: {e}", exc_info=True)
            log_structured_error(
                category=ErrorCategory.ERROR,
                message=f"Operation {func_name} raised an unhandled exception",
                exception=e,
                operation="tree_operation",
                function=func_name,
            )
            raise

        try:
            result_str = _compact(result)
        except Exception as e:
            result_str = f"Result logging error: {e}"
        tree_call_logger.info(f"Operation {func_name} returned: {result_str}")
        return result

    return wrapper
