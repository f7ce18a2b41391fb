"""Operation boundary error handling.

``tree_operation`` wraps every public operation so that nothing escapes to
the caller: request validation errors, tree errors and unexpected I/O
failures all come back as a failed result model carrying an ``ErrorInfo``.
"""

from __future__ import annotations

import functools
import logging
import os
from pathlib import Path
from typing import Any
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import FileSystemError
from .exceptions import InvalidRequestError
from .exceptions import TreeError
from .logger_config import ErrorCategory
from .logger_config import log_structured_error
from .logger_config import log_tree_call
from .models import ErrorInfo
from .models import OperationStatus

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=OperationStatus)


def error_info(error: TreeError) -> ErrorInfo:
    return ErrorInfo(
        kind=error.kind,
        error_code=error.error_code,
        status_code=error.status_code,
        details=error.details,
    )


def as_tree_error(error: BaseException, operation: str) -> TreeError:
    """Classify any exception as a TreeError."""
    if isinstance(error, TreeError):
        return error
    if isinstance(error, PydanticValidationError):
        first = error.errors()[0] if error.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ()))
        reason = first.get("msg", str(error))
        return InvalidRequestError(f"Invalid request: {field}: {reason}", field=field or None)
    if isinstance(error, OSError):
        file_path = error.filename or ""
        return FileSystemError(operation, os.fspath(file_path), error.strerror or str(error))
    return TreeError(
        f"Unexpected error in {operation}: {error}",
        error_code="UNEXPECTED_ERROR",
        details={"exception_type": type(error).__name__},
    )


def failure_result(result_model: type[ResultT], error: TreeError, **fields: Any) -> ResultT:
    """Build a failed result; ``fields`` report how far the operation got."""
    return result_model(success=False, message=error.user_message, error=error_info(error), **fields)


def log_operation_start(operation: str, **context: Any) -> None:
    logger.debug("Starting %s: %s", operation, context)


def log_operation_success(operation: str, message: str) -> None:
    logger.info("%s: %s", operation, message)


def tree_operation(operation_name: str, request_model: type[BaseModel], result_model: type[ResultT]):
    """Decorator for the public operations.

    The wrapped function is called as ``func(root, request)`` with a validated
    request model. Callers may pass the model, a dict, or keyword fields.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(root: str | os.PathLike, request: BaseModel | dict | None = None, **fields: Any):
            try:
                if request is None:
                    request = request_model(**fields)
                elif isinstance(request, dict):
                    request = request_model(**request)
                if not isinstance(request, request_model):
                    raise InvalidRequestError(
                        f"{operation_name} expects {request_model.__name__}",
                        field="request",
                        value=type(request).__name__,
                    )
                log_operation_start(operation_name, root=str(root))
                result = func(Path(root), request)
                if result.success:
                    log_operation_success(operation_name, result.message)
                return result
            except Exception as e:
                error = as_tree_error(e, operation_name)
                category = ErrorCategory.WARNING if error.status_code < 500 else ErrorCategory.ERROR
                log_structured_error(
                    category=category,
                    message=f"{operation_name} failed: {error.message}",
                    exception=e if error.status_code >= 500 else None,
                    context={"error_kind": error.kind.value, "root": str(root)},
                    operation=operation_name,
                )
                return failure_result(result_model, error)

        return log_tree_call(wrapper)

    return decorator
