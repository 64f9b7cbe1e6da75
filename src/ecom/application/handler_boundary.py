"""Error boundary for use-case handlers.

Domain errors pass through unchanged.  Anything else (a broken data file,
an OS error, a bug) is logged once with its traceback and re-raised as an
``OperationFailedError`` carrying a stable code and the original message.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, TypeVar

from ecom.domain.exceptions import DomainException, OperationFailedError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


def handler_boundary(error_code: str) -> Callable[[F], F]:
    """Decorate a ``handle`` method.

    Example:
        class UpdateCategoryParentHandler:
            @handler_boundary("Category.UpdateParentFailed")
            def handle(self, ...):
                ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except DomainException:
                raise
            except Exception as exc:
                logger.exception("%s - unexpected error: %s", error_code, exc)
                raise OperationFailedError(
                    f"Operation failed: {exc}", code=error_code
                ) from exc

        return wrapper  # type: ignore[return-value]

    return decorator
