"""Error handling middleware: log, count and re-raise."""

import logging
import traceback
from collections import Counter
from collections.abc import Callable
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import MiddlewareContext

from rollout_mcp.errors import PreconditionError
from rollout_mcp.middleware.base import RolloutMiddleware

ErrorCallback = Callable[[Exception, MiddlewareContext], None]

# Raised for bad requests; the server itself is fine
EXPECTED_ERRORS: tuple[type[Exception], ...] = (ToolError, PreconditionError)


def _target(context: MiddlewareContext) -> str:
    """Tool name or resource URI the request was for."""
    message = context.message
    name = getattr(message, "name", None) or getattr(message, "uri", None)
    return f"{context.method} {name}" if name else str(context.method)


class ErrorHandlingMiddleware(RolloutMiddleware):
    """Logs errors by severity, counts them per type and re-raises.

    Rejected requests (ToolError, precondition failures) are logged at
    WARNING without a traceback. Anything else is a server-side error and
    is logged at ERROR.

    Example:
        >>> def on_error(exc, ctx):
        ...     print(f"Error in {ctx.method}: {exc}")
        >>> middleware = ErrorHandlingMiddleware(error_callback=on_error)
        >>> mcp.add_middleware(middleware)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
        error_callback: ErrorCallback | None = None,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Append tracebacks to unexpected error logs.
            error_callback: Called with (exception, context) on each error.
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self.error_callback = error_callback
        self._error_counts: Counter[str] = Counter()

    def get_error_stats(self) -> dict[str, int]:
        """Error counts keyed by exception type name."""
        return dict(self._error_counts)

    def reset_stats(self) -> None:
        """Reset error statistics."""
        self._error_counts.clear()

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Pass the request on; log and count whatever it raises."""
        try:
            return await call_next(context)
        except Exception as e:
            error_type = type(e).__name__
            self._error_counts[error_type] += 1
            target = _target(context)

            if isinstance(e, EXPECTED_ERRORS):
                self.logger.warning("Rejected %s: %s", target, e)
            elif self.include_traceback:
                self.logger.error(
                    "Error in %s: %s: %s\n%s", target, error_type, e, traceback.format_exc()
                )
            else:
                self.logger.error("Error in %s: %s: %s", target, error_type, e)

            if self.error_callback:
                try:
                    self.error_callback(e, context)
                except Exception as callback_error:
                    self.logger.warning("Error callback failed: %s", callback_error)

            raise
