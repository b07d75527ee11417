"""Graceful error handling for CLI failures with user-friendly messages."""
from __future__ import annotations

import sys
import structlog

logger = structlog.get_logger(__name__)


class ExplorerError(Exception):
    """Base class for explorer errors with user-friendly messaging."""

    def __init__(self, error_type: str, message: str, details: str = ""):
        self.error_type = error_type
        self.message = message
        self.details = details
        super().__init__(self.message)

    def get_user_message(self) -> str:
        """Return a user-friendly error message."""
        msg = f"\nError: {self.message}"
        if self.details:
            msg += f"\n   Details: {self.details}"
        return msg


class DatasetNotFoundError(ExplorerError):
    """The regulations export could not be found or read."""

    def __init__(self, path: str):
        super().__init__(
            error_type="DATASET_NOT_FOUND",
            message=f"Regulations file not found: {path}",
            details="Pass --input or set REGULATION_EXPLORER_DATA to the CSV export",
        )


class RegulationNotFoundError(ExplorerError):
    """No loaded record has the requested id."""

    def __init__(self, meta_id: str):
        super().__init__(
            error_type="REGULATION_NOT_FOUND",
            message=f"No regulation with id {meta_id}",
            details="Ids look like reg/0001; use the search command to list them",
        )


class InvalidPageSizeError(ExplorerError):
    """Page size from --page-size or explorer.page_size is below 1."""

    def __init__(self, page_size: int):
        super().__init__(
            error_type="INVALID_PAGE_SIZE",
            message=f"Page size must be at least 1, got {page_size}",
            details="Pass a positive --page-size or fix explorer.page_size in the config",
        )


def exit_with_error(error: ExplorerError, context: str = "") -> int:
    """Log error and exit gracefully with user-friendly message."""
    logger.error(
        "command_failed",
        error_type=error.error_type,
        message=error.message,
        details=error.details,
        context=context,
    )

    print(error.get_user_message(), file=sys.stderr)
    print("", file=sys.stderr)
    return 1
