"""Routine Tracker error types."""

from __future__ import annotations


class RoutineTrackerError(Exception):
    """Base class for errors reported to the caller of an engine operation."""


class PersistenceError(RoutineTrackerError):
    # 日本語: 保存失敗。呼び出し元へ再試行可能なエラーとして返す / English: Store rejected the write; retryable
    def __init__(self, operation: str):
        super().__init__(f"Failed to save changes during {operation}. Please try again.")
        self.operation = operation


class RoutineValidationError(RoutineTrackerError):
    pass


class RoutineNotFoundError(RoutineTrackerError):
    pass
