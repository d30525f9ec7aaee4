"""
Jute Error Handling

All error codes and exception classes. Every error is a local validation
failure: none is retryable and none leaves the graph in a modified state.
"""

from enum import IntEnum
from typing import Optional, Any


class ErrorCode(IntEnum):
    """Library error codes."""

    # 1xxx - Node creation errors
    UNKNOWN_PARENT = 1001
    EMPTY_PARENT_SET = 1002

    # 2xxx - Query errors
    UNREACHABLE_TIP = 2001


class JuteError(Exception):
    """Base exception for all Jute errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# Node Creation Errors (1xxx)
# ==============================================================================

class UnknownParentError(JuteError):
    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(
            ErrorCode.UNKNOWN_PARENT,
            f"Unknown parent: {node_id}",
            {"node_id": node_id}
        )


class EmptyParentSetError(JuteError):
    def __init__(self):
        super().__init__(
            ErrorCode.EMPTY_PARENT_SET,
            "Node requires at least one parent (use create_root for roots)"
        )


# ==============================================================================
# Query Errors (2xxx)
# ==============================================================================

class UnreachableTipError(JuteError):
    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(
            ErrorCode.UNREACHABLE_TIP,
            f"Unknown tip: {node_id}",
            {"node_id": node_id}
        )
