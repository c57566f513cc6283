"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for the hash tree and its console.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree access errors
    LEAF_INDEX_OUT_OF_RANGE = "LEAF_INDEX_OUT_OF_RANGE"
    EMPTY_TREE = "EMPTY_TREE"

    # Proof errors
    PROOF_LENGTH_MISMATCH = "PROOF_LENGTH_MISMATCH"

    # Console errors
    PARSE_ERROR = "PARSE_ERROR"
    ARGUMENT_COUNT = "ARGUMENT_COUNT"
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Error model for structured error reporting.

    The console serializes this model when running with JSON output,
    so failures can be consumed by scripts driving the session.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_INDEX_OUT_OF_RANGE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hash tree errors.

    Every condition raised here is local and recoverable: callers
    report it and carry on with the same tree.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASH_TREE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class LeafIndexError(HashTreeException, IndexError):
    """Raised when a leaf index falls outside the tree's current capacity."""

    def __init__(
        self,
        index: int,
        capacity: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        full_details["capacity"] = capacity
        super().__init__(
            message=f"Leaf index {index} out of range for capacity {capacity}",
            code=ErrorCodes.LEAF_INDEX_OUT_OF_RANGE,
            details=full_details,
        )
        self.index = index
        self.capacity = capacity


class EmptyTreeError(HashTreeException):
    """Raised when the root, a proof or a verification is requested before any insertion."""

    def __init__(self, operation: str = "query") -> None:
        super().__init__(
            message=f"Cannot {operation} an empty tree",
            code=ErrorCodes.EMPTY_TREE,
            details={"operation": operation},
        )
        self.operation = operation


class ProofLengthMismatch(HashTreeException, ValueError):
    """Raised when a proof is shorter or longer than the tree depth."""

    def __init__(self, actual: int, expected: int) -> None:
        super().__init__(
            message=f"Proof has {actual} elements, tree depth is {expected}",
            code=ErrorCodes.PROOF_LENGTH_MISMATCH,
            details={"actual": actual, "expected": expected},
        )
        self.actual = actual
        self.expected = expected


class ParseError(HashTreeException, ValueError):
    """Raised by the console when a numeric argument cannot be parsed."""

    def __init__(self, value: str, expected: str = "non-negative integer") -> None:
        super().__init__(
            message=f"Could not parse {value!r} as a {expected}",
            code=ErrorCodes.PARSE_ERROR,
            details={"value": value, "expected": expected},
        )
        self.value = value


class ArgumentCountError(HashTreeException):
    """Raised by the console when a command gets the wrong number of arguments."""

    def __init__(self, usage: str) -> None:
        super().__init__(
            message=f"The amount of arguments is not the expected, usage: {usage}",
            code=ErrorCodes.ARGUMENT_COUNT,
            details={"usage": usage},
        )
        self.usage = usage


class UnknownCommandError(HashTreeException):
    """Raised by the console for a command it does not recognise."""

    def __init__(self, command: str) -> None:
        super().__init__(
            message="Command not recognized, type --help to see the available commands",
            code=ErrorCodes.UNKNOWN_COMMAND,
            details={"command": command},
        )
        self.command = command
