"""
Structured error types for cargo-examples.

Every fatal condition of a run is raised as an ``ExamplesError`` subclass.
Library modules only raise; the CLI layer is the single place that catches
them, logs ``to_dict()`` and turns ``exit_code`` into the process status.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                      ExamplesError                        │
        │          (category, exit_code, context, cause)            │
        ├──────────────────────────────────────────────────────────┤
        │                                                           │
        │  ConfigError            DiscoveryError    ExecutionError  │
        │  (CONFIG, exit 2)       (DISCOVERY, 3)    (EXECUTION,     │
        │       │                                    child's code)  │
        │  ManifestNotFoundError                                    │
        │  ManifestParseError                                       │
        └──────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Swallow the original ``OSError`` / ``TOMLDecodeError``
    ✅ DO: Pass it as ``cause=`` so the chain survives

    ❌ DON'T: Call ``sys.exit`` from library code
    ✅ DO: Raise and let ``cargo_examples.cli`` decide the exit status

Usage:
    from cargo_examples.errors import DiscoveryError

    try:
        entries = os.scandir(examples_dir)
    except OSError as e:
        raise DiscoveryError("cannot read examples directory", cause=e).with_context(
            path=str(examples_dir)
        )
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Error categories, used as the ``category`` field of structured logs.

    Attributes:
        CONFIG: Bad ``--manifest-path``, unparsable ``Cargo.toml``
        DISCOVERY: ``examples/`` directory missing or unreadable
        EXECUTION: ``cargo`` failed to start or exited non-zero
        INTERNAL: Bugs, unexpected state
    """

    CONFIG = "CONFIG"
    DISCOVERY = "DISCOVERY"
    EXECUTION = "EXECUTION"
    INTERNAL = "INTERNAL"


class ExamplesError(Exception):
    """
    Base exception for all cargo-examples errors.

    Attributes:
        message: Human readable description, printed by the CLI
        category: ErrorCategory of this error
        exit_code: Process exit status the CLI should use
        context: Extra metadata (paths, example name, command line)
        cause: Underlying exception, also chained as ``__cause__``
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_exit_code: int = 1

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        exit_code: int | None = None,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.exit_code = exit_code if exit_code is not None else self.default_exit_code
        self.context = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ExamplesError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ConfigError("bad manifest").with_context(path="Cargo.toml")
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "exit_code": self.exit_code,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(ExamplesError):
    """
    Configuration error, reported before any example runs.

    Uses exit status 2, the same status click uses for usage errors.
    """

    default_category = ErrorCategory.CONFIG
    default_exit_code = 2


class ManifestNotFoundError(ConfigError):
    """``--manifest-path`` does not point to an existing regular file."""

    def __init__(self, path: Any, message: str | None = None):
        self.path = path
        super().__init__(
            message or "the manifest-path must be a path to a Cargo.toml file",
            context={"path": str(path)},
        )


class ManifestParseError(ConfigError):
    """``Cargo.toml`` could not be read or is not valid TOML."""

    def __init__(self, path: Any, cause: BaseException | None = None):
        self.path = path
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"failed to parse manifest at {path}{detail}",
            context={"path": str(path)},
            cause=cause,
        )


# =============================================================================
# DISCOVERY ERRORS
# =============================================================================


class DiscoveryError(ExamplesError):
    """The examples directory is missing or cannot be read."""

    default_category = ErrorCategory.DISCOVERY
    default_exit_code = 3


# =============================================================================
# EXECUTION ERRORS
# =============================================================================


class ExecutionError(ExamplesError):
    """
    ``cargo`` could not be launched or exited with a non-zero status.

    The exit code mirrors the child's when it is a positive integer; a
    launch failure or a signal-terminated child maps to 1.
    """

    default_category = ErrorCategory.EXECUTION

    def __init__(
        self,
        message: str,
        *,
        example: str,
        returncode: int | None = None,
        command: list[str] | None = None,
        cause: BaseException | None = None,
    ):
        self.example = example
        self.returncode = returncode
        self.command = list(command or [])
        exit_code = returncode if returncode is not None and returncode > 0 else 1
        context: dict[str, Any] = {"example": example}
        if returncode is not None:
            context["returncode"] = returncode
        if self.command:
            context["command"] = " ".join(self.command)
        super().__init__(message, exit_code=exit_code, context=context, cause=cause)


__all__ = [
    "ErrorCategory",
    "ExamplesError",
    "ConfigError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "DiscoveryError",
    "ExecutionError",
]
