"""Exception hierarchy for notegraph.

Every error raised by the core is recoverable: it is raised before any
state changes, so the graph is never left half-updated.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Machine-readable error identifiers."""

    NOTE_NOT_FOUND = 1001
    NAME_COLLISION = 1002
    LINK_TARGET_MISSING = 2001
    NOT_LINKED = 2002
    CONFIG_INVALID = 6001


class NotegraphError(Exception):
    """Base class for all notegraph errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "code": self.code.value,
            "code_name": self.code.name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class NoteNotFoundError(NotegraphError):
    """Raised when a name does not belong to any indexed note."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"No note named '{name}'",
            code=ErrorCode.NOTE_NOT_FOUND,
            details={"name": name},
        )
        self.name = name


class NameCollisionError(NotegraphError):
    """Raised when creating or renaming onto a name that is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"A note named '{name}' already exists",
            code=ErrorCode.NAME_COLLISION,
            details={"name": name},
        )
        self.name = name


class LinkTargetMissingError(NotegraphError):
    """Raised when following a link whose target is not an indexed note."""

    def __init__(self, target: str, source: str | None = None) -> None:
        details: dict[str, Any] = {"target": target}
        if source is not None:
            details["source"] = source
        super().__init__(
            f"Link target '{target}' does not exist",
            code=ErrorCode.LINK_TARGET_MISSING,
            details=details,
        )
        self.target = target
        self.source = source


class NotLinkedError(NotegraphError):
    """Raised when following a note that is not linked with the focused one."""

    def __init__(self, target: str, source: str) -> None:
        super().__init__(
            f"'{target}' is not linked with '{source}'",
            code=ErrorCode.NOT_LINKED,
            details={"target": target, "source": source},
        )
        self.target = target
        self.source = source


class ConfigError(NotegraphError):
    """Raised for settings files with values of the wrong type."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(
            message,
            code=ErrorCode.CONFIG_INVALID,
            details={"key": key} if key else None,
        )
        self.key = key
