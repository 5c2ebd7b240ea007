"""Custom exception hierarchy for pyrtdb."""

from __future__ import annotations

from typing import Any


class RtdbError(Exception):
    """Base exception for all pyrtdb errors."""


class RtdbConfigError(RtdbError):
    """Invalid configuration or an undecodable target type."""


def format_path(path: tuple[str | int, ...]) -> str:
    """Render a decode location as ``a.b.0`` (``<root>`` when empty)."""
    if not path:
        return "<root>"
    return ".".join(str(part) for part in path)


class RtdbDecodeError(RtdbError):
    """A snapshot value could not be decoded into the requested type."""

    def __init__(
        self,
        message: str,
        *,
        path: tuple[str | int, ...] = (),
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.path = path
        self.details = details or []
        super().__init__(message)


class ValueNotFoundError(RtdbDecodeError):
    """A required value is missing or null.

    Raised for a declared field that is still absent after default
    filling, and for an entirely absent snapshot when the target type
    is not optional.
    """


class TypeMismatchError(RtdbDecodeError):
    """A present value does not have the shape the target type expects."""

    def __init__(
        self,
        message: str,
        *,
        path: tuple[str | int, ...] = (),
        expected: str = "",
        actual: str = "",
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message, path=path, details=details)
