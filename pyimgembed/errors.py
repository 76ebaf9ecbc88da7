"""Typed failures raised while turning an image into a literal array.

Every error carries the ``stage`` that produced it so callers (CLIs, template
expansion) can report where a request went wrong.
"""

from __future__ import annotations

from pathlib import Path


class EmbedError(Exception):
    """Base class for all pyimgembed failures."""

    stage = "embed"


class UnknownFormatError(EmbedError, ValueError):
    """Requested pixel format token matches no known layout alias."""

    stage = "format"

    def __init__(self, token: str, *, supported: list[str] | None = None) -> None:
        self.token = str(token)
        msg = f"Unknown pixel format: {self.token!r}."
        if supported:
            msg += f" Supported: {', '.join(supported)}."
        super().__init__(msg)


class DecodeError(EmbedError):
    """The image file could not be read or decoded."""

    stage = "decode"

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = str(reason)
        super().__init__(f"couldn't read {self.path}: {self.reason}")


class RequestSyntaxError(EmbedError, ValueError):
    """An ``include_img!`` argument list could not be parsed."""

    stage = "request"

    def __init__(self, message: str, *, offset: int) -> None:
        self.offset = int(offset)
        super().__init__(message)


class ExpansionError(EmbedError):
    """A macro call inside a template failed; wraps the underlying error."""

    def __init__(self, cause: EmbedError, *, source: str, line: int, column: int) -> None:
        self.cause = cause
        self.source = str(source)
        self.line = int(line)
        self.column = int(column)
        self.stage = cause.stage
        super().__init__(f"{self.source}:{self.line}:{self.column}: {cause}")
