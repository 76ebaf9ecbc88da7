from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pyimgembed.errors import RequestSyntaxError

_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL)
_RAW_STRING = re.compile(r'r(#*)"(.*?)"\1', re.DOTALL)
_ESCAPE = re.compile(r"\\(u\{[0-9A-Fa-f]{1,6}\}|x[0-7][0-9A-Fa-f]|\r?\n\s*|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", "0": "\0", "'": "'", '"': '"'}


@dataclass(frozen=True)
class ConversionRequest:
    """One ``include_img!("path"[, format])`` invocation."""

    path: str
    format: Optional[str] = None


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _unescape(body: str, *, offset: int) -> str:
    def _sub(match: re.Match) -> str:
        esc = match.group(1)
        if esc in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[esc]
        if esc.startswith("u{"):
            return chr(int(esc[2:-1], 16))
        if esc.startswith("x") and len(esc) == 3:
            return chr(int(esc[1:], 16))
        if esc.startswith("\n") or esc.startswith("\r\n"):
            # line continuation
            return ""
        raise RequestSyntaxError(
            f"unknown character escape: \\{esc}", offset=offset + 1 + match.start()
        )

    return _ESCAPE.sub(_sub, body)


def _parse_path(text: str, pos: int) -> tuple[str, int]:
    m = _RAW_STRING.match(text, pos)
    if m is not None:
        return m.group(2), m.end()
    m = _STRING.match(text, pos)
    if m is not None:
        return _unescape(m.group(1), offset=pos), m.end()
    raise RequestSyntaxError("expected a string literal image path", offset=pos)


def parse_request(text: str) -> ConversionRequest:
    """Parse an argument list of the form ``"path"`` or ``"path", format``.

    Raises
    ------
    RequestSyntaxError
        With ``offset`` pointing at the first offending character.
    """

    pos = _skip_ws(text, 0)
    path, pos = _parse_path(text, pos)
    pos = _skip_ws(text, pos)
    if pos >= len(text):
        return ConversionRequest(path=path)

    if text[pos] != ",":
        raise RequestSyntaxError(f"expected `,` after the image path, found {text[pos]!r}", offset=pos)
    pos = _skip_ws(text, pos + 1)

    m = _IDENT.match(text, pos)
    if m is None:
        raise RequestSyntaxError("expected a pixel format identifier", offset=pos)
    fmt = m.group(0)

    pos = _skip_ws(text, m.end())
    if pos < len(text):
        raise RequestSyntaxError(f"unexpected token {text[pos]!r}", offset=pos)
    return ConversionRequest(path=path, format=fmt)


def resolve_request_path(path: str | Path, base_dir: str | Path | None = None) -> Path:
    """Resolve ``path`` against ``base_dir`` (the invoking file's directory)."""

    p = Path(path)
    if p.is_absolute() or base_dir is None:
        return p
    return Path(base_dir) / p
