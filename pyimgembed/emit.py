"""Source-level literal emission for :class:`~pyimgembed.convert.LiteralSequence`.

This module only formats numbers; it never decodes or converts pixels.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal, Optional

import numpy as np

from pyimgembed.convert import LiteralSequence

Style = Literal["rust", "c", "python"]

STYLES: tuple[str, ...] = ("rust", "c", "python")

_BRACKETS = {"rust": ("[", "]"), "c": ("{", "}"), "python": ("[", "]")}
_COMMENT = {"rust": "//", "c": "//", "python": "#"}
_C_TYPES = {"u8": "uint8_t", "u16": "uint16_t", "f32": "float"}


def _check_style(style: str) -> str:
    s = str(style).lower().strip()
    if s not in _BRACKETS:
        raise ValueError(f"Unknown literal style: {style!r}. Choose from: {', '.join(STYLES)}.")
    return s


def _format_float(value: float, *, trim: str) -> str:
    v = np.float32(value)
    if not np.isfinite(v):
        raise ValueError(f"Cannot emit non-finite float sample {float(v)!r} as a literal.")
    # shortest representation that round-trips the 32-bit value
    return np.format_float_positional(v, unique=True, trim=trim)


def format_sample(value, *, sample_type: str, style: Style = "rust") -> str:
    """Format a single sample as a literal token."""

    s = _check_style(style)
    if sample_type == "f32":
        if s == "rust":
            return _format_float(value, trim="-") + "f32"
        if s == "c":
            return _format_float(value, trim="0") + "f"
        return _format_float(value, trim="0")

    token = str(int(value))
    if s == "rust":
        return token + sample_type
    return token


def format_tokens(seq: LiteralSequence, *, style: Style = "rust") -> list[str]:
    stype = seq.layout.sample_type
    return [format_sample(v, sample_type=stype, style=style) for v in seq.samples.tolist()]


def format_literal(
    seq: LiteralSequence,
    *,
    style: Style = "rust",
    per_line: Optional[int] = None,
    indent: str = "    ",
) -> str:
    """Render ``seq`` as an array literal, e.g. ``[10u8, 20u8, 30u8]``.

    ``per_line`` wraps the literal onto several lines with that many samples
    per line; by default the literal stays on a single line.
    """

    s = _check_style(style)
    open_b, close_b = _BRACKETS[s]
    tokens = format_tokens(seq, style=s)

    if per_line is None or not tokens:
        return open_b + ", ".join(tokens) + close_b

    step = int(per_line)
    if step <= 0:
        raise ValueError(f"per_line must be positive, got {per_line!r}")
    lines = [indent + ", ".join(tokens[i : i + step]) for i in range(0, len(tokens), step)]
    return open_b + "\n" + ",\n".join(lines) + "\n" + close_b


def _identifier(text: str) -> str:
    name = re.sub(r"[^0-9A-Za-z_]", "_", str(text))
    if not name:
        return "image"
    if name[0].isdigit():
        name = "_" + name
    return name


def symbol_name(path: str | Path) -> str:
    """Derive an identifier from an image file name (``logo-2x.png`` -> ``logo_2x``)."""

    return _identifier(Path(str(path)).stem)


def render_declaration(
    seq: LiteralSequence,
    name: str,
    *,
    style: Style = "rust",
    per_line: Optional[int] = None,
    source: Optional[str] = None,
) -> str:
    """Render a complete declaration: dimensions plus the sample array.

    ``source`` adds a leading comment naming where the samples came from.
    """

    s = _check_style(style)
    ident = _identifier(name)
    upper = ident.upper()
    stype = seq.layout.sample_type
    literal = format_literal(seq, style=s, per_line=per_line)

    lines: list[str] = []
    if source is not None:
        lines.append(f"{_COMMENT[s]} {source} ({seq.layout.value}, {seq.width}x{seq.height})")

    if s == "rust":
        lines.append(f"pub const {upper}_WIDTH: usize = {seq.width};")
        lines.append(f"pub const {upper}_HEIGHT: usize = {seq.height};")
        lines.append(f"pub const {upper}: [{stype}; {len(seq)}] = {literal};")
    elif s == "c":
        lines.append(f"#define {upper}_WIDTH {seq.width}")
        lines.append(f"#define {upper}_HEIGHT {seq.height}")
        lines.append(f"static const {_C_TYPES[stype]} {ident.lower()}[{len(seq)}] = {literal};")
    else:
        lines.append(f"{upper}_WIDTH = {seq.width}")
        lines.append(f"{upper}_HEIGHT = {seq.height}")
        lines.append(f"{upper} = {literal}")

    return "\n".join(lines) + "\n"
