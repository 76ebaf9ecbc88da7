"""Template expansion of ``include_img!(...)`` calls.

Any text file (Rust, C, Python, ...) can contain calls such as::

    const LOGO: &[u8] = &include_img!("./logo.png", rgba8);

:func:`expand_text` replaces each call with the array literal of the image,
resolving relative paths against the template's directory.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from pyimgembed.api import run_request
from pyimgembed.emit import Style, format_literal
from pyimgembed.errors import EmbedError, ExpansionError, RequestSyntaxError
from pyimgembed.io.image import Backend
from pyimgembed.request import parse_request

logger = logging.getLogger(__name__)

DEFAULT_MACRO = "include_img!"

_CLOSERS = {"(": ")", "[": "]", "{": "}"}
_RAW_STRING = re.compile(r'r(#*)"', re.DOTALL)


def _line_col(text: str, offset: int) -> tuple[int, int]:
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _skip_string(text: str, pos: int) -> int:
    """Return the index just past the string literal starting at ``pos``."""

    raw = _RAW_STRING.match(text, pos)
    if raw is not None:
        end = text.find('"' + raw.group(1), raw.end())
        return len(text) if end < 0 else end + 1 + len(raw.group(1))

    i = pos + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i + 1
        i += 1
    return len(text)


def _find_close(text: str, open_pos: int) -> int:
    """Index of the delimiter closing the one at ``open_pos`` (-1 if unclosed)."""

    opener = text[open_pos]
    closer = _CLOSERS[opener]
    depth = 0
    i = open_pos
    while i < len(text):
        ch = text[i]
        if ch == '"' or (ch == "r" and _RAW_STRING.match(text, i)):
            i = _skip_string(text, i)
            continue
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _is_call_start(text: str, pos: int) -> bool:
    return pos == 0 or not (text[pos - 1].isalnum() or text[pos - 1] == "_")


def expand_text(
    text: str,
    *,
    base_dir: str | Path | None = None,
    source: str = "<template>",
    macro: str = DEFAULT_MACRO,
    style: Style = "rust",
    per_line: Optional[int] = None,
    backend: Backend = "pillow",
) -> str:
    """Replace every ``macro(...)`` call in ``text`` with its array literal.

    Raises
    ------
    ExpansionError
        Wrapping the first failing call, with its 1-based line and column.
    """

    out: list[str] = []
    pos = 0
    count = 0
    while True:
        start = text.find(macro, pos)
        if start < 0:
            break
        after = start + len(macro)
        open_pos = after
        while open_pos < len(text) and text[open_pos].isspace():
            open_pos += 1
        if not _is_call_start(text, start) or open_pos >= len(text) or text[open_pos] not in _CLOSERS:
            out.append(text[pos:after])
            pos = after
            continue

        try:
            close_pos = _find_close(text, open_pos)
            if close_pos < 0:
                raise RequestSyntaxError(f"unclosed `{macro}` call", offset=0)
            inner_start = open_pos + 1
            try:
                request = parse_request(text[inner_start:close_pos])
            except RequestSyntaxError as exc:
                line, column = _line_col(text, inner_start + exc.offset)
                raise ExpansionError(exc, source=source, line=line, column=column) from exc
            seq = run_request(request, base_dir=base_dir, backend=backend)
        except ExpansionError:
            raise
        except EmbedError as exc:
            line, column = _line_col(text, start)
            raise ExpansionError(exc, source=source, line=line, column=column) from exc

        out.append(text[pos:start])
        out.append(format_literal(seq, style=style, per_line=per_line))
        pos = close_pos + 1
        count += 1

    out.append(text[pos:])
    logger.debug("Expanded %d `%s` call(s) in %s", count, macro, source)
    return "".join(out)


def expand_file(
    path: str | Path,
    *,
    output: str | Path | None = None,
    base_dir: str | Path | None = None,
    macro: str = DEFAULT_MACRO,
    style: Style = "rust",
    per_line: Optional[int] = None,
    backend: Backend = "pillow",
) -> str:
    """Expand a template file; relative image paths resolve next to it.

    The expanded text is returned and, when ``output`` is given, written there.
    """

    template = Path(path)
    text = template.read_text(encoding="utf-8")
    expanded = expand_text(
        text,
        base_dir=(base_dir if base_dir is not None else template.parent),
        source=str(template),
        macro=macro,
        style=style,
        per_line=per_line,
        backend=backend,
    )
    if output is not None:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(expanded, encoding="utf-8")
    return expanded
