from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pyimgembed.convert import LiteralSequence, convert_image
from pyimgembed.emit import Style, format_literal
from pyimgembed.io.image import Backend, read_image
from pyimgembed.layouts import PixelLayout, resolve_layout
from pyimgembed.request import ConversionRequest, resolve_request_path

logger = logging.getLogger(__name__)


def include_image(
    path: str | Path,
    format: Optional[str | PixelLayout] = None,
    *,
    base_dir: str | Path | None = None,
    backend: Backend = "pillow",
) -> LiteralSequence:
    """Decode ``path`` and return its samples, optionally converted to ``format``.

    The format token is resolved before the file is opened, so a misspelled
    format fails with :class:`~pyimgembed.errors.UnknownFormatError` even when
    the image is also unreadable.
    """

    layout = resolve_layout(format) if format is not None else None
    full_path = resolve_request_path(path, base_dir)
    image = read_image(full_path, backend=backend)
    seq = convert_image(image, layout)
    logger.debug(
        "Embedded %s as %s: %d samples",
        full_path,
        seq.layout.value,
        len(seq),
    )
    return seq


def run_request(
    request: ConversionRequest,
    *,
    base_dir: str | Path | None = None,
    backend: Backend = "pillow",
) -> LiteralSequence:
    return include_image(request.path, request.format, base_dir=base_dir, backend=backend)


def render_include(
    path: str | Path,
    format: Optional[str | PixelLayout] = None,
    *,
    style: Style = "rust",
    per_line: Optional[int] = None,
    base_dir: str | Path | None = None,
    backend: Backend = "pillow",
) -> str:
    """Like :func:`include_image` but returns the array literal text."""

    seq = include_image(path, format, base_dir=base_dir, backend=backend)
    return format_literal(seq, style=style, per_line=per_line)
