"""pyimgembed - embed image pixel data as source-code array literals.

Keep top-level imports lightweight: decoding pulls in Pillow/numpy and the
OpenCV backend is heavier still. Exports are lazy-loaded on demand so that
`import pyimgembed` and `import pyimgembed.cli` stay cheap.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    # Modules
    "config",
    "io",
    "utils",
    # Layouts
    "PixelLayout",
    "resolve_layout",
    # Conversion
    "DecodedImage",
    "LiteralSequence",
    "convert_image",
    "read_image",
    # Emission
    "format_literal",
    "render_declaration",
    # High-level API
    "include_image",
    "render_include",
    "expand_text",
    "expand_file",
    # Errors
    "EmbedError",
    "UnknownFormatError",
    "DecodeError",
    "RequestSyntaxError",
    "ExpansionError",
]


_LAZY_SUBMODULES = {
    "config",
    "io",
    "utils",
}

_LAZY_EXPORTS = {
    "PixelLayout": ("layouts", "PixelLayout"),
    "resolve_layout": ("layouts", "resolve_layout"),
    "DecodedImage": ("io.image", "DecodedImage"),
    "read_image": ("io.image", "read_image"),
    "LiteralSequence": ("convert", "LiteralSequence"),
    "convert_image": ("convert", "convert_image"),
    "format_literal": ("emit", "format_literal"),
    "render_declaration": ("emit", "render_declaration"),
    "include_image": ("api", "include_image"),
    "render_include": ("api", "render_include"),
    "expand_text": ("expand", "expand_text"),
    "expand_file": ("expand", "expand_file"),
    "EmbedError": ("errors", "EmbedError"),
    "UnknownFormatError": ("errors", "UnknownFormatError"),
    "DecodeError": ("errors", "DecodeError"),
    "RequestSyntaxError": ("errors", "RequestSyntaxError"),
    "ExpansionError": ("errors", "ExpansionError"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin delegation
    if name in _LAZY_SUBMODULES:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module

    target = _LAZY_EXPORTS.get(name)
    if target is not None:
        module_name, attr = target
        module = import_module(f"{__name__}.{module_name}")
        value = getattr(module, attr)
        globals()[name] = value
        return value

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
