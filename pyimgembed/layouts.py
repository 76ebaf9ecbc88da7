from __future__ import annotations

from enum import Enum

import numpy as np

from pyimgembed.errors import UnknownFormatError


class PixelLayout(str, Enum):
    """Closed set of pixel layouts an image can be embedded as.

    A layout fixes both the channel composition (``L``, ``LA``, ``RGB``,
    ``RGBA``) and the per-sample representation (``u8``, ``u16``, ``f32``).
    """

    RGB8 = "rgb8"
    RGBA8 = "rgba8"
    RGB16 = "rgb16"
    RGBA16 = "rgba16"
    RGB32F = "rgb32f"
    RGBA32F = "rgba32f"
    L8 = "l8"
    LA8 = "la8"
    L16 = "l16"
    LA16 = "la16"

    @property
    def composition(self) -> str:
        return _LAYOUT_TABLE[self][0]

    @property
    def sample_type(self) -> str:
        return _LAYOUT_TABLE[self][1]

    @property
    def channels(self) -> int:
        return len(self.composition)

    @property
    def has_alpha(self) -> bool:
        return self.composition.endswith("A")

    @property
    def is_luma(self) -> bool:
        return self.composition.startswith("L")

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(_SAMPLE_DTYPES[self.sample_type])

    @property
    def sample_bytes(self) -> int:
        return int(self.dtype.itemsize)

    @property
    def max_value(self) -> int | float:
        """Value of a fully saturated sample (also the opaque alpha value)."""

        return _SAMPLE_MAX[self.sample_type]


_LAYOUT_TABLE: dict[PixelLayout, tuple[str, str]] = {
    PixelLayout.RGB8: ("RGB", "u8"),
    PixelLayout.RGBA8: ("RGBA", "u8"),
    PixelLayout.RGB16: ("RGB", "u16"),
    PixelLayout.RGBA16: ("RGBA", "u16"),
    PixelLayout.RGB32F: ("RGB", "f32"),
    PixelLayout.RGBA32F: ("RGBA", "f32"),
    PixelLayout.L8: ("L", "u8"),
    PixelLayout.LA8: ("LA", "u8"),
    PixelLayout.L16: ("L", "u16"),
    PixelLayout.LA16: ("LA", "u16"),
}

_SAMPLE_DTYPES = {"u8": np.uint8, "u16": np.uint16, "f32": np.float32}
_SAMPLE_MAX: dict[str, int | float] = {"u8": 255, "u16": 65535, "f32": 1.0}

# Lower-case spellings accepted for each layout.
_ALIASES: dict[str, PixelLayout] = {
    "rgb8": PixelLayout.RGB8,
    "rgba8": PixelLayout.RGBA8,
    "rgb16": PixelLayout.RGB16,
    "rgba16": PixelLayout.RGBA16,
    "rgb32f": PixelLayout.RGB32F,
    "rgba32f": PixelLayout.RGBA32F,
    "l8": PixelLayout.L8,
    "luma8": PixelLayout.L8,
    "la8": PixelLayout.LA8,
    "lumaa8": PixelLayout.LA8,
    "lumaalpha8": PixelLayout.LA8,
    "l16": PixelLayout.L16,
    "luma16": PixelLayout.L16,
    "la16": PixelLayout.LA16,
    "lumaa16": PixelLayout.LA16,
    "lumaalpha16": PixelLayout.LA16,
}


def layout_for(composition: str, sample_type: str) -> PixelLayout:
    """Return the layout with the given channel composition and sample type."""

    for layout, (comp, stype) in _LAYOUT_TABLE.items():
        if comp == composition and stype == sample_type:
            return layout
    raise ValueError(f"No pixel layout for composition={composition!r} sample_type={sample_type!r}")


def layout_aliases(layout: PixelLayout) -> list[str]:
    """All accepted spellings of ``layout`` (canonical name first)."""

    layout = PixelLayout(layout)
    return [alias for alias, target in _ALIASES.items() if target is layout]


def resolve_layout(token: str | PixelLayout) -> PixelLayout:
    """Map a case-insensitive format token onto its :class:`PixelLayout`.

    Raises
    ------
    UnknownFormatError
        When ``token`` is not one of the known aliases.
    """

    if isinstance(token, PixelLayout):
        return token
    layout = _ALIASES.get(str(token).lower(), None)
    if layout is None:
        raise UnknownFormatError(str(token), supported=[lay.value for lay in PixelLayout])
    return layout
