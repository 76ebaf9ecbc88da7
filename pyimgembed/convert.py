"""Pixel layout conversion.

Converts a :class:`~pyimgembed.io.image.DecodedImage` from its native layout
into any of the ten :class:`~pyimgembed.layouts.PixelLayout` members and
flattens the result into a :class:`LiteralSequence`.

Conversion rules follow the usual image-library semantics:

- precision changes rescale across the full range of both sample types
  (``u8 -> u16`` multiplies by 257, ``u16 -> u8`` rounds ``(v + 128) // 257``,
  integers become ``v / max`` as float32, floats are clamped to ``[0, 1]``
  and rounded half away from zero)
- RGB -> luma uses Rec.709 weights ``(2126, 7152, 722) / 10000`` evaluated in
  the source sample type, truncating for integers
- added alpha channels are fully opaque, dropped alpha is discarded
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from pyimgembed.io.image import DecodedImage
from pyimgembed.layouts import PixelLayout, resolve_layout

logger = logging.getLogger(__name__)

_LUMA_WEIGHTS = (2126, 7152, 722)
_LUMA_DIV = 10000


@dataclass(frozen=True)
class LiteralSequence:
    """Flattened samples in row-major, channel-interleaved order."""

    samples: NDArray
    layout: PixelLayout
    width: int
    height: int

    def __len__(self) -> int:
        return int(self.samples.shape[0])

    def tolist(self) -> list:
        return self.samples.tolist()


def convert_samples(samples: NDArray, *, src: str, dst: str) -> NDArray:
    """Rescale samples between the ``u8``, ``u16`` and ``f32`` sample types."""

    if src == dst:
        return samples

    if src == "u8" and dst == "u16":
        return samples.astype(np.uint16) * np.uint16(257)
    if src == "u16" and dst == "u8":
        return ((samples.astype(np.uint32) + 128) // 257).astype(np.uint8)
    if src == "u8" and dst == "f32":
        return samples.astype(np.float32) / np.float32(255)
    if src == "u16" and dst == "f32":
        return samples.astype(np.float32) / np.float32(65535)
    if src == "f32" and dst in ("u8", "u16"):
        max_val = 255 if dst == "u8" else 65535
        unit = np.nan_to_num(samples.astype(np.float32), nan=1.0, posinf=1.0, neginf=0.0)
        scaled = np.clip(unit, 0.0, 1.0) * np.float32(max_val)
        return _round_half_away(scaled).astype(np.uint8 if dst == "u8" else np.uint16)

    raise ValueError(f"Unsupported sample conversion: {src!r} -> {dst!r}.")


def _round_half_away(values: NDArray) -> NDArray:
    # values are non-negative here; np.rint would round halves to even
    floor = np.floor(values)
    return np.where(values - floor >= 0.5, floor + 1.0, floor)


def rgb_to_luma(rgb: NDArray, *, sample_type: str) -> NDArray:
    """Rec.709 luminance of an ``(..., 3)`` array, kept in ``sample_type``."""

    if sample_type == "f32":
        wide = rgb.astype(np.float64)
        luma = (
            _LUMA_WEIGHTS[0] * wide[..., 0]
            + _LUMA_WEIGHTS[1] * wide[..., 1]
            + _LUMA_WEIGHTS[2] * wide[..., 2]
        ) / float(_LUMA_DIV)
        return luma.astype(np.float32)

    wide = rgb.astype(np.uint64)
    luma = (
        _LUMA_WEIGHTS[0] * wide[..., 0]
        + _LUMA_WEIGHTS[1] * wide[..., 1]
        + _LUMA_WEIGHTS[2] * wide[..., 2]
    ) // _LUMA_DIV
    return luma.astype(rgb.dtype)


def convert_pixels(image: DecodedImage, layout: PixelLayout) -> NDArray:
    """Return ``image`` converted to ``layout`` as an ``(H, W, C)`` array."""

    src = image.layout
    pixels = image.pixels
    if src is layout:
        return pixels

    src_type, dst_type = src.sample_type, layout.sample_type

    if layout.is_luma:
        if src.is_luma:
            color = pixels[..., :1]
        else:
            color = rgb_to_luma(pixels[..., :3], sample_type=src_type)[..., None]
    else:
        color = pixels[..., :1] if src.is_luma else pixels[..., :3]
    color = convert_samples(color, src=src_type, dst=dst_type)
    if layout.composition in ("RGB", "RGBA") and src.is_luma:
        color = np.repeat(color, 3, axis=2)

    if not layout.has_alpha:
        out = color
    else:
        if src.has_alpha:
            alpha = convert_samples(pixels[..., -1:], src=src_type, dst=dst_type)
        else:
            alpha = np.full(color.shape[:2] + (1,), layout.max_value, dtype=layout.dtype)
        out = np.concatenate([color, alpha], axis=2)

    logger.debug("Converted %s -> %s (%dx%d)", src.value, layout.value, image.width, image.height)
    return np.ascontiguousarray(out, dtype=layout.dtype)


def convert_image(
    image: DecodedImage,
    layout: Optional[PixelLayout | str] = None,
) -> LiteralSequence:
    """Flatten ``image`` into a :class:`LiteralSequence`.

    Parameters
    ----------
    image:
        Decoded pixel buffer.
    layout:
        Target layout (or format token). When omitted the native samples are
        emitted verbatim, without any channel or precision change.

    Examples
    --------
    >>> img = DecodedImage.from_array(np.array([[[10, 20, 30], [40, 50, 60]]], dtype=np.uint8))
    >>> convert_image(img, PixelLayout.RGBA8).tolist()
    [10, 20, 30, 255, 40, 50, 60, 255]
    """

    if layout is None:
        target = image.layout
        pixels = image.pixels
    else:
        target = resolve_layout(layout)
        pixels = convert_pixels(image, target)

    return LiteralSequence(
        samples=pixels.reshape(-1),
        layout=target,
        width=image.width,
        height=image.height,
    )
