"""Image decoding collaborators.

Decoders turn a file on disk into a :class:`DecodedImage` that carries its
native :class:`~pyimgembed.layouts.PixelLayout`. The rest of the package never
touches file bytes directly.
"""

from __future__ import annotations

from .image import DecodedImage, read_image

__all__ = [
    "DecodedImage",
    "read_image",
]
