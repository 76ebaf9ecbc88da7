from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import numpy as np

from pyimgembed.errors import DecodeError
from pyimgembed.layouts import PixelLayout, layout_for
from pyimgembed.utils.optional_deps import require

logger = logging.getLogger(__name__)

Backend = Literal["pillow", "opencv"]

_COMPOSITIONS = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}
_SAMPLE_TYPES = {np.dtype(np.uint8): "u8", np.dtype(np.uint16): "u16", np.dtype(np.float32): "f32"}

# Pillow modes converted before reading the pixel buffer.
_PIL_CONVERT = {
    "1": "L",
    "La": "LA",
    "PA": "RGBA",
    "RGBa": "RGBA",
    "RGBX": "RGB",
    "CMYK": "RGB",
    "YCbCr": "RGB",
    "LAB": "RGB",
    "HSV": "RGB",
}

# Modes Pillow narrows to 8 bits when the file stores 16-bit samples.
_WIDE_MODES = ("LA", "RGB", "RGBA")


@dataclass(frozen=True)
class DecodedImage:
    """A decoded pixel buffer shaped ``(height, width, channels)``.

    ``layout`` is the native layout the decoder produced; ``pixels`` always
    has the dtype and channel count of that layout.
    """

    pixels: np.ndarray
    layout: PixelLayout

    def __post_init__(self) -> None:
        arr = self.pixels
        if not isinstance(arr, np.ndarray):
            raise TypeError(f"Expected np.ndarray, got {type(arr)}")
        if arr.ndim != 3 or arr.shape[2] != self.layout.channels:
            raise ValueError(
                f"Expected shape (H,W,{self.layout.channels}) for {self.layout.value}, got {arr.shape}"
            )
        if arr.dtype != self.layout.dtype:
            raise ValueError(f"Expected dtype={self.layout.dtype} for {self.layout.value}, got {arr.dtype}")

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @classmethod
    def from_array(cls, image: Any) -> "DecodedImage":
        """Wrap an in-memory ``HW`` / ``HWC`` array, inferring its native layout.

        Supported: uint8 and uint16 with 1-4 channels, float32 with 3 or 4
        channels (there is no grayscale float layout).
        """

        arr = np.asarray(image)
        if arr.ndim == 2:
            arr = arr[:, :, None]
        if arr.ndim != 3:
            raise ValueError(f"Expected shape (H,W) or (H,W,C), got {arr.shape}")

        composition = _COMPOSITIONS.get(int(arr.shape[2]), None)
        if composition is None:
            raise ValueError(f"Expected 1-4 channels, got {arr.shape[2]}")
        sample_type = _SAMPLE_TYPES.get(arr.dtype, None)
        if sample_type is None:
            raise ValueError(f"Expected dtype uint8, uint16 or float32, got {arr.dtype}")

        layout = layout_for(composition, sample_type)
        return cls(pixels=np.ascontiguousarray(arr), layout=layout)


def read_image(path: str | Path, *, backend: Backend = "pillow") -> DecodedImage:
    """Decode an image file into its native :class:`DecodedImage`.

    Parameters
    ----------
    path:
        Image file path.
    backend:
        - "pillow": decode with Pillow (default). 16-bit colour and
          grayscale+alpha files, which Pillow narrows to 8 bits, are handed to
          the OpenCV decoder so their full depth is kept.
        - "opencv": decode with ``cv2.IMREAD_UNCHANGED``

    Raises
    ------
    DecodeError
        When the file is missing, not an image, or corrupt.
    """

    if backend == "pillow":
        return _read_pillow(Path(path))
    if backend == "opencv":
        return _read_opencv(Path(path))
    raise ValueError(f"Unknown decode backend: {backend!r}. Choose from: pillow, opencv.")


def _tile_rawmode(img) -> str:
    """Raw sample mode of the first tile, e.g. ``"RGB;16B"`` for a 16-bit PNG."""

    tile = getattr(img, "tile", None) or []
    if not tile:
        return ""
    args = tile[0][-1]
    if isinstance(args, tuple):
        args = args[0] if args else ""
    return args if isinstance(args, str) else ""


def _read_pillow(path: Path) -> DecodedImage:
    from PIL import Image

    try:
        with Image.open(path) as img:
            mode = str(img.mode)
            wide = mode in _WIDE_MODES and ";16" in _tile_rawmode(img)
            if not wide:
                img.load()
                decoded = _from_pil(img)
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(path, str(exc)) from exc

    if wide:
        logger.debug("%s holds 16-bit %s samples; decoding with OpenCV", path, mode)
        return _read_opencv(path, source_mode=mode)

    logger.debug("Decoded %s as %s (%dx%d)", path, decoded.layout.value, decoded.width, decoded.height)
    return decoded


def _from_pil(img) -> DecodedImage:
    mode = str(img.mode)
    if mode == "P":
        target = "RGBA" if "transparency" in img.info else "RGB"
        img = img.convert(target)
    elif mode in _PIL_CONVERT:
        img = img.convert(_PIL_CONVERT[mode])
    if img.mode != mode:
        logger.debug("Converted Pillow mode %s -> %s", mode, img.mode)
    mode = str(img.mode)

    if mode in ("L", "LA", "RGB", "RGBA"):
        return DecodedImage.from_array(np.asarray(img, dtype=np.uint8))
    if mode.startswith("I;16") or mode == "I":
        arr = np.asarray(img)
        arr = np.clip(arr.astype(np.int64), 0, 65535).astype(np.uint16)
        return DecodedImage(pixels=arr.reshape(arr.shape[0], arr.shape[1], 1), layout=PixelLayout.L16)
    if mode == "F":
        gray = np.asarray(img, dtype=np.float32)
        rgb = np.repeat(gray[:, :, None], 3, axis=2)
        return DecodedImage(pixels=np.ascontiguousarray(rgb), layout=PixelLayout.RGB32F)

    raise ValueError(f"Unsupported image mode: {mode}")


def _peek_mode(path: Path) -> str | None:
    # Image.open only parses the header here
    from PIL import Image

    try:
        with Image.open(path) as img:
            return str(img.mode)
    except (OSError, ValueError, Image.DecompressionBombError):
        return None


def _read_opencv(path: Path, *, source_mode: str | None = None) -> DecodedImage:
    cv2 = require("cv2", purpose="the opencv decode backend")

    if not path.is_file():
        raise DecodeError(path, "No such file or directory")
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise DecodeError(path, "Unable to decode image")
    if source_mode is None:
        source_mode = _peek_mode(path)

    if img.dtype == np.float64:
        img = img.astype(np.float32)
    if img.ndim == 3 and img.shape[2] == 3:
        img = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    elif img.ndim == 3 and img.shape[2] == 4:
        img = cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
        if source_mode == "LA":
            # libpng expands grayscale+alpha to four channels
            img = np.ascontiguousarray(img[:, :, [0, 3]])
    if img.dtype == np.float32 and (img.ndim == 2 or img.shape[2] == 1):
        img = np.repeat(img.reshape(img.shape[0], img.shape[1], 1), 3, axis=2)

    try:
        decoded = DecodedImage.from_array(img)
    except ValueError as exc:
        raise DecodeError(path, str(exc)) from exc

    logger.debug("Decoded %s as %s (%dx%d)", path, decoded.layout.value, decoded.width, decoded.height)
    return decoded
