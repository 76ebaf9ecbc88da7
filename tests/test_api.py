from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from pyimgembed.api import include_image, render_include, run_request
from pyimgembed.errors import DecodeError, UnknownFormatError
from pyimgembed.layouts import PixelLayout
from pyimgembed.request import ConversionRequest


def _write_png(path: Path, arr: np.ndarray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(arr).save(path)


@pytest.fixture()
def rgb_png(tmp_path) -> Path:
    path = tmp_path / "img" / "px.png"
    _write_png(path, np.array([[[10, 20, 30], [40, 50, 60]]], dtype=np.uint8))
    return path


def test_include_image_converts(rgb_png) -> None:
    seq = include_image(rgb_png, "rgba8")
    assert seq.tolist() == [10, 20, 30, 255, 40, 50, 60, 255]
    assert seq.layout is PixelLayout.RGBA8


def test_include_image_native_without_format(rgb_png) -> None:
    seq = include_image(rgb_png)
    assert seq.layout is PixelLayout.RGB8
    assert seq.tolist() == [10, 20, 30, 40, 50, 60]


def test_include_image_resolves_relative_to_base_dir(rgb_png, tmp_path) -> None:
    seq = include_image("img/px.png", PixelLayout.L8, base_dir=tmp_path)
    assert len(seq) == 2


def test_unknown_format_is_reported_before_decoding(tmp_path) -> None:
    with pytest.raises(UnknownFormatError) as exc:
        include_image(tmp_path / "missing.png", "rgba9")
    assert exc.value.token == "rgba9"


def test_missing_file_raises_decode_error(tmp_path) -> None:
    with pytest.raises(DecodeError) as exc:
        include_image("nope.png", "rgb8", base_dir=tmp_path)
    assert exc.value.path == str(tmp_path / "nope.png")


def test_run_request(rgb_png) -> None:
    seq = run_request(ConversionRequest("px.png", "LA8"), base_dir=rgb_png.parent)
    assert seq.layout is PixelLayout.LA8
    assert seq.samples[1::2].tolist() == [255, 255]


def test_render_include(rgb_png) -> None:
    assert render_include(rgb_png, "rgb16", style="c") == "{2570, 5140, 7710, 10280, 12850, 15420}"
