from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from pyimgembed.errors import DecodeError, ExpansionError, RequestSyntaxError, UnknownFormatError
from pyimgembed.expand import expand_file, expand_text


def _write_png(path: Path, arr: np.ndarray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(arr).save(path)


@pytest.fixture()
def assets(tmp_path) -> Path:
    _write_png(tmp_path / "px.png", np.array([[[10, 20, 30], [40, 50, 60]]], dtype=np.uint8))
    _write_png(tmp_path / "we)ird.png", np.array([[7]], dtype=np.uint8))
    return tmp_path


def test_expand_text_replaces_calls(assets) -> None:
    text = (
        "const A: &[u8] = &include_img!(\"px.png\", rgba8);\n"
        "const B: &[u8] = &include_img!(\"px.png\");\n"
    )
    out = expand_text(text, base_dir=assets)
    assert out == (
        "const A: &[u8] = &[10u8, 20u8, 30u8, 255u8, 40u8, 50u8, 60u8, 255u8];\n"
        "const B: &[u8] = &[10u8, 20u8, 30u8, 40u8, 50u8, 60u8];\n"
    )


def test_expand_text_other_delimiters_and_parens_in_paths(assets) -> None:
    text = 'a = include_img!["we)ird.png", RGB8]\nb = include_img! { "we)ird.png" }\n'
    out = expand_text(text, base_dir=assets, style="python")
    assert out == "a = [7, 7, 7]\nb = [7]\n"


def test_expand_text_leaves_non_calls_alone(assets) -> None:
    text = "// include_img! is expanded; my_include_img!(\"px.png\") is not\n"
    assert expand_text(text, base_dir=assets) == text


def test_expand_text_custom_macro(assets) -> None:
    text = "uint8_t px[] = EMBED_IMAGE(\"px.png\", l8);"
    out = expand_text(text, base_dir=assets, macro="EMBED_IMAGE", style="c")
    assert out == "uint8_t px[] = {18, 48};"


def test_expand_text_unknown_format_reports_location(assets) -> None:
    text = "fn main() {}\n  x = include_img!(\"px.png\", rgba9);\n"
    with pytest.raises(ExpansionError) as exc:
        expand_text(text, base_dir=assets, source="main.rs")
    err = exc.value
    assert (err.line, err.column) == (2, 7)
    assert err.stage == "format"
    assert isinstance(err.cause, UnknownFormatError)
    assert str(err).startswith("main.rs:2:7: ")
    assert "rgba9" in str(err)


def test_expand_text_syntax_error_points_into_arguments(assets) -> None:
    text = '\ninclude_img!("px.png",)'
    with pytest.raises(ExpansionError) as exc:
        expand_text(text, base_dir=assets)
    assert (exc.value.line, exc.value.column) == (2, 23)
    assert isinstance(exc.value.cause, RequestSyntaxError)


def test_expand_text_unclosed_call(assets) -> None:
    with pytest.raises(ExpansionError) as exc:
        expand_text('x = include_img!("px.png", rgb8', base_dir=assets)
    assert exc.value.stage == "request"
    assert (exc.value.line, exc.value.column) == (1, 5)


def test_expand_text_missing_image(assets) -> None:
    with pytest.raises(ExpansionError) as exc:
        expand_text('include_img!("gone.png")', base_dir=assets)
    assert exc.value.stage == "decode"
    assert isinstance(exc.value.cause, DecodeError)
    assert "couldn't read" in str(exc.value)


def test_expand_file_resolves_next_to_template(tmp_path) -> None:
    src = tmp_path / "src"
    _write_png(src / "img" / "dot.png", np.array([[200]], dtype=np.uint8))
    template = src / "lib.rs.in"
    template.write_text('pub const DOT: [u16; 1] = include_img!("img/dot.png", l16);\n', encoding="utf-8")

    out_path = tmp_path / "out" / "lib.rs"
    expanded = expand_file(template, output=out_path)
    assert expanded == "pub const DOT: [u16; 1] = [51400u16];\n"
    assert out_path.read_text(encoding="utf-8") == expanded
