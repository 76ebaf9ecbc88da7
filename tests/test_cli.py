from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from pyimgembed.cli import main


def _write_png(path: Path, arr: np.ndarray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(arr).save(path)


@pytest.fixture()
def png(tmp_path) -> Path:
    path = tmp_path / "px.png"
    _write_png(path, np.array([[[10, 20, 30], [40, 50, 60]]], dtype=np.uint8))
    return path


def test_cli_declaration_smoke(png, capsys) -> None:
    rc = main([str(png), "--format", "RGBA8"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "pub const PX_WIDTH: usize = 2;" in out
    assert "pub const PX: [u8; 8] = [10u8, 20u8, 30u8, 255u8, 40u8, 50u8, 60u8, 255u8];" in out


def test_cli_literal_only_c_style(png, capsys) -> None:
    rc = main([str(png), "--literal-only", "--style", "c"])
    assert rc == 0
    assert capsys.readouterr().out == "{10, 20, 30, 40, 50, 60}\n"


def test_cli_json(png, capsys) -> None:
    rc = main([str(png), "--format", "la8", "--json"])
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["layout"] == "la8"
    assert payload["width"] == 2
    assert payload["height"] == 1
    assert payload["samples"] == [18, 255, 48, 255]


def test_cli_list_formats(capsys) -> None:
    rc = main(["--list-formats"])
    assert rc == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 10
    assert "la8      la8, lumaa8, lumaalpha8" in lines


def test_cli_unknown_format_fails(png, capsys) -> None:
    rc = main([str(png), "--format", "rgba9"])
    assert rc == 1
    err = capsys.readouterr().err
    assert "rgba9" in err


def test_cli_missing_image_fails(tmp_path, capsys) -> None:
    rc = main([str(tmp_path / "missing.png")])
    assert rc == 1
    assert "couldn't read" in capsys.readouterr().err


def test_cli_writes_output_file(png, tmp_path, capsys) -> None:
    out_path = tmp_path / "gen" / "px.h"
    rc = main([str(png), "--style", "c", "--name", "pixels", "--output", str(out_path)])
    assert rc == 0
    assert capsys.readouterr().out == ""
    text = out_path.read_text(encoding="utf-8")
    assert "static const uint8_t pixels[6] = {10, 20, 30, 40, 50, 60};" in text


def test_cli_config_batch(tmp_path, capsys) -> None:
    _write_png(tmp_path / "assets" / "a.png", np.array([[1, 2]], dtype=np.uint8))
    _write_png(tmp_path / "assets" / "b.png", np.array([[3]], dtype=np.uint8))
    cfg = tmp_path / "embed.json"
    cfg.write_text(
        json.dumps(
            {
                "base_dir": "assets",
                "emit": {"style": "python", "per_line": 1},
                "images": [
                    {"path": "a.png", "name": "first"},
                    {"path": "b.png", "format": "l16"},
                ],
            }
        ),
        encoding="utf-8",
    )

    rc = main(["--config", str(cfg)])
    assert rc == 0
    out = capsys.readouterr().out
    assert "FIRST = [\n    1,\n    2\n]" in out
    assert "B = [\n    771\n]" in out
    assert "# a.png (l8, 2x1)" in out


def test_cli_config_without_images_fails(tmp_path, capsys) -> None:
    cfg = tmp_path / "embed.json"
    cfg.write_text(json.dumps({"emit": {"style": "c"}}), encoding="utf-8")
    rc = main(["--config", str(cfg)])
    assert rc == 1
    assert "no images" in capsys.readouterr().err


def test_cli_requires_image_or_config() -> None:
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2
