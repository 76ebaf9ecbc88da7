from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image


def _write_template(tmp_path: Path, body: str) -> Path:
    Image.fromarray(np.array([[0, 255]], dtype=np.uint8)).save(tmp_path / "ramp.png")
    template = tmp_path / "ramp.py.in"
    template.write_text(body, encoding="utf-8")
    return template


def test_expand_cli_smoke(tmp_path: Path, capsys) -> None:
    from pyimgembed.expand_cli import main

    template = _write_template(tmp_path, 'RAMP = include_img!("ramp.png", rgb32f)\n')
    rc = main([str(template), "--style", "python"])
    assert rc == 0
    assert capsys.readouterr().out == "RAMP = [0.0, 0.0, 0.0, 1.0, 1.0, 1.0]\n"


def test_expand_cli_output_file(tmp_path: Path, capsys) -> None:
    from pyimgembed.expand_cli import main

    template = _write_template(tmp_path, "static const uint8_t ramp[] = include_img!(\"ramp.png\");\n")
    out_path = tmp_path / "ramp.c"
    rc = main([str(template), "--style", "c", "--output", str(out_path)])
    assert rc == 0
    assert capsys.readouterr().out == ""
    assert out_path.read_text(encoding="utf-8") == "static const uint8_t ramp[] = {0, 255};\n"


def test_expand_cli_reports_location(tmp_path: Path, capsys) -> None:
    from pyimgembed.expand_cli import main

    template = _write_template(tmp_path, "\n\nx = include_img!(\"ramp.png\", rgba9)\n")
    rc = main([str(template)])
    assert rc == 1
    err = capsys.readouterr().err
    assert f"{template}:3:5:" in err
    assert "rgba9" in err
