"""
Quick Start Example for pyimgembed.

This script draws a tiny gradient, then shows the same pixels embedded in a
few pixel formats and literal styles.
"""

import tempfile
from pathlib import Path

import numpy as np
from PIL import Image

from pyimgembed import expand_text, format_literal, include_image, render_declaration


def main():
    """Run quick start example."""
    print("=" * 60)
    print("pyimgembed Quick Start Example")
    print("=" * 60 + "\n")

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        gradient = np.zeros((2, 4, 3), dtype=np.uint8)
        gradient[..., 0] = np.linspace(0, 255, 4, dtype=np.uint8)
        gradient[1, :, 2] = 255
        Image.fromarray(gradient).save(root / "gradient.png")

        # Native layout, no conversion
        seq = include_image(root / "gradient.png")
        print(f"native layout: {seq.layout.value} ({seq.width}x{seq.height}, {len(seq)} samples)")
        print(format_literal(seq, per_line=12), "\n")

        # Grayscale + alpha, 16-bit, as a C declaration
        seq = include_image(root / "gradient.png", "LumaAlpha16")
        print(render_declaration(seq, "gradient", style="c", source="gradient.png"))

        # Template expansion
        template = 'const GRADIENT: &[f32] = &include_img!("gradient.png", rgb32f);\n'
        print(expand_text(template, base_dir=root, per_line=6))


if __name__ == "__main__":
    main()
