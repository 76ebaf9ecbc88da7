from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pyimgembed.layouts import PixelLayout, layout_aliases

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyimgembed",
        description="Decode an image and print its pixel samples as a source-code array literal.",
    )
    parser.add_argument("image", nargs="?", default=None, help="Image file to embed")
    parser.add_argument(
        "--format",
        default=None,
        help="Target pixel format (case-insensitive), e.g. rgb8, rgba32f, la8. Default: native layout",
    )
    parser.add_argument(
        "--style",
        default=None,
        choices=["rust", "c", "python"],
        help="Literal syntax to emit. Default: rust (or the config's emit.style)",
    )
    parser.add_argument("--name", default=None, help="Symbol name (defaults to the file stem)")
    parser.add_argument("--per-line", type=int, default=None, help="Wrap the literal every N samples")
    parser.add_argument(
        "--backend",
        default=None,
        choices=["pillow", "opencv"],
        help="Image decoder. Default: pillow (or the config's backend)",
    )
    parser.add_argument(
        "--literal-only",
        action="store_true",
        help="Print only the array literal instead of a full declaration",
    )
    parser.add_argument("--json", action="store_true", help="Print samples and dimensions as JSON")
    parser.add_argument("--config", default=None, help="Optional JSON/YAML config listing images to embed")
    parser.add_argument("--output", default=None, help="Write the result to this file instead of stdout")
    parser.add_argument(
        "--list-formats",
        action="store_true",
        help="List supported pixel formats and their aliases, then exit",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr")
    return parser


def _list_formats() -> str:
    lines = []
    for layout in PixelLayout:
        lines.append(f"{layout.value:<8} {', '.join(layout_aliases(layout))}")
    return "\n".join(lines) + "\n"


def _render(args: argparse.Namespace) -> str:
    from pyimgembed.api import include_image
    from pyimgembed.config import EmbedConfig, ImageEntry, load_embed_config
    from pyimgembed.emit import format_literal, render_declaration, symbol_name

    cfg = load_embed_config(args.config) if args.config is not None else EmbedConfig()

    if args.image is not None:
        entries = [ImageEntry(path=str(args.image), format=args.format, name=args.name)]
        base_dir = None
    else:
        if not cfg.images:
            raise ValueError(f"Config {args.config!r} lists no images.")
        if args.name is not None and len(cfg.images) > 1:
            raise ValueError("--name can only be used with a single image.")
        entries = [
            ImageEntry(
                path=e.path,
                format=(e.format if e.format is not None else args.format),
                name=(e.name if e.name is not None else args.name),
            )
            for e in cfg.images
        ]
        base_dir = cfg.base_dir

    style = str(args.style) if args.style is not None else cfg.emit.style
    per_line = int(args.per_line) if args.per_line is not None else cfg.emit.per_line
    backend = str(args.backend) if args.backend is not None else cfg.backend

    records: list[dict[str, Any]] = []
    chunks: list[str] = []
    for entry in entries:
        seq = include_image(entry.path, entry.format, base_dir=base_dir, backend=backend)
        if bool(args.json):
            records.append(
                {
                    "path": entry.path,
                    "layout": seq.layout.value,
                    "width": seq.width,
                    "height": seq.height,
                    "samples": seq.tolist(),
                }
            )
        elif bool(args.literal_only):
            chunks.append(format_literal(seq, style=style, per_line=per_line) + "\n")
        else:
            name = entry.name if entry.name is not None else symbol_name(entry.path)
            chunks.append(render_declaration(seq, name, style=style, per_line=per_line, source=entry.path))

    if bool(args.json):
        payload: Any = records[0] if args.image is not None else records
        return json.dumps(payload, indent=2, sort_keys=True) + "\n"
    return "\n".join(chunks)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if bool(args.verbose):
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if bool(args.list_formats):
        sys.stdout.write(_list_formats())
        return 0

    if args.image is None and args.config is None:
        parser.error("an image path or --config is required")

    try:
        text = _render(args)
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(str(exc), file=sys.stderr)
        return 1

    if args.output is not None:
        out_path = Path(str(args.output))
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        logger.info("Wrote %s", out_path)
        return 0

    sys.stdout.write(text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
