from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyimgembed-expand",
        description="Replace include_img!(\"path\"[, format]) calls in a source template with array literals.",
    )
    parser.add_argument("template", help="Template file containing include_img! calls")
    parser.add_argument("--output", default=None, help="Write the expanded file here instead of stdout")
    parser.add_argument(
        "--style",
        default="rust",
        choices=["rust", "c", "python"],
        help="Literal syntax to emit. Default: rust",
    )
    parser.add_argument("--per-line", type=int, default=None, help="Wrap literals every N samples")
    parser.add_argument("--macro", default="include_img!", help="Macro name to expand. Default: include_img!")
    parser.add_argument("--backend", default="pillow", choices=["pillow", "opencv"], help="Image decoder")
    parser.add_argument(
        "--base-dir",
        default=None,
        help="Resolve relative image paths against this directory instead of the template's",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if bool(args.verbose):
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        from pyimgembed.expand import expand_file

        expanded = expand_file(
            Path(str(args.template)),
            output=(str(args.output) if args.output is not None else None),
            base_dir=(str(args.base_dir) if args.base_dir is not None else None),
            macro=str(args.macro),
            style=str(args.style),
            per_line=(int(args.per_line) if args.per_line is not None else None),
            backend=str(args.backend),
        )
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(str(exc), file=sys.stderr)
        return 1

    if args.output is None:
        sys.stdout.write(expanded)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
