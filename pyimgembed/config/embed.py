from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from pyimgembed.config.io import load_config
from pyimgembed.emit import STYLES
from pyimgembed.layouts import resolve_layout

_BACKENDS = ("pillow", "opencv")


def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be a dict/object, got {type(value).__name__}")
    return value


def _optional_positive_int(value: Any, *, name: str) -> int | None:
    if value is None:
        return None
    try:
        out = int(value)
    except Exception as exc:  # noqa: BLE001 - validation boundary
        raise ValueError(f"{name} must be int or null, got {value!r}") from exc
    if out <= 0:
        raise ValueError(f"{name} must be positive, got {out}")
    return out


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_choice(value: Any, *, name: str, choices: tuple[str, ...], default: str) -> str:
    if value is None:
        return default
    text = str(value).lower().strip()
    if text not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return text


@dataclass(frozen=True)
class EmitConfig:
    style: str = "rust"
    per_line: int | None = None


@dataclass(frozen=True)
class ImageEntry:
    path: str
    format: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class EmbedConfig:
    base_dir: str | None = None
    backend: str = "pillow"
    emit: EmitConfig = field(default_factory=EmitConfig)
    images: tuple[ImageEntry, ...] = ()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "EmbedConfig":
        top = _require_mapping(raw, name="config")

        emit_raw = top.get("emit", None)
        emit_raw = _require_mapping(emit_raw if emit_raw is not None else {}, name="emit")
        emit = EmitConfig(
            style=_parse_choice(emit_raw.get("style", None), name="emit.style", choices=STYLES, default="rust"),
            per_line=_optional_positive_int(emit_raw.get("per_line", None), name="emit.per_line"),
        )

        images_raw = top.get("images", None)
        if images_raw is None:
            images_raw = []
        if not isinstance(images_raw, (list, tuple)):
            raise ValueError(f"images must be a list, got {type(images_raw).__name__}")

        images: list[ImageEntry] = []
        for i, item in enumerate(images_raw):
            if isinstance(item, str):
                item = {"path": item}
            entry_raw = _require_mapping(item, name=f"images[{i}]")
            path = _optional_str(entry_raw.get("path", None))
            if path is None:
                raise ValueError(f"images[{i}].path is required")
            fmt = _optional_str(entry_raw.get("format", None))
            if fmt is not None:
                # fail at load time rather than halfway through a batch
                resolve_layout(fmt)
            images.append(ImageEntry(path=path, format=fmt, name=_optional_str(entry_raw.get("name", None))))

        return cls(
            base_dir=_optional_str(top.get("base_dir", None)),
            backend=_parse_choice(top.get("backend", None), name="backend", choices=_BACKENDS, default="pillow"),
            emit=emit,
            images=tuple(images),
        )


def load_embed_config(path: str | Path) -> EmbedConfig:
    """Load and validate an embed config; ``base_dir`` defaults to the file's directory."""

    config_path = Path(path)
    cfg = EmbedConfig.from_dict(load_config(config_path))
    if cfg.base_dir is None:
        base_dir = config_path.parent
    else:
        base_dir = config_path.parent / cfg.base_dir
    return EmbedConfig(base_dir=str(base_dir), backend=cfg.backend, emit=cfg.emit, images=cfg.images)
