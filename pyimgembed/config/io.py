from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, TextIO

from pyimgembed.utils.optional_deps import require


def _load_json(f: TextIO) -> Any:
    return json.load(f)


def _load_yaml(f: TextIO) -> Any:
    yaml = require("yaml", extra="yaml", purpose="YAML embed configs")
    return yaml.safe_load(f)


_LOADERS: dict[str, Callable[[TextIO], Any]] = {
    ".json": _load_json,
    ".yml": _load_yaml,
    ".yaml": _load_yaml,
}


def load_config(path: str | Path) -> dict[str, Any]:
    """Load an embed config file into a dict.

    `.json` is always readable; `.yml`/`.yaml` need the `yaml` extra. An empty
    YAML document loads as ``{}``.
    """

    config_path = Path(path)
    suffix = config_path.suffix.lower()
    loader = _LOADERS.get(suffix)
    if loader is None:
        raise ValueError(
            f"Unsupported config extension: {suffix!r} for {str(config_path)!r}. "
            f"Supported: {', '.join(_LOADERS)}."
        )

    with config_path.open("r", encoding="utf-8") as f:
        data = loader(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Embed config must be a mapping at the top level, "
            f"got {type(data).__name__} from {str(config_path)!r}."
        )
    return dict(data)
