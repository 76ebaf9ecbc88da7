"""Optional dependency helpers.

Decoding with Pillow is always available. The OpenCV decode backend and YAML
config files import their libraries lazily so that `import pyimgembed` and the
CLIs stay cheap.
"""

from __future__ import annotations

from importlib import import_module
from types import ModuleType
from typing import Optional, Tuple

# Modules shipped through a `pyimgembed[...]` extra.
_EXTRAS = {
    "yaml": "yaml",
}

# Modules whose distribution name differs from the import name.
_DISTRIBUTIONS = {
    "cv2": "opencv-python",
    "PIL": "Pillow",
    "yaml": "PyYAML",
}


def optional_import(module_name: str) -> Tuple[Optional[ModuleType], Optional[BaseException]]:
    """Attempt to import a module, returning (module, error)."""

    try:
        return import_module(module_name), None
    except Exception as exc:  # noqa: BLE001 - return import error without swallowing BaseException
        return None, exc


def install_hint(module_name: str, *, extra: Optional[str] = None) -> str:
    """Return the pip command that provides `module_name`.

    An explicit `extra` wins; otherwise modules listed in ``_EXTRAS`` point at
    the matching `pyimgembed[...]` extra and everything else at its
    distribution name.
    """

    root = str(module_name).split(".", 1)[0]
    extra = extra or _EXTRAS.get(root)
    if extra:
        return f"pip install 'pyimgembed[{extra}]'"
    return f"pip install '{_DISTRIBUTIONS.get(root, root)}'"


def require(module_name: str, *, extra: Optional[str] = None, purpose: Optional[str] = None) -> ModuleType:
    """Import `module_name`, raising an ImportError with an install hint if missing."""

    module, error = optional_import(module_name)
    if module is not None:
        return module

    root = str(module_name).split(".", 1)[0]
    distribution = _DISTRIBUTIONS.get(root, root)
    context = f" for {purpose}" if purpose else ""
    raise ImportError(
        f"{distribution} ('{module_name}') is required{context}.\n"
        f"Install it via:\n  {install_hint(module_name, extra=extra)}\n"
        f"Original error: {error}"
    ) from error
