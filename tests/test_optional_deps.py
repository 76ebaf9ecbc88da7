import sys

import pytest

from pyimgembed.utils.optional_deps import install_hint, optional_import, require


def test_optional_import_missing():
    module, error = optional_import("this_package_does_not_exist_123")
    assert module is None
    assert error is not None


def test_optional_import_present():
    module, error = optional_import("numpy")
    assert module is not None
    assert error is None


def test_require_raises_importerror():
    try:
        require("this_package_does_not_exist_123", purpose="unit test")
    except ImportError as exc:
        message = str(exc)
        assert "('this_package_does_not_exist_123') is required" in message
        assert "for unit test" in message
        assert "pip install 'this_package_does_not_exist_123'" in message
    else:
        raise AssertionError("Expected ImportError to be raised")


def test_require_uses_extra_hint():
    try:
        require("this_package_does_not_exist_123", extra="yaml")
    except ImportError as exc:
        assert "pip install 'pyimgembed[yaml]'" in str(exc)
    else:
        raise AssertionError("Expected ImportError to be raised")


def test_install_hint_maps_distribution_names():
    assert install_hint("cv2") == "pip install 'opencv-python'"
    assert install_hint("PIL.Image") == "pip install 'Pillow'"
    assert install_hint("some_module") == "pip install 'some_module'"


def test_install_hint_prefers_project_extra():
    assert install_hint("yaml") == "pip install 'pyimgembed[yaml]'"
    assert install_hint("cv2", extra="opencv") == "pip install 'pyimgembed[opencv]'"


def test_require_names_distribution_for_known_modules(monkeypatch):
    monkeypatch.setitem(sys.modules, "yaml", None)
    with pytest.raises(ImportError) as exc:
        require("yaml", purpose="YAML embed configs")
    message = str(exc.value)
    assert message.startswith("PyYAML ('yaml') is required for YAML embed configs.")
    assert "pip install 'pyimgembed[yaml]'" in message
