"""Unit tests for settings, SDK validation and the form (qt_project_setup.settings).

Tests cover:
- ProjectSettings defaults, immutability, positive dimensions
- validate_qt_path for dynamic and static layouts on each platform
- SettingsForm seeding, dimension range checks, resolution and persistence
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from qt_project_setup.config import Preferences
from qt_project_setup.settings import (
    ProjectSettings,
    SettingsForm,
    UiFramework,
    ValidationInfo,
    validate_qt_path,
)


# ---------------------------------------------------------------------------
# ProjectSettings
# ---------------------------------------------------------------------------


class TestProjectSettings:
    @pytest.mark.unit
    def test_defaults(self):
        s = ProjectSettings()
        assert s.window_title == "My Application"
        assert (s.min_width, s.min_height) == (800, 600)
        assert (s.startup_width, s.startup_height) == (1280, 720)
        assert s.use_custom_titlebar is False
        assert s.use_static_qt is False
        assert s.ui_framework == UiFramework.WIDGETS

    @pytest.mark.unit
    def test_frozen(self):
        s = ProjectSettings()
        with pytest.raises(ValidationError):
            s.window_title = "Changed"

    @pytest.mark.unit
    @pytest.mark.parametrize("field", ["min_width", "min_height", "startup_width", "startup_height"])
    def test_dimensions_must_be_positive(self, field: str):
        with pytest.raises(ValidationError):
            ProjectSettings(**{field: 0})

    @pytest.mark.unit
    def test_framework_from_string(self):
        assert ProjectSettings(ui_framework="qml").ui_framework is UiFramework.QML


# ---------------------------------------------------------------------------
# validate_qt_path
# ---------------------------------------------------------------------------


class TestValidateQtPath:
    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_path(self, value: str):
        info = validate_qt_path(value, use_static_qt=False)
        assert info == ValidationInfo("Qt installation path cannot be empty", "qt_path")

    @pytest.mark.unit
    def test_missing_path(self, tmp_path: Path):
        info = validate_qt_path(str(tmp_path / "nope"), use_static_qt=False)
        assert info is not None
        assert info.message == "Qt installation path does not exist"

    @pytest.mark.unit
    def test_path_is_file(self, tmp_path: Path):
        f = tmp_path / "qt.txt"
        f.write_text("x", encoding="utf-8")
        info = validate_qt_path(str(f), use_static_qt=False)
        assert info is not None
        assert info.message == "Qt installation path must be a directory"

    @pytest.mark.unit
    def test_dynamic_missing_bin(self, tmp_path: Path):
        info = validate_qt_path(str(tmp_path), use_static_qt=False, platform="win32")
        assert info is not None
        assert info.message == "Qt installation path should contain a 'bin' directory"
        assert info.field == "qt_path"

    @pytest.mark.unit
    def test_dynamic_missing_core_library(self, tmp_path: Path):
        (tmp_path / "bin").mkdir()
        info = validate_qt_path(str(tmp_path), use_static_qt=False, platform="win32")
        assert info is not None
        assert "Qt6Core.dll" in info.message

    @pytest.mark.unit
    @pytest.mark.parametrize("platform", ["win32", "linux", "darwin"])
    def test_dynamic_valid_on_each_platform(self, fake_qt_dynamic: Path, platform: str):
        assert validate_qt_path(str(fake_qt_dynamic), use_static_qt=False, platform=platform) is None

    @pytest.mark.unit
    @pytest.mark.parametrize("platform", ["freebsd14", "openbsd7", "sunos5"])
    def test_other_posix_platforms_use_so_naming(self, tmp_path: Path, platform: str):
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        (bin_dir / "libQt6Core.so.6").write_bytes(b"")

        assert validate_qt_path(str(tmp_path), False, platform=platform) is None

    @pytest.mark.unit
    def test_dynamic_uses_platform_naming(self, tmp_path: Path):
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        (bin_dir / "libQt6Core.so.6").write_bytes(b"")

        assert validate_qt_path(str(tmp_path), False, platform="linux") is None
        info = validate_qt_path(str(tmp_path), False, platform="win32")
        assert info is not None
        assert "Qt6Core.dll" in info.message

    @pytest.mark.unit
    def test_static_missing_lib(self, tmp_path: Path):
        info = validate_qt_path(str(tmp_path), use_static_qt=True)
        assert info is not None
        assert info.message == "Static Qt installation path should contain a 'lib' directory"

    @pytest.mark.unit
    def test_static_missing_core_names_both(self, tmp_path: Path):
        (tmp_path / "lib").mkdir()
        info = validate_qt_path(str(tmp_path), use_static_qt=True)
        assert info is not None
        assert "libQt6Core.a" in info.message
        assert "Qt6Core.lib" in info.message

    @pytest.mark.unit
    def test_static_mingw_valid(self, fake_qt_static: Path):
        assert validate_qt_path(str(fake_qt_static), use_static_qt=True) is None

    @pytest.mark.unit
    def test_static_msvc_valid(self, tmp_path: Path):
        (tmp_path / "lib").mkdir()
        (tmp_path / "lib" / "Qt6Core.lib").write_bytes(b"")
        assert validate_qt_path(str(tmp_path), use_static_qt=True) is None

    @pytest.mark.unit
    def test_static_sdk_rejected_for_dynamic(self, fake_qt_static: Path):
        info = validate_qt_path(str(fake_qt_static), use_static_qt=False, platform="win32")
        assert info is not None
        assert "'bin'" in info.message


# ---------------------------------------------------------------------------
# SettingsForm
# ---------------------------------------------------------------------------


class TestSettingsForm:
    @pytest.mark.unit
    def test_from_preferences(self):
        form = SettingsForm.from_preferences(Preferences(qt_path="/qt", use_static_qt=True))
        assert form.qt_path == "/qt"
        assert form.use_static_qt is True
        assert form.window_title == "My Application"

    @pytest.mark.unit
    def test_valid_form(self, fake_qt_dynamic: Path):
        form = SettingsForm(qt_path=str(fake_qt_dynamic))
        assert form.validate_form(platform="win32") is None

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [99, 10001])
    def test_dimension_out_of_range(self, fake_qt_dynamic: Path, value: int):
        form = SettingsForm(qt_path=str(fake_qt_dynamic))
        form.startup_height = value

        info = form.validate_form(platform="win32")

        assert info == ValidationInfo(
            "Startup height must be between 100 and 10000", "startup_height"
        )

    @pytest.mark.unit
    def test_dimension_checked_before_path(self):
        form = SettingsForm(qt_path="", min_width=50)
        info = form.validate_form()
        assert info is not None
        assert info.field == "min_width"

    @pytest.mark.unit
    def test_validate_dimensions_ignores_sdk_path(self):
        form = SettingsForm(qt_path="")
        assert form.validate_dimensions() is None

        form.min_height = 0
        info = form.validate_dimensions()
        assert info is not None
        assert info.field == "min_height"

    @pytest.mark.unit
    def test_bounds_inclusive(self, fake_qt_dynamic: Path):
        form = SettingsForm(
            qt_path=str(fake_qt_dynamic),
            min_width=100,
            min_height=100,
            startup_width=10000,
            startup_height=10000,
        )
        assert form.validate_form(platform="linux") is None

    @pytest.mark.unit
    def test_assignment_is_validated(self):
        form = SettingsForm()
        with pytest.raises(ValidationError):
            form.min_width = "wide"

    @pytest.mark.unit
    def test_to_settings_without_persisting(self, tmp_path: Path):
        form = SettingsForm(qt_path="/qt", ui_framework=UiFramework.QML, use_custom_titlebar=True)

        settings = form.to_settings()

        assert isinstance(settings, ProjectSettings)
        assert settings.qt_path == "/qt"
        assert settings.ui_framework is UiFramework.QML
        assert settings.use_custom_titlebar is True
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.unit
    def test_to_settings_persists_sdk_choices(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        SettingsForm(qt_path="/static/qt", use_static_qt=True, window_title="X").to_settings(path)

        prefs = Preferences.load(path)
        assert prefs == Preferences(qt_path="/static/qt", use_static_qt=True)
