"""Shared pytest fixtures for the qt-project-setup test suite.

Provides reusable fixtures for:
- Fake Qt SDK installations (dynamic and static layouts)
- Project settings for the common flag combinations
- An isolated preferences directory for every test
"""

from __future__ import annotations

from pathlib import Path

import pytest

from qt_project_setup.settings import ProjectSettings, UiFramework


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the preferences directory at a temp dir so tests never touch ~."""
    config_home = tmp_path / "config-home"
    monkeypatch.setenv("QT_PROJECT_SETUP_HOME", str(config_home))
    monkeypatch.delenv("QT_PROJECT_SETUP_QT_PATH", raising=False)
    yield config_home


# ---------------------------------------------------------------------------
# Fake Qt SDKs
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_qt_dynamic(tmp_path: Path) -> Path:
    """A Qt SDK layout usable for dynamic linking on any host platform."""
    root = tmp_path / "Qt" / "6.8.0" / "mingw_64"
    bin_dir = root / "bin"
    bin_dir.mkdir(parents=True)
    for name in ("Qt6Core.dll", "libQt6Core.so.6", "libQt6Core.6.dylib"):
        (bin_dir / name).write_bytes(b"")
    yield root


@pytest.fixture
def fake_qt_static(tmp_path: Path) -> Path:
    """A Qt SDK layout with a MinGW-style static core library."""
    root = tmp_path / "Qt" / "6.8.0" / "static"
    lib_dir = root / "lib"
    lib_dir.mkdir(parents=True)
    (lib_dir / "libQt6Core.a").write_bytes(b"")
    yield root


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def widgets_settings() -> ProjectSettings:
    """Widgets content, native titlebar, dynamic linking."""
    return ProjectSettings(
        qt_path="C:\\Qt\\6.8.0\\mingw_64",
        window_title="Demo",
        min_width=800,
        min_height=600,
        startup_width=1280,
        startup_height=720,
        use_custom_titlebar=False,
        use_static_qt=False,
        ui_framework=UiFramework.WIDGETS,
    )


@pytest.fixture
def qml_custom_settings() -> ProjectSettings:
    """QML content, custom titlebar, static linking."""
    return ProjectSettings(
        qt_path="/opt/qt6-static",
        window_title="Custom QML",
        use_custom_titlebar=True,
        use_static_qt=True,
        ui_framework=UiFramework.QML,
    )
