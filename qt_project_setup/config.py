"""qt-project-setup configuration.

Typed configuration for the command-line front end.  ``Preferences`` holds
the choices remembered between sessions (last-used Qt SDK path and linkage
mode); ``AppConfig`` locates where those preferences live.  Both are
Pydantic v2 models so they validate at construction time and serialise to
and from JSON without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

DEFAULT_QT_PATH = "C:/Qt/6.8.0/mingw_64"
DEFAULT_CONFIG_DIR = Path("~/.config/qt-project-setup")
PREFERENCES_FILE_NAME = "preferences.json"


class Preferences(BaseModel):
    """User choices persisted across sessions."""

    qt_path: str = Field(default=DEFAULT_QT_PATH, description="Last-used Qt SDK path")
    use_static_qt: bool = Field(default=False, description="Last-used linkage mode")

    def save(self, path: Path) -> Path:
        """Persist the preferences to a JSON file.

        Parent directories are created automatically.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Preferences":
        """Load previously-saved preferences.

        A missing or unreadable file yields the defaults; remembered choices
        are a convenience and must never block the wizard.
        """
        source = Path(path)
        if not source.exists():
            return cls()
        try:
            return cls.model_validate_json(source.read_text(encoding="utf-8"))
        except (OSError, ValidationError):
            return cls()


class AppConfig(BaseModel):
    """Runtime configuration for the CLI.

    Instances are created once by the entry point, usually via
    :meth:`from_env`, and passed to whatever needs the config directory.
    """

    config_dir: Path = Field(default=DEFAULT_CONFIG_DIR)
    qt_path_override: str | None = Field(
        default=None, description="Forces the SDK path shown as default"
    )

    @property
    def preferences_path(self) -> Path:
        """Path to the persisted ``preferences.json``."""
        return self.config_dir.expanduser() / PREFERENCES_FILE_NAME

    def load_preferences(self) -> Preferences:
        """Load preferences, applying the environment SDK path override."""
        prefs = Preferences.load(self.preferences_path)
        if self.qt_path_override:
            prefs = prefs.model_copy(update={"qt_path": self.qt_path_override})
        return prefs

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build an ``AppConfig`` from environment variables.

        Recognised variables (all optional):
            QT_PROJECT_SETUP_HOME, QT_PROJECT_SETUP_QT_PATH.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("QT_PROJECT_SETUP_HOME"):
            kwargs["config_dir"] = Path(os.environ["QT_PROJECT_SETUP_HOME"])
        if os.environ.get("QT_PROJECT_SETUP_QT_PATH"):
            kwargs["qt_path_override"] = os.environ["QT_PROJECT_SETUP_QT_PATH"]
        return cls(**kwargs)
