"""Project settings model, Qt SDK validation and the settings form.

``ProjectSettings`` is the immutable value the generator consumes.
``SettingsForm`` is the editable form state a front end (CLI flags or
interactive prompts) fills in; it validates on demand and resolves into a
``ProjectSettings`` while remembering the SDK choices for next time.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_QT_PATH, Preferences

DIMENSION_MIN = 100
DIMENSION_MAX = 10000

# Core runtime library name per host platform, looked up in ``<sdk>/bin``.
_DYNAMIC_CORE_PATTERNS: dict[str, tuple[str, ...]] = {
    "win32": ("Qt6Core.dll",),
    "posix": ("libQt6Core.so", "libQt6Core.so.*"),
    "darwin": ("libQt6Core.dylib", "libQt6Core.*.dylib"),
}

# Static core library: GCC-style archive, then MSVC-style import library.
_STATIC_CORE_NAMES: tuple[str, str] = ("libQt6Core.a", "Qt6Core.lib")


class UiFramework(str, Enum):
    """Content-area technology of the generated application."""

    WIDGETS = "widgets"
    QML = "qml"


class ProjectSettings(BaseModel):
    """Fully-resolved user choices for one generation call."""

    model_config = ConfigDict(frozen=True)

    qt_path: str = Field(default=DEFAULT_QT_PATH, description="Qt SDK installation directory")
    window_title: str = Field(default="My Application")
    min_width: int = Field(default=800, gt=0)
    min_height: int = Field(default=600, gt=0)
    startup_width: int = Field(default=1280, gt=0)
    startup_height: int = Field(default=720, gt=0)
    use_custom_titlebar: bool = Field(default=False)
    use_static_qt: bool = Field(default=False)
    ui_framework: UiFramework = Field(default=UiFramework.WIDGETS)


@dataclass(frozen=True)
class ValidationInfo:
    """A user-correctable problem bound to the form field that caused it."""

    message: str
    field: str


# ---------------------------------------------------------------------------
# Qt SDK validation
# ---------------------------------------------------------------------------


def _platform_key(platform: str | None) -> str:
    name = platform or sys.platform
    if name.startswith(("win32", "cygwin", "msys")):
        return "win32"
    if name == "darwin":
        return "darwin"
    # Linux, the BSDs and other ELF systems share the .so naming.
    return "posix"


def validate_qt_path(
    qt_path: str,
    use_static_qt: bool,
    platform: str | None = None,
) -> ValidationInfo | None:
    """Check that *qt_path* points at a usable Qt 6 installation.

    Dynamic linking needs the core runtime library in ``bin``; static linking
    needs the core static library in ``lib`` (MinGW ``.a`` or MSVC ``.lib``).

    Args:
        qt_path: Candidate SDK directory as typed by the user.
        use_static_qt: Whether the project links Qt statically.
        platform: ``sys.platform``-style name selecting the dynamic-library
            naming convention. Defaults to the host platform.

    Returns:
        ``None`` when the path is usable, otherwise a ``ValidationInfo``
        bound to the ``qt_path`` field.
    """
    if not qt_path or not qt_path.strip():
        return ValidationInfo("Qt installation path cannot be empty", "qt_path")

    root = Path(qt_path)
    if not root.exists():
        return ValidationInfo("Qt installation path does not exist", "qt_path")
    if not root.is_dir():
        return ValidationInfo("Qt installation path must be a directory", "qt_path")

    if use_static_qt:
        lib_dir = root / "lib"
        if not lib_dir.is_dir():
            return ValidationInfo(
                "Static Qt installation path should contain a 'lib' directory", "qt_path"
            )
        if not any((lib_dir / name).exists() for name in _STATIC_CORE_NAMES):
            return ValidationInfo(
                "Static Qt installation path should contain Qt6Core static library "
                f"({' or '.join(_STATIC_CORE_NAMES)}) in 'lib' directory",
                "qt_path",
            )
        return None

    bin_dir = root / "bin"
    if not bin_dir.is_dir():
        return ValidationInfo("Qt installation path should contain a 'bin' directory", "qt_path")
    patterns = _DYNAMIC_CORE_PATTERNS[_platform_key(platform)]
    if not any(any(bin_dir.glob(pattern)) for pattern in patterns):
        return ValidationInfo(
            f"Qt installation path should contain '{patterns[0]}' in 'bin' directory",
            "qt_path",
        )
    return None


# ---------------------------------------------------------------------------
# Settings form
# ---------------------------------------------------------------------------


class SettingsForm(BaseModel):
    """Editable form state behind the wizard front ends.

    Mirrors ``ProjectSettings`` but stays mutable so a front end can update
    one field at a time and re-run :meth:`validate_form` after each change.
    """

    model_config = ConfigDict(validate_assignment=True)

    qt_path: str = DEFAULT_QT_PATH
    window_title: str = "My Application"
    min_width: int = 800
    min_height: int = 600
    startup_width: int = 1280
    startup_height: int = 720
    use_custom_titlebar: bool = False
    use_static_qt: bool = False
    ui_framework: UiFramework = UiFramework.WIDGETS

    @classmethod
    def from_preferences(cls, prefs: Preferences) -> "SettingsForm":
        """Seed a form with the remembered SDK path and linkage mode."""
        return cls(qt_path=prefs.qt_path, use_static_qt=prefs.use_static_qt)

    def validate_dimensions(self) -> ValidationInfo | None:
        """Check every window dimension against the accepted range."""
        for field in ("min_width", "min_height", "startup_width", "startup_height"):
            value = getattr(self, field)
            if not DIMENSION_MIN <= value <= DIMENSION_MAX:
                label = field.replace("_", " ").capitalize()
                return ValidationInfo(
                    f"{label} must be between {DIMENSION_MIN} and {DIMENSION_MAX}", field
                )
        return None

    def validate_form(self, platform: str | None = None) -> ValidationInfo | None:
        """Return the first problem with the current form state, if any."""
        return self.validate_dimensions() or validate_qt_path(
            self.qt_path, self.use_static_qt, platform
        )

    def to_settings(self, preferences_path: Path | None = None) -> ProjectSettings:
        """Resolve the form into settings, remembering the SDK choices.

        Args:
            preferences_path: Where to persist ``qt_path`` and
                ``use_static_qt``. Nothing is persisted when omitted.
        """
        if preferences_path is not None:
            Preferences(qt_path=self.qt_path, use_static_qt=self.use_static_qt).save(
                preferences_path
            )
        return ProjectSettings(**self.model_dump())
