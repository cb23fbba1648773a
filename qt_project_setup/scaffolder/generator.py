"""Main scaffolding orchestrator.

Takes a ``ProjectSettings`` value and produces a buildable Qt 6 + CMake
application skeleton: build scripts, C++ sources and headers, Designer
forms, resources, a stylesheet and (optionally) QML.

Generation happens in two steps.  :meth:`ProjectGenerator.render` turns the
settings into a list of in-memory ``Artifact`` objects; it is pure and every
artifact depends only on the settings and four derived flags.  The write
step then hands the whole list to a single ``WriteTransaction``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from jinja2 import TemplateError

from ..settings import ProjectSettings, UiFramework
from ..utils import include_guard_token, normalize_sdk_path
from .models import Artifact, GenerationError, GenerationResult
from .templates import TemplateRenderer
from .writer import WriteTransaction, run_write_transaction, run_write_transaction_async


# ---------------------------------------------------------------------------
# Fixed project layout and template data
# ---------------------------------------------------------------------------

DIRECTORY_SKELETON: tuple[str, ...] = (
    ".idea",
    "cmake",
    "src",
    "src/ui",
    "include",
    "include/ui",
    "ui",
    "res",
    "res/styles",
    "res/qml",
    "res/icons",
)

QT_BASE_MODULES: tuple[str, ...] = ("Widgets", "Gui")
QT_QML_MODULES: tuple[str, ...] = ("Quick", "Qml", "QuickWidgets", "QuickControls2")

BUILD_PROFILES: tuple[str, ...] = ("Debug", "Release")

# Plugin folders copied wholesale next to a dynamically linked executable.
PLUGIN_DIRS: tuple[str, ...] = ("styles", "imageformats")

MINGW_RUNTIME_DLLS: tuple[str, ...] = (
    "libgcc_s_seh-1.dll",
    "libstdc++-6.dll",
    "libwinpthread-1.dll",
)

# Loaded by the QML engine at runtime without a link-time dependency.
QML_RUNTIME_DLLS: tuple[str, ...] = (
    "Qt6QmlModels",
    "Qt6QmlWorkerScript",
    "Qt6QmlCore",
    "Qt6QmlMeta",
    "Qt6QmlNetwork",
    "Qt6QuickTemplates2",
    "Qt6QuickLayouts",
    "Qt6QuickControls2",
    "Qt6QuickControls2Impl",
    "Qt6QuickControls2Basic",
    "Qt6QuickControls2BasicStyleImpl",
    "Qt6QuickControls2Fusion",
    "Qt6QuickControls2FusionStyleImpl",
    "Qt6QuickControls2Material",
    "Qt6QuickControls2MaterialStyleImpl",
    "Qt6QuickControls2Universal",
    "Qt6QuickControls2UniversalStyleImpl",
    "Qt6QuickControls2Imagine",
    "Qt6QuickControls2ImagineStyleImpl",
    "Qt6QmlLocalStorage",
    "Qt6QmlXmlListModel",
    "Qt6Network",
    "Qt6OpenGL",
    "Qt6ShaderTools",
    "Qt6Svg",
)

# (CMake condition, label, plugin target) in if/elseif order.
STATIC_PLATFORM_PLUGINS: tuple[tuple[str, str, str], ...] = (
    ("WIN32", "Windows", "QWindowsIntegrationPlugin"),
    ("UNIX AND NOT APPLE", "Linux (XCB)", "QXcbIntegrationPlugin"),
    ("APPLE", "macOS", "QCocoaIntegrationPlugin"),
)

TITLEBAR_BUTTONS: tuple[dict[str, Any], ...] = (
    {"name": "minimizeButton", "text": "−", "point_size": 12},
    {"name": "maximizeButton", "text": "□", "point_size": 12},
    {"name": "closeButton", "text": "✕", "point_size": None},
)

ACCENT_COLORS: dict[str, str] = {
    "base": "#4a90d9",
    "hover": "#5da3ec",
    "pressed": "#3d7fc8",
}

ASSETS_DIR = Path(__file__).parent / "assets"


# ---------------------------------------------------------------------------
# Template selection table
# ---------------------------------------------------------------------------


def _always(ctx: dict[str, Any]) -> bool:
    return True


@dataclass(frozen=True)
class TemplateEntry:
    """Maps one template (or bundled asset) to its output path.

    ``template`` may reference ``{window_family}`` or ``{content_family}``;
    both are filled from the context before lookup.  Entries with an
    ``asset`` copy that file from the assets directory instead of rendering.
    """

    template: str
    directory: str
    name: str
    when: Callable[[dict[str, Any]], bool] = _always
    asset: str | None = None


TEMPLATE_TABLE: tuple[TemplateEntry, ...] = (
    TemplateEntry("gitignore.j2", "", ".gitignore"),
    TemplateEntry("idea/cmake.xml.j2", ".idea", "cmake.xml"),
    TemplateEntry("CMakeLists.txt.j2", "", "CMakeLists.txt"),
    TemplateEntry(
        "cmake/QtStaticHelpers.cmake.j2", "cmake", "QtStaticHelpers.cmake",
        lambda ctx: ctx["use_static_qt"],
    ),
    TemplateEntry(
        "cmake/QtDynamicHelpers.cmake.j2", "cmake", "QtDynamicHelpers.cmake",
        lambda ctx: not ctx["use_static_qt"],
    ),
    TemplateEntry("src/main.cpp.j2", "src", "main.cpp"),
    TemplateEntry("{window_family}/mainwindow.h.j2", "include/ui", "mainwindow.h"),
    TemplateEntry("{window_family}/mainwindow.cpp.j2", "src/ui", "mainwindow.cpp"),
    TemplateEntry("{window_family}/mainwindow.ui.j2", "ui", "mainwindow.ui"),
    TemplateEntry("res/resources.qrc.j2", "res", "resources.qrc"),
    TemplateEntry("res/base.qss.j2", "res/styles", "base.qss"),
    TemplateEntry("qml/main.qml.j2", "res/qml", "main.qml", lambda ctx: ctx["use_qml"]),
    TemplateEntry(
        "qml/AnimatedButton.qml.j2", "res/qml", "AnimatedButton.qml",
        lambda ctx: ctx["use_qml"],
    ),
    TemplateEntry(
        "widgets/startup_page.h.j2", "include/ui", "startup_page.h",
        lambda ctx: not ctx["use_qml"],
    ),
    TemplateEntry(
        "widgets/startup_page.cpp.j2", "src/ui", "startup_page.cpp",
        lambda ctx: not ctx["use_qml"],
    ),
    TemplateEntry(
        "widgets/startup_page.ui.j2", "ui", "startup_page.ui",
        lambda ctx: not ctx["use_qml"],
    ),
    TemplateEntry("", "res/icons", "app.ico", asset="app.ico"),
    TemplateEntry("", "res/icons", "app.png", asset="app.png"),
    TemplateEntry("res/app.rc.j2", "res", "app.rc"),
)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectSettings``, generates a directory tree containing:
    - CMakeLists.txt plus a static or dynamic Qt link-helper module
    - ``main.cpp`` and a ``MainWindow`` (standard or custom titlebar)
    - a Widgets startup page or a QML root document with an animated button
    - a resource manifest, base stylesheet, Windows icon resource and icons
    - IDE CMake profiles pointing at the Qt SDK
    """

    def __init__(
        self,
        settings: ProjectSettings,
        renderer: TemplateRenderer | None = None,
        assets_dir: str | Path | None = None,
    ) -> None:
        self.settings = settings
        self.renderer = renderer or TemplateRenderer()
        self.assets_dir = Path(assets_dir) if assets_dir is not None else ASSETS_DIR

    # -- Public API --------------------------------------------------------

    def render(self, project_name: str) -> list[Artifact]:
        """Render every artifact for *project_name* without touching disk.

        Args:
            project_name: Display name used for the CMake project and the
                include-guard prefix.

        Returns:
            Artifacts in write order: text files first, the two icons before
            ``res/app.rc``.

        Raises:
            GenerationError: If a template fails to render.
        """
        context = self._build_context(project_name)
        artifacts: list[Artifact] = []

        for entry in TEMPLATE_TABLE:
            if not entry.when(context):
                continue
            if entry.asset is not None:
                artifacts.append(
                    Artifact(entry.directory, entry.name, source=self.assets_dir / entry.asset)
                )
                continue
            template = entry.template.format(**context)
            artifact = Artifact(entry.directory, entry.name)
            try:
                content = self.renderer.render(template, context)
            except TemplateError as exc:
                raise GenerationError(artifact.relative_path, f"template error: {exc}") from exc
            artifacts.append(Artifact(entry.directory, entry.name, content=content))

        return artifacts

    def generate(
        self, target_dir: str | Path, project_name: str | None = None
    ) -> GenerationResult:
        """Generate the project into *target_dir*, blocking until written.

        Args:
            target_dir: Project root. Created if missing; any existing file
                that would be overwritten aborts the call.
            project_name: Display name. Defaults to the directory's name.

        Returns:
            A ``GenerationResult`` listing written and skipped paths.
        """
        transaction = self._prepare(target_dir, project_name)
        return run_write_transaction(transaction)

    async def generate_async(
        self, target_dir: str | Path, project_name: str | None = None
    ) -> GenerationResult:
        """Awaitable variant of :meth:`generate` for asyncio callers."""
        transaction = self._prepare(target_dir, project_name)
        return await run_write_transaction_async(transaction)

    # -- Internals ---------------------------------------------------------

    def _prepare(self, target_dir: str | Path, project_name: str | None) -> WriteTransaction:
        root = Path(target_dir)
        name = project_name or root.resolve().name
        return WriteTransaction(root, DIRECTORY_SKELETON, self.render(name))

    def _build_context(self, project_name: str) -> dict[str, Any]:
        """Build the Jinja2 template context from the settings."""
        s = self.settings
        use_qml = s.ui_framework == UiFramework.QML
        linkage = "static" if s.use_static_qt else "dynamic"

        qt_modules = list(QT_BASE_MODULES)
        if use_qml:
            qt_modules.extend(QT_QML_MODULES)

        return {
            "project_name": project_name,
            "include_guard": include_guard_token(project_name),
            "qt_path": normalize_sdk_path(s.qt_path),
            "window_title": s.window_title,
            "min_width": s.min_width,
            "min_height": s.min_height,
            "startup_width": s.startup_width,
            "startup_height": s.startup_height,
            "use_qml": use_qml,
            "use_custom_titlebar": s.use_custom_titlebar,
            "use_static_qt": s.use_static_qt,
            "link_helper": f"Qt{linkage.capitalize()}Helpers",
            "configure_function": f"configure_qt_{linkage}_target",
            "window_family": "custom_titlebar" if s.use_custom_titlebar else "standard",
            "content_family": "qml" if use_qml else "widgets",
            "content_member": "qmlWidget" if use_qml else "startupPage",
            "content_setup_call": "setupQmlWidget" if use_qml else "setupStartupPage",
            "qt_modules": qt_modules,
            "build_profiles": BUILD_PROFILES,
            "plugin_dirs": PLUGIN_DIRS,
            "mingw_runtime_dlls": MINGW_RUNTIME_DLLS,
            "qml_runtime_dlls": QML_RUNTIME_DLLS,
            "static_platform_plugins": STATIC_PLATFORM_PLUGINS,
            "titlebar_height": 40,
            "titlebar_buttons": TITLEBAR_BUTTONS,
            "resize_hit_margin": 2,
            "accent": ACCENT_COLORS,
            "quick_controls_style": "Fusion",
            "welcome_text": "Welcome to your Qt Application",
            "subtitle_text": "Click the animated button below!",
        }


def generate_project(
    target_dir: str | Path,
    settings: ProjectSettings,
    project_name: str | None = None,
) -> GenerationResult:
    """Generate a project into *target_dir*; see :meth:`ProjectGenerator.generate`."""
    return ProjectGenerator(settings).generate(target_dir, project_name)
