"""Command-line front end for qt-project-setup.

Collects the wizard choices from flags (or interactive prompts), validates
them against the Qt SDK on disk, then generates the project and reports the
outcome through the Rich console.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.prompt import Confirm, IntPrompt, Prompt

from . import __version__
from .config import AppConfig
from .scaffolder import GenerationError, ProjectGenerator
from .settings import ProjectSettings, SettingsForm, UiFramework, ValidationInfo
from .utils import (
    console,
    create_progress,
    parse_size,
    print_error,
    print_file_list,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _size_arg(value: str) -> tuple[int, int]:
    try:
        return parse_size(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qt-project-setup",
        description="Generate a ready-to-build Qt 6 + CMake desktop application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  qt-project-setup ./MyApp\n"
            "  qt-project-setup ./MyApp --framework qml --custom-titlebar\n"
            "  qt-project-setup ./MyApp --qt-path C:/Qt/6.8.0/mingw_64 --static\n"
            "  qt-project-setup ./MyApp --interactive\n"
        ),
    )

    parser.add_argument("target", help="Project directory (created if missing)")
    parser.add_argument(
        "--name",
        default=None,
        help="Project display name (default: the target directory's name)",
    )
    parser.add_argument(
        "--qt-path",
        default=None,
        help="Qt SDK installation directory (default: last used)",
    )
    parser.add_argument("--title", default=None, help="Main window title")
    parser.add_argument(
        "--min-size",
        type=_size_arg,
        default=None,
        metavar="WxH",
        help="Minimum window size (default: 800x600)",
    )
    parser.add_argument(
        "--startup-size",
        type=_size_arg,
        default=None,
        metavar="WxH",
        help="Initial window size (default: 1280x720)",
    )

    linkage = parser.add_mutually_exclusive_group()
    linkage.add_argument(
        "--static",
        dest="use_static_qt",
        action="store_const",
        const=True,
        default=None,
        help="Link Qt statically",
    )
    linkage.add_argument(
        "--dynamic",
        dest="use_static_qt",
        action="store_const",
        const=False,
        help="Link Qt dynamically and deploy its DLLs",
    )

    parser.add_argument(
        "--custom-titlebar",
        action="store_true",
        help="Use a frameless window with a drawn titlebar",
    )
    parser.add_argument(
        "--framework",
        choices=[f.value for f in UiFramework],
        default=None,
        help="Content area technology (default: widgets)",
    )
    parser.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Prompt for every setting",
    )
    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Do not check the Qt SDK path before generating",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the files that would be generated without writing them",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _apply_args(form: SettingsForm, args: argparse.Namespace) -> SettingsForm:
    """Overlay explicitly given flags onto the form."""
    if args.qt_path is not None:
        form.qt_path = args.qt_path
    if args.use_static_qt is not None:
        form.use_static_qt = args.use_static_qt
    if args.title is not None:
        form.window_title = args.title
    if args.min_size is not None:
        form.min_width, form.min_height = args.min_size
    if args.startup_size is not None:
        form.startup_width, form.startup_height = args.startup_size
    if args.custom_titlebar:
        form.use_custom_titlebar = True
    if args.framework is not None:
        form.ui_framework = UiFramework(args.framework)
    return form


# ---------------------------------------------------------------------------
# Interactive prompts
# ---------------------------------------------------------------------------


def _report_invalid(info: ValidationInfo) -> None:
    print_error(f"Invalid {info.field}: {info.message}")


def prompt_form(form: SettingsForm, skip_validation: bool = False) -> SettingsForm:
    """Ask for every field, repeating until the form validates."""
    while True:
        form.qt_path = Prompt.ask("Qt installation path", default=form.qt_path, console=console)
        form.use_static_qt = Confirm.ask(
            "Link Qt statically?", default=form.use_static_qt, console=console
        )
        form.window_title = Prompt.ask("Window title", default=form.window_title, console=console)
        form.min_width = IntPrompt.ask("Minimum width", default=form.min_width, console=console)
        form.min_height = IntPrompt.ask("Minimum height", default=form.min_height, console=console)
        form.startup_width = IntPrompt.ask(
            "Startup width", default=form.startup_width, console=console
        )
        form.startup_height = IntPrompt.ask(
            "Startup height", default=form.startup_height, console=console
        )
        form.use_custom_titlebar = Confirm.ask(
            "Use a custom titlebar?", default=form.use_custom_titlebar, console=console
        )
        form.ui_framework = UiFramework(
            Prompt.ask(
                "UI framework",
                choices=[f.value for f in UiFramework],
                default=form.ui_framework.value,
                console=console,
            )
        )

        info = form.validate_dimensions() if skip_validation else form.validate_form()
        if info is None:
            return form
        _report_invalid(info)


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------


def _print_settings_summary(settings: ProjectSettings, project_name: str, root: Path) -> None:
    print_summary_table(
        {
            "Project": project_name,
            "Location": str(root),
            "Qt SDK": settings.qt_path,
            "Linkage": "static" if settings.use_static_qt else "dynamic",
            "UI framework": settings.ui_framework.value,
            "Titlebar": "custom" if settings.use_custom_titlebar else "native",
            "Window": (
                f"{settings.startup_width}x{settings.startup_height} "
                f"(min {settings.min_width}x{settings.min_height})"
            ),
        },
        title="Qt Project",
    )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``qt-project-setup`` and ``python -m qt_project_setup``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = AppConfig.from_env()
    form = _apply_args(SettingsForm.from_preferences(config.load_preferences()), args)

    target = Path(args.target)
    project_name = args.name or target.resolve().name

    if args.interactive:
        form = prompt_form(form, skip_validation=args.skip_validation)
    else:
        info = form.validate_dimensions() if args.skip_validation else form.validate_form()
        if info is not None:
            _report_invalid(info)
            sys.exit(1)

    settings = form.to_settings(None if args.dry_run else config.preferences_path)
    generator = ProjectGenerator(settings)

    if args.dry_run:
        try:
            artifacts = generator.render(project_name)
        except GenerationError as exc:
            print_error(f"Error: {exc}")
            sys.exit(1)
        _print_settings_summary(settings, project_name, target)
        print_file_list([a.relative_path for a in artifacts], title="Files (dry run)")
        return

    try:
        with create_progress() as progress:
            progress.add_task("Generating project files...", total=None)
            result = generator.generate(target, project_name)
    except GenerationError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    _print_settings_summary(settings, project_name, result.root)
    print_file_list(result.written, title="Files written")
    for path in result.skipped:
        print_warning(f"Skipped {path}: bundled asset not found")
    print_success(f"Project '{project_name}' generated in {result.root}")


if __name__ == "__main__":
    main()
