"""qt-project-setup scaffolder -- generates complete Qt 6 project trees.

This module takes a ``ProjectSettings`` value as input and renders a
buildable Qt 6 + CMake application: build scripts with a static or dynamic
link helper, a main window (native or custom titlebar), a Widgets or QML
content area, resources, a stylesheet and IDE CMake profiles.

Quick usage::

    from qt_project_setup.settings import ProjectSettings
    from qt_project_setup.scaffolder import ProjectGenerator

    settings = ProjectSettings(qt_path="C:/Qt/6.8.0/mingw_64")
    result = ProjectGenerator(settings).generate("/tmp/MyApp")
"""

from qt_project_setup.scaffolder.generator import ProjectGenerator, generate_project
from qt_project_setup.scaffolder.models import Artifact, GenerationError, GenerationResult
from qt_project_setup.scaffolder.templates import TemplateRenderer

__all__ = [
    "Artifact",
    "GenerationError",
    "GenerationResult",
    "ProjectGenerator",
    "TemplateRenderer",
    "generate_project",
]
