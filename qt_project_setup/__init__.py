"""qt-project-setup -- scaffolds ready-to-build Qt 6 + CMake desktop applications."""

__version__ = "1.0.0"
