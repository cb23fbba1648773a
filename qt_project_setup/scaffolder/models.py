"""Data types shared by the generator and the write transaction."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath


class GenerationError(Exception):
    """Raised when a project cannot be rendered or written.

    ``path`` is the project-relative path of the artifact (or directory)
    that failed, so front ends can point at the offending file.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


@dataclass(frozen=True)
class Artifact:
    """One generated file.

    Textual artifacts carry rendered ``content``; binary artifacts carry the
    ``source`` of a bundled asset that is copied byte-for-byte.
    """

    directory: str
    name: str
    content: str | None = None
    source: Path | None = None

    @property
    def relative_path(self) -> str:
        """Project-relative POSIX path, e.g. ``"src/ui/mainwindow.cpp"``."""
        return str(PurePosixPath(self.directory or ".") / self.name)

    @property
    def is_binary(self) -> bool:
        return self.source is not None


@dataclass
class GenerationResult:
    """Outcome of a successful generation call."""

    root: Path
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
