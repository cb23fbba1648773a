"""Transactional writing of a rendered project onto disk.

All file-system mutation goes through one process-wide single-thread
executor.  Callers submit exactly one ``WriteTransaction`` per generation
and either block on the future (:func:`run_write_transaction`) or await it
(:func:`run_write_transaction_async`); an error raised on the writer thread
is re-raised on the caller's side.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from .models import Artifact, GenerationError, GenerationResult

WRITE_EXECUTOR = ThreadPoolExecutor(max_workers=1, thread_name_prefix="qt-project-writer")


class WriteTransaction:
    """Creates the directory skeleton and writes every artifact.

    The transaction refuses to start if any target file already exists.
    If a write fails part-way, files created by this transaction are removed
    before the error propagates; directories stay, since creating them is
    idempotent.
    """

    def __init__(
        self,
        root: str | Path,
        directories: Iterable[str],
        artifacts: Iterable[Artifact],
    ) -> None:
        self.root = Path(root)
        self.directories = list(directories)
        self.artifacts = list(artifacts)
        self._created: list[Path] = []

    # -- Public API --------------------------------------------------------

    def run(self) -> GenerationResult:
        """Execute the transaction. Must run on the writer thread."""
        result = GenerationResult(root=self.root)
        pending: list[Artifact] = []
        for artifact in self.artifacts:
            if artifact.is_binary and not artifact.source.is_file():
                # Bundled icons are best-effort.
                result.skipped.append(artifact.relative_path)
            else:
                pending.append(artifact)

        self._check_conflicts(pending)
        self._create_directories()

        for artifact in pending:
            try:
                self._write(artifact)
            except (OSError, UnicodeError) as exc:
                self._rollback()
                raise GenerationError(artifact.relative_path, str(exc)) from exc
            result.written.append(artifact.relative_path)

        return result

    # -- Steps -------------------------------------------------------------

    def _check_conflicts(self, artifacts: list[Artifact]) -> None:
        for artifact in artifacts:
            if (self.root / artifact.relative_path).exists():
                raise GenerationError(artifact.relative_path, "file already exists")

    def _create_directories(self) -> None:
        for directory in self.directories:
            try:
                (self.root / directory).mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise GenerationError(directory, str(exc)) from exc

    def _write(self, artifact: Artifact) -> None:
        target = self.root / artifact.relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        if artifact.is_binary:
            data = artifact.source.read_bytes()
        else:
            data = (artifact.content or "").encode("utf-8")
        with open(target, "xb") as handle:
            self._created.append(target)
            handle.write(data)

    def _rollback(self) -> None:
        for path in reversed(self._created):
            try:
                path.unlink(missing_ok=True)
            except OSError:
                # The original write error is the one reported.
                continue
        self._created.clear()


# ---------------------------------------------------------------------------
# Submission helpers
# ---------------------------------------------------------------------------


def run_write_transaction(transaction: WriteTransaction) -> GenerationResult:
    """Run *transaction* on the writer thread and block until it finishes."""
    future = WRITE_EXECUTOR.submit(transaction.run)
    return future.result()


async def run_write_transaction_async(transaction: WriteTransaction) -> GenerationResult:
    """Run *transaction* on the writer thread without blocking the event loop."""
    return await asyncio.wrap_future(WRITE_EXECUTOR.submit(transaction.run))
