"""Create a project directory and undo it if installation fails."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TypeVar

from .errors import DirectoryConflictError, TransactionStateError
from .naming import directory_name_for
from .reporting import Reporter, StreamReporter
from .workdir import ProcessWorkingDirectory, WorkingDirectory

__all__ = ["ScaffoldingTransaction", "TransactionPaths", "TransactionState"]


LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class TransactionState(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True, slots=True)
class TransactionPaths:
    """Directories recorded by :meth:`ScaffoldingTransaction.begin`."""

    initial_directory: Path
    project_directory: Path


class ScaffoldingTransaction:
    """Make project directory creation atomic with respect to installation.

    A transaction is used exactly once::

        transaction = ScaffoldingTransaction()
        transaction.begin("my-app")
        result = await transaction.run(install)

    :meth:`begin` creates the directory and steps into it. :meth:`run` awaits
    the installation step; if it fails the working directory is restored, the
    project directory is removed and the original exception is re-raised.
    """

    def __init__(
        self,
        *,
        working_directory: WorkingDirectory | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self._cwd = working_directory or ProcessWorkingDirectory()
        self._reporter = reporter or StreamReporter()
        self._paths: TransactionPaths | None = None
        self._dry_run = False
        self.state = TransactionState.PENDING

    @property
    def paths(self) -> TransactionPaths:
        if self._paths is None:
            raise TransactionStateError("transaction has not begun")
        return self._paths

    @property
    def initial_directory(self) -> Path:
        return self.paths.initial_directory

    @property
    def project_directory(self) -> Path:
        return self.paths.project_directory

    def begin(
        self,
        project_name: str,
        directory_name: str | None = None,
        *,
        dry_run: bool = False,
    ) -> TransactionPaths:
        """Create the project directory and make it the working directory.

        Raises :class:`~sapling.errors.DirectoryConflictError` when the
        directory already exists and is not empty. Nothing is created in that
        case. With ``dry_run`` the directory is neither created nor entered.
        """

        self._expect(TransactionState.PENDING, "begin")

        initial = self._cwd.get()
        project = self._cwd.resolve(directory_name_for(project_name, directory_name))

        if project.exists() and (not project.is_dir() or any(project.iterdir())):
            raise DirectoryConflictError(project)

        if not dry_run:
            project.mkdir(parents=True, exist_ok=True)
            self._cwd.change(project)

        self._paths = TransactionPaths(initial_directory=initial, project_directory=project)
        self._dry_run = dry_run
        self.state = TransactionState.ACTIVE
        LOGGER.info("transaction active project_directory=%s dry_run=%s", project, dry_run)
        return self._paths

    async def run(self, install: Callable[[Path], Awaitable[T]]) -> T:
        """Await ``install(project_directory)`` and commit or roll back."""

        self._expect(TransactionState.ACTIVE, "run")

        try:
            result = await install(self.project_directory)
        except BaseException:
            self._rollback()
            raise

        self.state = TransactionState.COMMITTED
        LOGGER.info("transaction committed project_directory=%s", self.project_directory)
        return result

    def _rollback(self) -> None:
        paths = self.paths
        self.state = TransactionState.ROLLED_BACK

        try:
            self._cwd.change(paths.initial_directory)
        except OSError as exc:
            LOGGER.warning("could not return to %s during rollback: %s", paths.initial_directory, exc)

        if not self._dry_run and paths.project_directory.exists():
            try:
                shutil.rmtree(paths.project_directory)
            except OSError as exc:
                LOGGER.warning("could not remove %s during rollback: %s", paths.project_directory, exc)

        self._reporter.write_error_line(
            "Error creating new application. "
            f"Removing generated directory `./{paths.project_directory.name}`"
        )
        LOGGER.info("transaction rolled back project_directory=%s", paths.project_directory)

    def _expect(self, state: TransactionState, operation: str) -> None:
        if self.state is not state:
            raise TransactionStateError(
                f"cannot {operation} a transaction in state '{self.state.value}'"
            )
