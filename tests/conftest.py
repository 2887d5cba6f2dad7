from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from sapling.blueprint import InstallOptions, InstallResult  # noqa: E402
from sapling.workdir import WorkingDirectory  # noqa: E402


class FakeWorkingDirectory(WorkingDirectory):
    """Working directory kept in memory so tests never call ``os.chdir``."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.history: list[Path] = []

    def get(self) -> Path:
        return self.path

    def change(self, path: Path) -> None:
        self.history.append(path)
        self.path = path


class RecordingReporter:
    def __init__(self) -> None:
        self.info: list[str] = []
        self.warn: list[str] = []
        self.error: list[str] = []

    def write_info_line(self, text: str) -> None:
        self.info.append(text)

    def write_warn_line(self, text: str) -> None:
        self.warn.append(text)

    def write_error_line(self, text: str) -> None:
        self.error.append(text)


class FakeInstaller:
    """Records install calls; optionally writes a file and then fails."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        self.calls: list[InstallOptions] = []

    async def install(self, options: InstallOptions) -> InstallResult:
        self.calls.append(options)
        if not options.dry_run and options.project_root.is_dir():
            (options.project_root / "partial.txt").write_text("partial", encoding="utf-8")
        if self.error is not None:
            raise self.error
        return InstallResult(
            project_root=options.project_root,
            blueprint=options.blueprint,
            files=(Path("partial.txt"),),
            dry_run=options.dry_run,
        )


@pytest.fixture()
def workdir(tmp_path: Path) -> FakeWorkingDirectory:
    return FakeWorkingDirectory(tmp_path)


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture()
def installer() -> FakeInstaller:
    return FakeInstaller()


@pytest.fixture()
def failing_installer() -> FakeInstaller:
    return FakeInstaller(error=RuntimeError("npm install failed"))
