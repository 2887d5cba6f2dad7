"""The ``new`` and ``init`` commands.

Both commands validate the project name and the ``--lang`` argument the same
way before handing over to the installation step. ``new`` additionally creates
the project directory inside a :class:`~sapling.transaction.ScaffoldingTransaction`
so a failed installation leaves nothing behind.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable

from .blueprint import BlueprintInstaller, InstallResult, Installer, normalize_blueprint
from .config import LANGUAGE_DEFAULT, CommandOptions, InitOptions, NewOptions
from .errors import (
    InvalidLanguageTagError,
    InvalidNameError,
    MissingNameError,
    ReservedNameError,
)
from .language import ClassificationOutcome, LanguageTagValidator, classify
from .naming import is_valid_project_name
from .reporting import Reporter, StreamReporter
from .transaction import ScaffoldingTransaction
from .workdir import ProcessWorkingDirectory, WorkingDirectory

__all__ = ["Command", "InitCommand", "NewCommand", "resolve_language"]


LOGGER = logging.getLogger(__name__)


def resolve_language(
    options: CommandOptions,
    *,
    validator: LanguageTagValidator | None = None,
    reporter: Reporter | None = None,
) -> ClassificationOutcome:
    """Classify ``options.language`` and replace it with the accepted value.

    Raises :class:`~sapling.errors.InvalidLanguageTagError` when the argument
    is rejected. Leaving the flag out (the default value) is never an error.
    """

    raw = options.language
    outcome = classify(raw, validator=validator, reporter=reporter)
    if not outcome.accepted and raw not in (LANGUAGE_DEFAULT, None):
        raise InvalidLanguageTagError(outcome)

    options.language = outcome.accepted_value or LANGUAGE_DEFAULT
    return outcome


class Command:
    """Collaborators shared by the project-creating commands."""

    name = ""

    def __init__(
        self,
        *,
        installer: Installer | None = None,
        reporter: Reporter | None = None,
        working_directory: WorkingDirectory | None = None,
        validator: LanguageTagValidator | None = None,
        name_validator: Callable[[str], bool] = is_valid_project_name,
    ) -> None:
        self.reporter = reporter or StreamReporter()
        self.installer = installer or BlueprintInstaller(self.reporter)
        self.working_directory = working_directory or ProcessWorkingDirectory()
        self.validator = validator
        self.name_validator = name_validator

    def validate_name(self, project_name: str) -> None:
        if not self.name_validator(project_name):
            raise InvalidNameError(project_name)

    def prepare(self, options: CommandOptions) -> None:
        """Resolve the language tag and blueprint shared by every command."""

        resolve_language(options, validator=self.validator, reporter=self.reporter)
        if options.dry_run:
            options.skip_git = True
        options.blueprint = normalize_blueprint(options.blueprint, self.working_directory)


class NewCommand(Command):
    """Create a new directory and install a blueprint into it."""

    name = "new"

    def transaction(self) -> ScaffoldingTransaction:
        return ScaffoldingTransaction(working_directory=self.working_directory, reporter=self.reporter)

    async def execute(self, project_name: str | None, options: NewOptions | None = None) -> InstallResult:
        options = options or NewOptions()

        if not project_name:
            raise MissingNameError(
                f"The `sapling {self.name}` command requires a name to be specified. "
                "For more details, use `sapling --help`."
            )

        if project_name == ".":
            blueprint = "application" if options.blueprint == "app" else options.blueprint
            raise ReservedNameError(
                f"Trying to generate an {blueprint} structure in this directory? Use `sapling init` instead."
            )

        self.validate_name(project_name)
        self.prepare(options)

        transaction = self.transaction()
        transaction.begin(project_name, options.directory, dry_run=options.dry_run)
        LOGGER.debug("installing blueprint=%s language=%r", options.blueprint, options.language)

        return await transaction.run(
            lambda project_root: self.installer.install(options.install_options(project_name, project_root))
        )


class InitCommand(Command):
    """Install a blueprint into the current directory."""

    name = "init"

    def project_name(self, options: InitOptions) -> str | None:
        """Return ``--name``, else the ``package.json`` name, else the directory name."""

        if options.name:
            return options.name

        cwd = self.working_directory.get()
        manifest = cwd / "package.json"
        if manifest.is_file():
            try:
                package = json.loads(manifest.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                LOGGER.warning("ignoring unreadable %s: %s", manifest, exc)
            else:
                if isinstance(package, dict) and package.get("name"):
                    return str(package["name"])
        return cwd.name or None

    async def execute(self, options: InitOptions | None = None) -> InstallResult:
        options = options or InitOptions()

        project_name = self.project_name(options)
        if not project_name:
            raise MissingNameError(
                f"The `sapling {self.name}` command requires a package.json in current folder with name "
                "attribute or a specified name via arguments. For more details, use `sapling --help`."
            )

        self.validate_name(project_name)
        self.prepare(options)

        project_root = self.working_directory.get()
        return await self.installer.install(options.install_options(project_name, project_root))
