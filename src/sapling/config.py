"""Option sets shared by the command implementations and the CLI."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .blueprint import DEFAULT_BLUEPRINT, InstallOptions

__all__ = ["CommandOptions", "InitOptions", "LANGUAGE_DEFAULT", "NewOptions"]


# Value of ``--lang`` when the flag is absent. Never rejected.
LANGUAGE_DEFAULT = ""


@dataclass(slots=True)
class CommandOptions:
    """Flags understood by every project-creating command.

    Attributes
    ----------
    blueprint:
        Name of a built-in blueprint or a path to a blueprint directory.
    language:
        Raw ``--lang`` argument. Replaced by the accepted value once the
        command has classified it.
    dry_run:
        Report what would be generated without touching the filesystem.
        Implies ``skip_git``.
    yarn:
        ``None`` lets the blueprint decide which package manager to use.
    """

    blueprint: str = DEFAULT_BLUEPRINT
    language: str | None = LANGUAGE_DEFAULT
    dry_run: bool = False
    verbose: bool = False
    skip_npm: bool = False
    skip_bower: bool = False
    skip_git: bool = False
    welcome: bool = True
    yarn: bool | None = None

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> Any:
        """Build options from parsed arguments, ignoring unrelated attributes."""

        values = vars(namespace)
        known = {field.name for field in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in known})

    def install_options(self, project_name: str, project_root: Path) -> InstallOptions:
        """Merge the flags with the resolved name and root for the installer."""

        return InstallOptions(
            project_name=project_name,
            project_root=project_root,
            blueprint=self.blueprint,
            language=self.language or LANGUAGE_DEFAULT,
            dry_run=self.dry_run,
            verbose=self.verbose,
            skip_npm=self.skip_npm,
            skip_bower=self.skip_bower,
            skip_git=self.skip_git,
            welcome=self.welcome,
            yarn=self.yarn,
        )


@dataclass(slots=True)
class NewOptions(CommandOptions):
    """Options for ``sapling new``."""

    directory: str | None = None


@dataclass(slots=True)
class InitOptions(CommandOptions):
    """Options for ``sapling init``."""

    name: str | None = None
