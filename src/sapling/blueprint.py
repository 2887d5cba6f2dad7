"""Blueprint normalisation and the default installation step.

Blueprints describe the files a new project starts with. Two small blueprints,
``app`` and ``addon``, are built in. Any other identifier is treated as a path
to a blueprint directory whose ``files/`` tree is copied into the project.
"""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import Mapping, Protocol

from pydantic import BaseModel, ConfigDict, Field

from .errors import SaplingError
from .reporting import Reporter, StreamReporter
from .workdir import ProcessWorkingDirectory, WorkingDirectory

__all__ = [
    "BUILTIN_BLUEPRINTS",
    "BlueprintInstaller",
    "DEFAULT_BLUEPRINT",
    "InstallOptions",
    "InstallResult",
    "Installer",
    "UnknownBlueprintError",
    "normalize_blueprint",
]


LOGGER = logging.getLogger(__name__)

DEFAULT_BLUEPRINT = "app"

_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<key>[A-Za-z_][A-Za-z0-9_]*)\s*}}")


class UnknownBlueprintError(SaplingError):
    """Raised when a blueprint is neither built in nor a directory."""

    def __init__(self, blueprint: str) -> None:
        super().__init__(f"Unknown blueprint: {blueprint}")
        self.blueprint = blueprint


class InstallOptions(BaseModel):
    """Everything the installation step needs to populate a project."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    project_name: str = Field(..., description="Name given on the command line.")
    project_root: Path = Field(..., description="Directory the blueprint is installed into.")
    blueprint: str = Field(DEFAULT_BLUEPRINT, description="Normalised blueprint identifier.")
    language: str = Field("", description="Accepted human language tag; empty when unset.")
    dry_run: bool = Field(False, description="List files instead of writing them.")
    verbose: bool = Field(False, description="Report every generated file.")
    skip_npm: bool = Field(False, description="Do not install npm packages.")
    skip_bower: bool = Field(False, description="Do not install bower packages.")
    skip_git: bool = Field(False, description="Do not initialise a git repository.")
    welcome: bool = Field(True, description="Include the welcome page.")
    yarn: bool | None = Field(None, description="Force or forbid yarn; None lets the blueprint decide.")


class InstallResult(BaseModel):
    """Files produced by an installation step."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    project_root: Path = Field(..., description="Directory the blueprint was installed into.")
    blueprint: str = Field(..., description="Blueprint that was installed.")
    files: tuple[Path, ...] = Field(default=(), description="Project-relative paths of generated files.")
    dry_run: bool = Field(False, description="Whether the files were only listed.")


class Installer(Protocol):
    """The installation step run inside a scaffolding transaction."""

    async def install(self, options: InstallOptions) -> InstallResult: ...


def normalize_blueprint(blueprint: str, working_directory: WorkingDirectory | None = None) -> str:
    """Resolve relative blueprint paths against the working directory.

    ``./my-blueprint`` becomes an absolute path so it stays valid after the
    command steps into the new project directory. Names pass through.
    """

    if blueprint and blueprint.startswith("."):
        cwd = working_directory or ProcessWorkingDirectory()
        return str(cwd.resolve(blueprint).resolve())
    return blueprint


APP_FILES: tuple[tuple[str, str], ...] = (
    ("README.md", "# {{ name }}\n\nCreated with the `{{ blueprint }}` blueprint.\n"),
    (
        "package.json",
        '{\n  "name": "{{ name }}",\n  "version": "0.0.0",\n  "private": true\n}\n',
    ),
    (
        "app/index.html",
        "<!DOCTYPE html>\n<html{{ lang_attribute }}>\n  <head>\n    <meta charset=\"utf-8\">\n"
        "    <title>{{ class_name }}</title>\n  </head>\n  <body>\n  </body>\n</html>\n",
    ),
    ("app/templates/application.hbs", "{{ welcome_markup }}\n"),
    (".gitignore", "/dist/\n/node_modules/\n"),
)

ADDON_FILES: tuple[tuple[str, str], ...] = (
    ("README.md", "# {{ name }}\n\nAn addon created with the `{{ blueprint }}` blueprint.\n"),
    (
        "package.json",
        '{\n  "name": "{{ name }}",\n  "version": "0.0.0",\n  "keywords": ["sapling-addon"]\n}\n',
    ),
    ("index.js", "'use strict';\n\nmodule.exports = {\n  name: require('./package').name,\n};\n"),
    (
        "tests/dummy/app/index.html",
        "<!DOCTYPE html>\n<html{{ lang_attribute }}>\n  <head>\n    <meta charset=\"utf-8\">\n"
        "    <title>Dummy</title>\n  </head>\n  <body>\n  </body>\n</html>\n",
    ),
    (".gitignore", "/dist/\n/node_modules/\n"),
)

BUILTIN_BLUEPRINTS: Mapping[str, tuple[tuple[str, str], ...]] = {
    "app": APP_FILES,
    "addon": ADDON_FILES,
}


def _render(template: str, context: Mapping[str, str]) -> str:
    def substitute(match: re.Match[str]) -> str:
        return context.get(match.group("key"), match.group(0))

    return _PLACEHOLDER_PATTERN.sub(substitute, template)


def _class_name(project_name: str) -> str:
    words = re.split(r"[\s_\-/@]+", project_name)
    return "".join(word[:1].upper() + word[1:] for word in words if word)


class BlueprintInstaller:
    """Populate a project directory from a built-in or on-disk blueprint."""

    def __init__(self, reporter: Reporter | None = None, *, force: bool = False) -> None:
        self.reporter = reporter or StreamReporter()
        self.force = force

    def context(self, options: InstallOptions) -> dict[str, str]:
        lang_attribute = f' lang="{options.language}"' if options.language else ""
        welcome = f"<h1>Welcome to {options.project_name}</h1>" if options.welcome else ""
        return {
            "name": options.project_name,
            "class_name": _class_name(options.project_name),
            "blueprint": options.blueprint,
            "language": options.language,
            "lang_attribute": lang_attribute,
            "welcome_markup": welcome,
        }

    def files_for(self, blueprint: str) -> list[tuple[str, str]]:
        """Return ``(relative_path, template)`` pairs for ``blueprint``."""

        if blueprint in BUILTIN_BLUEPRINTS:
            return list(BUILTIN_BLUEPRINTS[blueprint])

        source = Path(blueprint) / "files"
        if not source.is_dir():
            raise UnknownBlueprintError(blueprint)

        return [
            (path.relative_to(source).as_posix(), path.read_text(encoding="utf-8"))
            for path in sorted(source.rglob("*"))
            if path.is_file()
        ]

    async def install(self, options: InstallOptions) -> InstallResult:
        files = self.files_for(options.blueprint)
        context = self.context(options)
        root = options.project_root

        written: list[Path] = []
        for relative_path, template in files:
            destination = root / relative_path
            if destination.exists() and not self.force:
                raise FileExistsError(f"{destination} already exists")

            self.reporter.write_info_line(f"  create {relative_path}")
            if not options.dry_run:
                await asyncio.to_thread(self._write, destination, _render(template, context))
            written.append(Path(relative_path))

        LOGGER.info(
            "installed blueprint=%s files=%s dry_run=%s root=%s",
            options.blueprint,
            len(written),
            options.dry_run,
            root,
        )
        return InstallResult(
            project_root=root,
            blueprint=options.blueprint,
            files=tuple(written),
            dry_run=options.dry_run,
        )

    @staticmethod
    def _write(destination: Path, content: str) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8")
