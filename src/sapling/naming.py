"""Project name validation and directory name derivation."""

from __future__ import annotations

import re

__all__ = [
    "RESERVED_PROJECT_NAMES",
    "dasherize",
    "directory_name_for",
    "is_valid_project_name",
]


RESERVED_PROJECT_NAMES: frozenset[str] = frozenset(
    {"test", "sapling", "sapling-cli", "vendor", "public", "app"}
)

_SCOPE = re.compile(r"^@(?P<scope>[a-z0-9][a-z0-9_\-]*)/(?P<name>.+)$", re.IGNORECASE)
_PROJECT_NAME = re.compile(r"^[a-z][a-z0-9_\-]*$", re.IGNORECASE)
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"[\s_]+")
_MULTIPLE_DASHES = re.compile(r"-+")


def is_valid_project_name(name: str) -> bool:
    """Return ``True`` when ``name`` can be used for a new project.

    Names are compared case-insensitively against :data:`RESERVED_PROJECT_NAMES`.
    Dots are rejected, as are names that do not start with a letter. An npm
    style ``@scope/`` prefix is allowed and validated separately.
    """

    if not name:
        return False

    if name.lower() in RESERVED_PROJECT_NAMES or "." in name:
        return False

    match = _SCOPE.match(name)
    if match:
        name = match.group("name")
        if name.lower() in RESERVED_PROJECT_NAMES:
            return False

    return bool(_PROJECT_NAME.match(name))


def dasherize(value: str) -> str:
    """Turn ``myApp``, ``my_app`` or ``My App`` into ``my-app``."""

    text = _CAMEL_BOUNDARY.sub(r"\1-\2", value.strip())
    text = _SEPARATORS.sub("-", text)
    text = _MULTIPLE_DASHES.sub("-", text)
    return text.strip("-").lower()


def directory_name_for(project_name: str, directory_name: str | None = None) -> str:
    """Return the directory a project should be created in.

    An explicit ``directory_name`` wins. Otherwise the name is derived from
    ``project_name``, keeping only the part after an ``@scope/`` prefix.
    """

    if directory_name:
        return directory_name

    match = _SCOPE.match(project_name)
    if match:
        project_name = match.group("name")
    return dasherize(project_name)
