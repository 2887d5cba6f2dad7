"""Create projects from blueprints.

``sapling new`` creates a project directory, installs a blueprint into it and
removes the directory again if installation fails. ``sapling init`` installs a
blueprint into the current directory. Both validate the ``--lang`` flag with
:func:`sapling.language.classify`, which tells a human language tag apart from
technology names and option values swallowed by the argument parser.
"""

from __future__ import annotations

from .blueprint import BlueprintInstaller, InstallOptions, InstallResult, normalize_blueprint
from .commands import InitCommand, NewCommand, resolve_language
from .config import InitOptions, NewOptions
from .errors import (
    DirectoryConflictError,
    InvalidLanguageTagError,
    InvalidNameError,
    MissingNameError,
    ReservedNameError,
    SaplingError,
    TransactionStateError,
)
from .language import ClassificationOutcome, LanguageTagCategory, TECHNOLOGY_TERMS, classify
from .naming import directory_name_for, is_valid_project_name
from .transaction import ScaffoldingTransaction, TransactionState

__all__ = [
    "BlueprintInstaller",
    "ClassificationOutcome",
    "DirectoryConflictError",
    "InitCommand",
    "InitOptions",
    "InstallOptions",
    "InstallResult",
    "InvalidLanguageTagError",
    "InvalidNameError",
    "LanguageTagCategory",
    "MissingNameError",
    "NewCommand",
    "NewOptions",
    "ReservedNameError",
    "SaplingError",
    "ScaffoldingTransaction",
    "TECHNOLOGY_TERMS",
    "TransactionState",
    "TransactionStateError",
    "classify",
    "directory_name_for",
    "is_valid_project_name",
    "normalize_blueprint",
    "resolve_language",
]

__version__ = "0.1.0"
