"""Classification of the ``--lang`` command line argument.

``--lang`` sets the human language of the generated application (the ``lang``
attribute of the ``<html>`` element). Users regularly pass something else:

* a programming, markup or styling technology (``--lang=typescript``), having
  read the flag as "implementation language";
* another option (``--lang=--skip-npm``), usually meant as a flag of its own
  while ``--lang`` was left without a value.

:func:`classify` sorts every possible argument into exactly one
:class:`LanguageTagCategory` and never raises. Whether a category is fatal is
left to the caller.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import NamedTuple, Protocol

from langcodes import Language
from langcodes.tag_parser import LanguageTagError
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .reporting import Reporter

__all__ = [
    "ClassificationOutcome",
    "LangcodesValidator",
    "LanguageTagCategory",
    "LanguageTagValidator",
    "MSG_FOOTER",
    "MSG_HEADER",
    "TECHNOLOGY_TERMS",
    "TagValidity",
    "classify",
    "is_technology_term",
]


LOGGER = logging.getLogger(__name__)

FLAG_PREFIX = "-"

_TAG_CHARACTERS = re.compile(r"[A-Za-z0-9-]+")

# Names, aliases, file extensions and versioned standard names of programming,
# markup and styling technologies. Four entries are also registered language
# codes and are accepted as such: ts (Tsonga), xml (Malaysian Sign Language),
# xht (Hattic) and css (Costanoan).
TECHNOLOGY_TERMS: frozenset[str] = frozenset(
    {
        "javascript",
        ".js",
        "js",
        "emcascript2015",
        "emcascript6",
        "es6",
        "emcascript2016",
        "emcascript7",
        "es7",
        "emcascript2017",
        "emcascript8",
        "es8",
        "emcascript2018",
        "emcascript9",
        "es9",
        "emcascript2019",
        "emcascript10",
        "es10",
        "typescript",
        ".ts",
        "ts",
        "node.js",
        "node",
        "handlebars",
        ".hbs",
        "hbs",
        "glimmer",
        "glimmer.js",
        "glimmer-vm",
        "markdown",
        "markup",
        "html5",
        "html4",
        ".md",
        ".html",
        ".htm",
        ".xhtml",
        ".xml",
        ".xht",
        "md",
        "html",
        "htm",
        "xhtml",
        "xml",
        "xht",
        ".sass",
        ".scss",
        ".css",
        "sass",
        "scss",
        "css",
    }
)


MSG_HEADER = "An error with the `--lang` flag returned the following message:"

MSG_FOOTER = """If this was not your intention, you may edit the `<html>` element's
  `lang` attribute in `app/index.html` directly.
Information about using the `--lang` flag:
  The `--lang` flag sets the base human language of the app in index.html
  If used, the lang option must specify a valid language code.
  For default behavior, remove the flag.
  See `sapling <command> --help` for more information."""


class LanguageTagCategory(str, Enum):
    """Mutually exclusive interpretations of a ``--lang`` argument."""

    VALID = "valid"
    VALID_AND_AMBIGUOUS = "valid_and_ambiguous"
    TECH_MISUSE = "tech_misuse"
    PARSER_ARTIFACT = "parser_artifact"
    INVALID_CODE = "invalid_code"

    @property
    def accepted(self) -> bool:
        return self in _ACCEPTED_CATEGORIES


_ACCEPTED_CATEGORIES = frozenset({LanguageTagCategory.VALID, LanguageTagCategory.VALID_AND_AMBIGUOUS})


class ClassificationOutcome(BaseModel):
    """Result of classifying a single ``--lang`` argument."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    raw_input: str | None = Field(..., description="The argument exactly as supplied.")
    category: LanguageTagCategory = Field(..., description="Interpretation chosen for the argument.")
    accepted_value: str | None = Field(None, description="Value to apply; set only for accepted categories.")
    diagnostic: str | None = Field(None, description="Wrapped explanation shown to the user.")

    @model_validator(mode="after")
    def _check_accepted_value(self) -> ClassificationOutcome:
        if self.category.accepted != (self.accepted_value is not None):
            raise ValueError(
                f"accepted_value must be set exactly when the category is accepted (category={self.category.value})"
            )
        return self

    @property
    def accepted(self) -> bool:
        """Whether the argument may be applied as the application language."""

        return self.category.accepted


class TagValidity(NamedTuple):
    is_valid: bool
    explanation: str = ""


class LanguageTagValidator(Protocol):
    """Decides whether a string is a registered human-language tag."""

    def validate(self, tag: str | None) -> TagValidity: ...


class LangcodesValidator:
    """BCP 47 validation backed by the IANA registry data shipped with ``langcodes``."""

    def validate(self, tag: str | None) -> TagValidity:
        if not tag:
            return TagValidity(False, "Language codes must not be empty.")

        # langcodes also splits on `_`, which BCP 47 does not allow.
        if not _TAG_CHARACTERS.fullmatch(tag):
            return TagValidity(
                False,
                f"`{tag}` is not a well-formed language tag: subtags are separated by `-` "
                "and contain only letters and digits.",
            )

        # Deprecated subtags must stay invalid: normalizing would turn en-UK into en-GB.
        try:
            language = Language.get(tag, normalize=False)
        except LanguageTagError as exc:
            return TagValidity(False, f"`{tag}` is not a well-formed language tag: {exc}.")

        if language.is_valid():
            return TagValidity(True)
        return TagValidity(False, _explain_unregistered(tag, language))


def _explain_unregistered(tag: str, language: Language) -> str:
    checks = [
        ("language", language.language, Language.make(language=language.language)),
        ("script", language.script, Language.make(script=language.script)),
        ("region", language.territory, Language.make(territory=language.territory)),
    ]
    for variant in language.variants or ():
        checks.append(("variant", variant, Language.make(variants=[variant])))

    for kind, subtag, probe in checks:
        if subtag is not None and not probe.is_valid():
            return f"Invalid {kind} subtag `{subtag}` in language code `{tag}`."
    return f"`{tag}` is not a registered language code."


_DEFAULT_VALIDATOR = LangcodesValidator()


def is_technology_term(raw_input: str | None) -> bool:
    """Return ``True`` when ``raw_input`` names a technology, ignoring case and padding."""

    return bool(raw_input) and raw_input.lower().strip() in TECHNOLOGY_TERMS


def _status(raw_input: str | None, *, will_set: bool) -> str:
    status = f"will be set to `{raw_input}`" if will_set else f"will NOT be set to `{raw_input}`"
    return (
        f"The human language of this application {status} in\n"
        "  the `<html>` element's `lang` attribute in `app/index.html`."
    )


def _body(category: LanguageTagCategory, raw_input: str | None, explanation: str) -> str:
    if category is LanguageTagCategory.PARSER_ARTIFACT:
        text = (
            "Detected a `--lang` specification starting with command flag `-`.\n"
            "  This issue is likely caused by using the `--lang` flag without a specification."
        )
    elif category is LanguageTagCategory.TECH_MISUSE:
        text = (
            f"Trying to set the app programming language to `{raw_input}`?\n"
            "  This is not the intended usage of the `--lang` flag."
        )
    elif category is LanguageTagCategory.VALID_AND_AMBIGUOUS:
        text = (
            f"The `--lang` flag has been used with argument `{raw_input}`,\n"
            "  which is BOTH a valid language code AND an abbreviation for a programming language."
        )
    else:
        text = explanation

    return f"{text}\n{_status(raw_input, will_set=category.accepted)}"


def _wrap(body: str) -> str:
    return f"{MSG_HEADER}\n  {body}\n{MSG_FOOTER}"


def _categorize(raw_input: str | None, validity: TagValidity) -> LanguageTagCategory:
    if raw_input and raw_input.startswith(FLAG_PREFIX):
        return LanguageTagCategory.PARSER_ARTIFACT
    if is_technology_term(raw_input):
        if validity.is_valid:
            return LanguageTagCategory.VALID_AND_AMBIGUOUS
        return LanguageTagCategory.TECH_MISUSE
    if validity.is_valid:
        return LanguageTagCategory.VALID
    return LanguageTagCategory.INVALID_CODE


def classify(
    raw_input: str | None,
    *,
    validator: LanguageTagValidator | None = None,
    reporter: Reporter | None = None,
) -> ClassificationOutcome:
    """Classify ``raw_input`` as passed to ``--lang``.

    Parameters
    ----------
    raw_input:
        The argument exactly as received from the command line. ``None`` and
        the empty string are classified as invalid codes.
    validator:
        Language tag validity service. Defaults to :class:`LangcodesValidator`.
    reporter:
        When given, the diagnostic of an *accepted* argument (the ambiguous
        overlap case) is written to it: the header and body as a warning, the
        usage footer as information. Diagnostics of rejected arguments are
        only returned; the caller decides whether they are fatal.
    """

    validity = (validator or _DEFAULT_VALIDATOR).validate(raw_input)
    category = _categorize(raw_input, validity)
    LOGGER.debug("classified --lang %r as %s", raw_input, category.value)

    if category is LanguageTagCategory.VALID:
        return ClassificationOutcome(raw_input=raw_input, category=category, accepted_value=raw_input)

    body = _body(category, raw_input, validity.explanation)
    outcome = ClassificationOutcome(
        raw_input=raw_input,
        category=category,
        accepted_value=raw_input if category.accepted else None,
        diagnostic=_wrap(body),
    )

    if reporter is not None and outcome.accepted:
        reporter.write_warn_line(f"{MSG_HEADER}\n  {body}")
        reporter.write_info_line(MSG_FOOTER)

    return outcome
