from __future__ import annotations

import pytest
from pydantic import ValidationError

from sapling.language import (
    MSG_FOOTER,
    MSG_HEADER,
    TECHNOLOGY_TERMS,
    ClassificationOutcome,
    LangcodesValidator,
    LanguageTagCategory,
    TagValidity,
    classify,
    is_technology_term,
)

AMBIGUOUS_TERMS = ("ts", "xml", "xht", "css")
MISUSED_TERMS = sorted(TECHNOLOGY_TERMS.difference(AMBIGUOUS_TERMS))


@pytest.mark.parametrize("tag", ["en", "en-gb", "en-GB", "EN", "EN-gb", "EN-GB", "en-US", "zh-Hant-TW"])
def test_valid_language_codes_are_accepted(tag):
    outcome = classify(tag)

    assert outcome.category is LanguageTagCategory.VALID
    assert outcome.accepted
    assert outcome.accepted_value == tag
    assert outcome.diagnostic is None


@pytest.mark.parametrize("tag", ["ts", "TS", "xml", "xht", "css"])
def test_overlapping_terms_are_accepted_with_a_warning(tag):
    outcome = classify(tag)

    assert outcome.category is LanguageTagCategory.VALID_AND_AMBIGUOUS
    assert outcome.accepted_value == tag
    assert "BOTH a valid language code AND an abbreviation" in outcome.diagnostic
    assert f"will be set to `{tag}`" in outcome.diagnostic


@pytest.mark.parametrize("term", MISUSED_TERMS)
def test_technology_terms_are_rejected_as_misuse(term):
    outcome = classify(term)

    assert outcome.category is LanguageTagCategory.TECH_MISUSE
    assert outcome.accepted_value is None
    assert f"Trying to set the app programming language to `{term}`?" in outcome.diagnostic
    assert f"will NOT be set to `{term}`" in outcome.diagnostic


@pytest.mark.parametrize("term", ["JavaScript", "TypeScript", "HTML", "Node.js", " typescript ", ".CSS"])
def test_technology_terms_ignore_case_and_padding(term):
    assert is_technology_term(term)
    assert classify(term).category is LanguageTagCategory.TECH_MISUSE


def test_technology_terms_contain_the_known_overlaps():
    assert set(AMBIGUOUS_TERMS) <= TECHNOLOGY_TERMS
    for term in TECHNOLOGY_TERMS:
        assert term == term.lower().strip()


@pytest.mark.parametrize(
    "raw",
    ["--skip-npm", "--skip-git", "-d", "--disable-analytics", "-en", "--ts", "-typescript", "--"],
)
def test_leading_dash_is_reported_as_parser_artifact(raw):
    outcome = classify(raw)

    assert outcome.category is LanguageTagCategory.PARSER_ARTIFACT
    assert outcome.accepted_value is None
    assert "starting with command flag `-`" in outcome.diagnostic
    assert "Trying to set the app programming language" not in outcome.diagnostic


@pytest.mark.parametrize(
    "raw",
    ["", None, "..-..", "12-34", " en", "en ", "en-uk", "en-UK", "en-cockney", "jp", "en_US", "EN_us", "zh_Hant_TW"],
)
def test_unregistered_or_malformed_codes_are_invalid(raw):
    outcome = classify(raw)

    assert outcome.category is LanguageTagCategory.INVALID_CODE
    assert outcome.accepted_value is None
    assert outcome.diagnostic.startswith(MSG_HEADER)
    assert "Trying to set the app programming language" not in outcome.diagnostic


def test_invalid_region_is_named_in_the_diagnostic():
    outcome = classify("en-UK")

    assert "Invalid region subtag `UK` in language code `en-UK`." in outcome.diagnostic
    assert "will NOT be set to `en-UK`" in outcome.diagnostic


@pytest.mark.parametrize("raw", ["ts", "typescript", "--skip-npm", "en-UK"])
def test_diagnostics_are_wrapped_in_header_and_footer(raw):
    diagnostic = classify(raw).diagnostic

    assert diagnostic.startswith(MSG_HEADER + "\n  ")
    assert diagnostic.endswith(MSG_FOOTER)
    assert "Information about using the `--lang` flag:" in diagnostic


def test_reporter_receives_only_accepted_diagnostics(reporter):
    classify("en-US", reporter=reporter)
    classify("typescript", reporter=reporter)
    classify("--skip-npm", reporter=reporter)
    assert reporter.warn == []
    assert reporter.info == []

    classify("ts", reporter=reporter)

    assert len(reporter.warn) == 1
    assert reporter.warn[0].startswith(MSG_HEADER + "\n  ")
    assert "BOTH a valid language code" in reporter.warn[0]
    assert reporter.info == [MSG_FOOTER]
    assert reporter.error == []


def test_classification_is_stable():
    assert classify("en-GB") == classify("en-GB")
    assert classify("xml") == classify("xml")


def test_injected_validator_decides_validity():
    class AcceptEverything:
        def __init__(self) -> None:
            self.seen: list[str | None] = []

        def validate(self, tag):
            self.seen.append(tag)
            return TagValidity(True)

    validator = AcceptEverything()

    assert classify("klingon", validator=validator).category is LanguageTagCategory.VALID
    assert classify("javascript", validator=validator).category is LanguageTagCategory.VALID_AND_AMBIGUOUS
    assert classify("-x", validator=validator).category is LanguageTagCategory.PARSER_ARTIFACT
    assert validator.seen == ["klingon", "javascript", "-x"]


def test_injected_validator_explanation_is_used():
    class RejectEverything:
        def validate(self, tag):
            return TagValidity(False, f"`{tag}` is not on the allow list.")

    outcome = classify("fr", validator=RejectEverything())

    assert outcome.category is LanguageTagCategory.INVALID_CODE
    assert "`fr` is not on the allow list." in outcome.diagnostic


def test_langcodes_validator_explanations():
    validator = LangcodesValidator()

    assert validator.validate("en-GB") == TagValidity(True)
    assert validator.validate("") == TagValidity(False, "Language codes must not be empty.")
    assert "not a well-formed language tag" in validator.validate("..-..").explanation
    assert validator.validate("jp").explanation == "Invalid language subtag `jp` in language code `jp`."


def test_outcome_requires_accepted_value_for_accepted_categories():
    with pytest.raises(ValidationError):
        ClassificationOutcome(raw_input="en", category=LanguageTagCategory.VALID)

    with pytest.raises(ValidationError):
        ClassificationOutcome(
            raw_input="typescript",
            category=LanguageTagCategory.TECH_MISUSE,
            accepted_value="typescript",
        )


def test_outcome_is_frozen():
    outcome = classify("en")

    with pytest.raises(ValidationError):
        outcome.accepted_value = "fr"


def test_category_acceptance():
    accepted = {category for category in LanguageTagCategory if category.accepted}

    assert accepted == {LanguageTagCategory.VALID, LanguageTagCategory.VALID_AND_AMBIGUOUS}


@pytest.mark.parametrize("tag", ["en_US", "EN_us", "zh_Hant_TW", "en.GB", "en--GB"])
def test_only_dash_separated_tags_are_well_formed(tag):
    validity = LangcodesValidator().validate(tag)

    assert not validity.is_valid
    assert f"`{tag}` is not a well-formed language tag" in validity.explanation


def test_warning_matches_returned_diagnostic(reporter):
    outcome = classify("xml", reporter=reporter)

    assert outcome.diagnostic == f"{reporter.warn[0]}\n{reporter.info[0]}"
