import logging
import re
from datetime import datetime

import pytest

from hscan.controllers import filenames
from hscan.errors import InvalidFilenameError


@pytest.mark.parametrize("name", ["a/b.pdf", "/scan.pdf", "scan\x00.pdf", "dir\\scan.pdf"])
def test_path_separators_and_null_bytes_are_rejected(name):
    with pytest.raises(InvalidFilenameError, match="forbidden"):
        filenames.validate_filename(name)


@pytest.mark.parametrize("name", ["a<b.pdf", "a>b.pdf", "a:b.pdf", 'a"b.pdf', "a|b.pdf", "a?.pdf", "a*.pdf"])
def test_windows_reserved_characters_are_rejected(name):
    with pytest.raises(InvalidFilenameError, match="forbidden"):
        filenames.validate_filename(name)


@pytest.mark.parametrize(
    "name, reason",
    [
        ("", "empty"),
        ("-scan.pdf", "hyphen"),
        (".", "'.' or '..'"),
        ("..", "'.' or '..'"),
        (" scan.pdf", "spaces"),
        ("scan.pdf ", "spaces"),
        ("\tscan.pdf", "spaces"),
        ("scan", "must have an extension"),
        ("scan.", "must have an extension"),
        ("scan.txt", "not supported"),
        ("scan.PDF", "not supported"),
        ("scan.pdf.txt", "not supported"),
    ],
)
def test_invalid_names_report_reason(name, reason):
    with pytest.raises(InvalidFilenameError, match=re.escape(reason)):
        filenames.validate_filename(name)


def test_rules_apply_in_order():
    # Forbidden characters win over the leading hyphen and missing extension.
    with pytest.raises(InvalidFilenameError, match="forbidden"):
        filenames.validate_filename("-a/b")


@pytest.mark.parametrize("name", ["MyScan.pdf", "my scan.pdf", "archive.2024.pdf", ".pdf"])
def test_pdf_names_are_accepted(name):
    result = filenames.validate_filename(name)

    assert result.name == name
    assert result.extension == "pdf"


def test_fetch_extension_uses_last_dot():
    assert filenames.fetch_extension("a.b.pdf") == "pdf"
    assert filenames.fetch_extension("noext") is None
    assert filenames.fetch_extension("trailing.") is None


def test_generate_filename_uses_timestamp():
    result = filenames.generate_filename(datetime(2024, 1, 31, 15, 45, 0))

    assert result.name == "20240131-154500.pdf"
    assert result.extension == "pdf"


def test_generate_filename_matches_pattern_now():
    result = filenames.generate_filename()

    assert re.fullmatch(r"\d{8}-\d{6}\.pdf", result.name)
    # Auto names always pass the validator.
    assert filenames.validate_filename(result.name) == result


def test_prompt_repeats_until_valid(caplog):
    answers = iter(["", "bad/name.pdf", "notes.txt", "Final.pdf"])
    prompts = []

    def fake_read(prompt):
        prompts.append(prompt)
        return next(answers)

    with caplog.at_level(logging.ERROR, logger="hscan"):
        result = filenames.prompt_for_filename(fake_read)

    assert result.name == "Final.pdf"
    assert len(prompts) == 4
    assert all(p == filenames.PROMPT for p in prompts)
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 3
    assert "empty" in errors[0]
