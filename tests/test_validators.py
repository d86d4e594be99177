"""Tests for the built-in catalog validators."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from transcheck.validators import (
    DuplicateKeysValidator,
    DuplicateValuesValidator,
    EmptyValuesValidator,
    EncodingValidator,
    HtmlTagValidator,
    MismatchValidator,
    PlaceholderConsistencyValidator,
    Severity,
)
from transcheck.validators.encoding import find_invisible_characters
from transcheck.validators.html_tags import analyze_html
from transcheck.validators.placeholder_consistency import extract_placeholders
from transcheck.validators.thresholds import KeyCountValidator, KeyDepthValidator, key_depth
from transcheck.validators.xliff_schema import XliffSchemaValidator


def xliff_12(units: dict[str, str], target: bool = False) -> str:
    """Build an XLIFF 1.2 document from id -> text."""
    element = "target" if target else "source"
    body = "\n".join(
        f'      <trans-unit id="{unit_id}"><source>{text}</source>'
        + (f"<{element}>{text}</{element}>" if target else "")
        + "</trans-unit>"
        for unit_id, text in units.items()
    )
    target_language = ' target-language="de"' if target else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">\n'
        f'  <file source-language="en"{target_language} datatype="plaintext" original="messages">\n'
        "    <body>\n"
        f"{body}\n"
        "    </body>\n"
        "  </file>\n"
        "</xliff>\n"
    )


def _write(path: Path, content: str | bytes) -> str:
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return str(path)


# -----------------------------------------------------------------------------
# Mismatch
# -----------------------------------------------------------------------------


class TestMismatchValidator:
    """Tests for the mismatch validator."""

    def test_key_missing_from_second_file(self, tmp_path: Path) -> None:
        """Test en.xlf {greeting} vs de.xlf {} yields one issue with the absent marker."""
        en = _write(tmp_path / "en.xlf", xliff_12({"greeting": "Hi"}))
        de = _write(tmp_path / "de.xlf", xliff_12({}))
        validator = MismatchValidator()
        issues = validator.validate([en, de], "xliff")

        assert len(issues) == 1
        assert issues[0].details == {
            "key": "greeting",
            "files": [{"file": en, "value": "Hi"}, {"file": de, "value": None}],
        }
        assert validator.failure_severity is Severity.ERROR

    def test_union_in_first_seen_order(self, tmp_path: Path) -> None:
        """Test missing keys are reported in first-seen order across files."""
        en = _write(tmp_path / "messages.en.yaml", "a: A\nb: B\n")
        de = _write(tmp_path / "messages.de.yaml", "c: C\na: A\n")
        issues = MismatchValidator().validate([en, de], "yaml")
        assert [issue.details["key"] for issue in issues] == ["b", "c"]

    def test_keys_present_everywhere_are_not_reported(self, tmp_path: Path) -> None:
        """Test a key in all files never appears, regardless of file order."""
        en = _write(tmp_path / "messages.en.yaml", "shared: S\nonly_en: E\n")
        de = _write(tmp_path / "messages.de.yaml", "shared: S\n")
        for files in ([en, de], [de, en]):
            keys = [issue.details["key"] for issue in MismatchValidator().validate(files, "yaml")]
            assert keys == ["only_en"]

    def test_idempotent(self, tmp_path: Path) -> None:
        """Test running the check twice yields the same issues."""
        en = _write(tmp_path / "messages.en.yaml", "a: A\nb: B\n")
        de = _write(tmp_path / "messages.de.yaml", "a: A\n")
        first = MismatchValidator().validate([en, de], "yaml")
        second = MismatchValidator().validate([en, de], "yaml")
        assert first == second

    def test_reused_validator_forgets_previous_file_set(self, tmp_path: Path) -> None:
        """Test a second validate() call only sees the keys of its own file set."""
        (tmp_path / "auth").mkdir()
        (tmp_path / "home").mkdir()
        auth_en = _write(tmp_path / "auth" / "messages.en.yaml", "login: Login\n")
        auth_de = _write(tmp_path / "auth" / "messages.de.yaml", "logout: Abmelden\n")
        home_en = _write(tmp_path / "home" / "messages.en.yaml", "title: T\nintro: I\n")
        home_de = _write(tmp_path / "home" / "messages.de.yaml", "title: T\n")

        validator = MismatchValidator()
        validator.validate([auth_en, auth_de], "yaml")
        issues = validator.validate([home_en, home_de], "yaml")

        assert [issue.details["key"] for issue in issues] == ["intro"]
        assert set(validator.distribute_issues()) == {home_en, home_de}

    def test_unparseable_file_does_not_participate(self, tmp_path: Path) -> None:
        """Test a broken file is skipped instead of reporting every key missing."""
        en = _write(tmp_path / "messages.en.json", '{"a": "A"}')
        de = _write(tmp_path / "messages.de.json", '{"a": ')
        assert MismatchValidator().validate([en, de], "json") == []

    def test_distribution_and_messages(self, tmp_path: Path) -> None:
        """Test the issue is shown under every file with a file-specific message."""
        en = _write(tmp_path / "messages.en.yaml", "a: A\nb: B\n")
        de = _write(tmp_path / "messages.de.yaml", "a: A\n")
        validator = MismatchValidator()
        validator.validate([en, de], "yaml")

        distribution = validator.distribute_issues()
        assert set(distribution) == {en, de}
        en_message = validator.format_issue_message(distribution[en][0])
        de_message = validator.format_issue_message(distribution[de][0])
        assert en_message == "the translation key `b` is missing from other translation files (`messages.de.yaml`)"
        assert de_message == (
            "the translation key `b` is missing but present in other translation files (`messages.en.yaml`)"
        )

    def test_detail_table(self, tmp_path: Path) -> None:
        """Test the detail table has one column per file."""
        en = _write(tmp_path / "messages.en.yaml", "a: A\nb: B\n")
        de = _write(tmp_path / "messages.de.yaml", "a: A\n")
        validator = MismatchValidator()
        issues = validator.validate([en, de], "yaml")
        table = validator.detail_table(issues)
        assert table is not None
        assert len(table.columns) == 3
        assert table.row_count == 1


# -----------------------------------------------------------------------------
# Duplicates and empty values
# -----------------------------------------------------------------------------


class TestDuplicateKeysValidator:
    """Tests for the duplicate keys validator."""

    def test_counts_repeated_keys(self, tmp_path: Path) -> None:
        """Test keys [a,b,a,c,b] yield exactly {a: 2, b: 2}."""
        path = _write(tmp_path / "messages.en.json", '{"a": "1", "b": "2", "a": "3", "c": "4", "b": "5"}')
        validator = DuplicateKeysValidator()
        issues = validator.validate([path], "json")

        assert len(issues) == 1
        assert issues[0].details == {"a": 2, "b": 2}
        assert validator.failure_severity is Severity.ERROR

    def test_xliff_duplicate_ids(self, tmp_path: Path) -> None:
        """Test duplicate trans-unit ids are detected."""
        content = xliff_12({"a": "A"}).replace(
            '<trans-unit id="a"><source>A</source></trans-unit>',
            '<trans-unit id="a"><source>A</source></trans-unit><trans-unit id="a"><source>B</source></trans-unit>',
        )
        path = _write(tmp_path / "messages.xlf", content)
        issues = DuplicateKeysValidator().validate([path], "xliff")
        assert issues[0].details == {"a": 2}

    def test_no_duplicates(self, tmp_path: Path) -> None:
        """Test a clean file yields no issue."""
        path = _write(tmp_path / "messages.en.json", '{"a": "1", "b": "2"}')
        assert DuplicateKeysValidator().validate([path], "json") == []

    def test_message(self, tmp_path: Path) -> None:
        """Test the message names the key and count."""
        path = _write(tmp_path / "messages.en.json", '{"a": "1", "a": "2"}')
        validator = DuplicateKeysValidator()
        issues = validator.validate([path], "json")
        assert "`a`" in validator.format_issue_message(issues[0])
        assert "2x" in validator.format_issue_message(issues[0])


class TestDuplicateValuesValidator:
    """Tests for the duplicate values validator."""

    def test_reports_value_shared_by_keys(self, tmp_path: Path) -> None:
        """Test a value used by two keys is reported per file."""
        path = _write(tmp_path / "messages.en.yaml", "save: Save\nsubmit: Save\ncancel: Cancel\n")
        validator = DuplicateValuesValidator()
        issues = validator.validate([path], "yaml")

        assert len(issues) == 1
        assert issues[0].file == path
        assert issues[0].details == {"Save": ["save", "submit"]}
        assert validator.failure_severity is Severity.WARNING

    def test_files_are_independent(self, tmp_path: Path) -> None:
        """Test the same value in different files is not a duplicate."""
        en = _write(tmp_path / "messages.en.yaml", "save: Save\n")
        de = _write(tmp_path / "messages.de.yaml", "save: Save\n")
        assert DuplicateValuesValidator().validate([en, de], "yaml") == []


class TestEmptyValuesValidator:
    """Tests for the empty values validator."""

    def test_empty_and_whitespace(self, tmp_path: Path) -> None:
        """Test empty and whitespace-only values are told apart."""
        path = _write(tmp_path / "messages.en.json", '{"empty": "", "blank": "   ", "ok": "Yes"}')
        validator = EmptyValuesValidator()
        issues = validator.validate([path], "json")

        assert len(issues) == 1
        details = issues[0].details
        assert set(details) == {"empty", "blank"}
        message = validator.format_issue_message(issues[0])
        assert "`empty` has an empty value" in message
        assert "`blank` has an whitespace only value" in message

    def test_null_value(self, tmp_path: Path) -> None:
        """Test a null value counts as empty."""
        path = _write(tmp_path / "messages.en.yaml", "missing:\n")
        issues = EmptyValuesValidator().validate([path], "yaml")
        assert "missing" in issues[0].details


# -----------------------------------------------------------------------------
# Placeholders and HTML
# -----------------------------------------------------------------------------


class TestPlaceholders:
    """Tests for placeholder extraction and consistency."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Hello %name%!", ["%name%"]),
            ("Hello {name}", ["{name}"]),
            ("Hello {{ name }}", ["{{ name }}"]),
            ("%s of %1$d", ["%s", "%1$d"]),
            ("Welcome, :name", [":name"]),
            ("No placeholders here", []),
        ],
    )
    def test_extract(self, value: str, expected: list[str]) -> None:
        """Test each supported syntax is recognized."""
        assert extract_placeholders(value) == expected

    def test_missing_and_extra(self, tmp_path: Path) -> None:
        """Test %name% vs %username% yields missing and extra for the second file."""
        en = _write(tmp_path / "messages.en.yaml", "greeting: 'Hello %name%!'\n")
        de = _write(tmp_path / "messages.de.yaml", "greeting: 'Hallo %username%!'\n")
        validator = PlaceholderConsistencyValidator()
        issues = validator.validate([en, de], "yaml")

        assert len(issues) == 1
        assert issues[0].details["key"] == "greeting"
        assert issues[0].details["differences"][de] == {"missing": ["%name%"], "extra": ["%username%"]}
        message = validator.format_issue_message(issues[0])
        assert "File 'messages.de.yaml' is missing placeholders: %name%" in message
        assert "File 'messages.de.yaml' has extra placeholders: %username%" in message

    def test_consistent_placeholders(self, tmp_path: Path) -> None:
        """Test matching placeholders yield no issue."""
        en = _write(tmp_path / "messages.en.yaml", "greeting: 'Hello {name}'\n")
        de = _write(tmp_path / "messages.de.yaml", "greeting: 'Hallo {name}'\n")
        assert PlaceholderConsistencyValidator().validate([en, de], "yaml") == []

    def test_key_in_single_file_is_ignored(self, tmp_path: Path) -> None:
        """Test keys present in only one file are left to the mismatch check."""
        en = _write(tmp_path / "messages.en.yaml", "only: 'Hello {name}'\n")
        de = _write(tmp_path / "messages.de.yaml", "other: x\n")
        assert PlaceholderConsistencyValidator().validate([en, de], "yaml") == []

    def test_fans_out_to_files(self, tmp_path: Path) -> None:
        """Test the issue is displayed under each involved file."""
        en = _write(tmp_path / "messages.en.yaml", "greeting: 'Hello {name}'\n")
        de = _write(tmp_path / "messages.de.yaml", "greeting: 'Hallo'\n")
        validator = PlaceholderConsistencyValidator()
        validator.validate([en, de], "yaml")
        assert set(validator.distribute_issues()) == {en, de}


class TestHtmlTags:
    """Tests for HTML analysis and consistency."""

    def test_analyze_structure(self) -> None:
        """Test tags, self-closing tags and attributes are collected."""
        result = analyze_html('<p class="intro">Hi<br/> <strong>you</strong></p>')
        assert result["tags"] == ["p", "br", "strong"]
        assert result["self_closing_tags"] == ["br"]
        assert result["attributes"]["p"] == {"class": "intro"}
        assert result["structure_errors"] == []

    def test_structure_errors(self) -> None:
        """Test unclosed and unmatched tags are reported."""
        result = analyze_html("<b>bold</i>")
        assert "Unmatched closing tag: </i>" in result["structure_errors"]
        assert any("Unclosed" in error for error in result["structure_errors"])

    def test_missing_tag_between_files(self, tmp_path: Path) -> None:
        """Test a tag present in the reference but not in the other file."""
        en = _write(tmp_path / "messages.en.yaml", "note: '<strong>Note</strong>'\n")
        de = _write(tmp_path / "messages.de.yaml", "note: 'Hinweis'\n")
        validator = HtmlTagValidator()
        issues = validator.validate([en, de], "yaml")

        assert len(issues) == 1
        assert issues[0].details["differences"][de]["missing_tags"] == ["strong"]
        assert validator.failure_severity is Severity.WARNING

    def test_class_mismatch(self, tmp_path: Path) -> None:
        """Test differing class attributes are reported."""
        en = _write(tmp_path / "messages.en.yaml", "note: '<span class=\"a\">x</span>'\n")
        de = _write(tmp_path / "messages.de.yaml", "note: '<span class=\"b\">x</span>'\n")
        issues = HtmlTagValidator().validate([en, de], "yaml")
        assert issues[0].details["differences"][de]["class_mismatches"]


# -----------------------------------------------------------------------------
# Thresholds
# -----------------------------------------------------------------------------


class TestThresholds:
    """Tests for key count and key depth validators."""

    @pytest.mark.parametrize(
        ("key", "depth"),
        [("", 0), ("simple", 1), ("user.profile.settings", 3), ("a_b_c_d", 4), ("a.b_c", 2)],
    )
    def test_key_depth(self, key: str, depth: int) -> None:
        """Test depth is one more than the count of the most used separator."""
        assert key_depth(key) == depth

    def test_key_count_over_threshold(self, tmp_path: Path) -> None:
        """Test a file with more keys than the threshold is reported."""
        path = _write(tmp_path / "messages.en.json", json.dumps({f"k{i}": "v" for i in range(4)}))
        issues = KeyCountValidator({"threshold": 3}).validate([path], "json")
        assert len(issues) == 1
        assert issues[0].details["key_count"] == 4
        assert issues[0].details["threshold"] == 3

    def test_key_count_at_threshold(self, tmp_path: Path) -> None:
        """Test exactly threshold keys is fine."""
        path = _write(tmp_path / "messages.en.json", json.dumps({f"k{i}": "v" for i in range(3)}))
        assert KeyCountValidator({"threshold": 3}).validate([path], "json") == []

    @pytest.mark.parametrize("threshold", ["many", -1, 0, True, None])
    def test_invalid_threshold_falls_back(self, threshold: object) -> None:
        """Test invalid thresholds fall back to the default."""
        assert KeyCountValidator({"threshold": threshold}).threshold == 300
        assert KeyDepthValidator({"threshold": threshold}).threshold == 8

    def test_key_depth_violations(self, tmp_path: Path) -> None:
        """Test keys deeper than the threshold are listed."""
        path = _write(tmp_path / "messages.en.json", '{"a": {"b": {"c": "deep"}}, "flat": "ok"}')
        validator = KeyDepthValidator({"threshold": 2})
        issues = validator.validate([path], "json")

        assert len(issues) == 1
        assert issues[0].details["violating_keys"] == [{"key": "a.b.c", "depth": 3, "threshold": 2}]
        assert "`a.b.c` (depth 3)" in validator.format_issue_message(issues[0])


# -----------------------------------------------------------------------------
# Encoding and schema
# -----------------------------------------------------------------------------


class TestEncodingValidator:
    """Tests for the encoding validator."""

    def test_clean_file(self, tmp_path: Path) -> None:
        """Test a clean UTF-8 file yields no issue."""
        path = _write(tmp_path / "messages.en.json", '{"a": "Grüße"}')
        assert EncodingValidator().validate([path], "json") == []

    def test_bom(self, tmp_path: Path) -> None:
        """Test a UTF-8 BOM is reported without flagging invisible characters."""
        path = _write(tmp_path / "messages.en.yaml", b"\xef\xbb\xbfa: A\n")
        issues = EncodingValidator().validate([path], "yaml")
        assert set(issues[0].details) == {"bom"}

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Test invalid UTF-8 reports only the encoding problem."""
        path = _write(tmp_path / "messages.en.yaml", b"a: \xff\xfe\n")
        issues = EncodingValidator().validate([path], "yaml")
        assert set(issues[0].details) == {"encoding"}

    def test_invisible_characters(self) -> None:
        """Test zero-width and control characters are named."""
        assert find_invisible_characters("a\u200bb") == ["Zero-width space"]
        assert find_invisible_characters("a\x07b") == ["Control characters"]
        assert find_invisible_characters("tab\tand\nnewline") == []

    def test_non_nfc(self, tmp_path: Path) -> None:
        """Test decomposed characters are reported."""
        path = _write(tmp_path / "messages.en.yaml", "a: Cafe\u0301\n")
        issues = EncodingValidator().validate([path], "yaml")
        assert "unicode_normalization" in issues[0].details

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file passes."""
        path = _write(tmp_path / "messages.en.yaml", "")
        assert EncodingValidator().validate([path], "yaml") == []

    def test_message(self, tmp_path: Path) -> None:
        """Test each finding is prefixed."""
        path = _write(tmp_path / "messages.en.yaml", b"\xef\xbb\xbfa: A\n")
        validator = EncodingValidator()
        issues = validator.validate([path], "yaml")
        assert validator.format_issue_message(issues[0]).startswith("encoding issue: ")


class TestXliffSchemaValidator:
    """Tests for the XLIFF schema validator."""

    def test_valid_document(self, tmp_path: Path) -> None:
        """Test a well-formed XLIFF 1.2 file passes."""
        path = _write(tmp_path / "messages.xlf", xliff_12({"a": "A"}, target=True))
        assert XliffSchemaValidator().validate([path], "xliff") == []

    def test_schema_violation(self, tmp_path: Path) -> None:
        """Test a trans-unit without source is reported with its line."""
        content = xliff_12({"a": "A"}).replace("<source>A</source>", "")
        path = _write(tmp_path / "messages.xlf", content)
        validator = XliffSchemaValidator()
        issues = validator.validate([path], "xliff")

        assert issues
        assert issues[0].details["line"] is not None
        assert "(Line: " in validator.format_issue_message(issues[0])
        assert validator.failure_severity is Severity.ERROR

    def test_unsupported_version_is_skipped(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test an unknown XLIFF version is a notice, not an issue."""
        content = xliff_12({"a": "A"}).replace('version="1.2"', 'version="1.1"')
        path = _write(tmp_path / "messages.xlf", content)

        with caplog.at_level("INFO", logger="transcheck"):
            issues = XliffSchemaValidator().validate([path], "xliff")

        assert issues == []
        assert "Skipping schema validation" in caplog.text

    def test_only_supports_xliff(self) -> None:
        """Test the schema validator declares XLIFF only."""
        assert XliffSchemaValidator.supports_parser("xliff")
        assert not XliffSchemaValidator.supports_parser("yaml")
