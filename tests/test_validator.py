"""Tests for the upload document validator."""

import json

import pytest

from transmission_relay.exceptions import (
    MalformedDocument,
    MalformedModule,
    MalformedPayload,
    ValidationError,
)
from transmission_relay.validation import DocumentValidator


@pytest.fixture
def validator():
    return DocumentValidator()


class TestPayloadParsing:
    """Tests for parsing uploaded bytes."""

    def test_accepts_valid_payload(self, validator, sample_issue, sample_issue_bytes):
        """A valid payload returns the parsed document unchanged."""
        document = validator.validate_bytes(sample_issue_bytes)

        assert document == sample_issue

    def test_rejects_invalid_json(self, validator):
        """Bytes that are not JSON raise MalformedPayload."""
        with pytest.raises(MalformedPayload) as exc_info:
            validator.validate_bytes(b"{not json")

        assert exc_info.value.message == "Invalid JSON format."
        assert exc_info.value.errors

    def test_rejects_non_utf8(self, validator):
        """Bytes that are not UTF-8 raise MalformedPayload."""
        with pytest.raises(MalformedPayload):
            validator.validate_bytes(b"\xff\xfe\x00")

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_rejects_non_json_constants(self, validator, sample_issue, constant):
        """NaN and Infinity are not JSON and raise MalformedPayload."""
        payload = json.dumps(sample_issue).replace(
            '"cycleNumber": 7', f'"cycleNumber": {constant}'
        )

        with pytest.raises(MalformedPayload) as exc_info:
            validator.validate_bytes(payload.encode("utf-8"))

        assert exc_info.value.message == "Invalid JSON format."

    def test_payload_errors_are_validation_errors(self, validator):
        """MalformedPayload is a ValidationError."""
        with pytest.raises(ValidationError):
            validator.validate_bytes(b"")


class TestRequiredKeys:
    """Tests for the top-level shape contract."""

    @pytest.mark.parametrize(
        "key",
        [
            "cycleNumber",
            "transmissionDate",
            "layoutConfiguration",
            "mainContent",
            "footerMantra",
            "styleOverrides",
        ],
    )
    def test_missing_key_rejected(self, validator, sample_issue, key):
        """Absence of any required key raises MalformedDocument naming it."""
        del sample_issue[key]

        with pytest.raises(MalformedDocument) as exc_info:
            validator.validate(sample_issue)

        assert key in exc_info.value.message
        assert exc_info.value.errors == [key]

    def test_all_missing_keys_listed(self, validator):
        """Every missing key is reported."""
        with pytest.raises(MalformedDocument) as exc_info:
            validator.validate({"cycleNumber": 1})

        assert len(exc_info.value.errors) == 5

    def test_non_object_document_rejected(self, validator):
        """A JSON array is not a document."""
        with pytest.raises(MalformedDocument):
            validator.validate_bytes(json.dumps([1, 2, 3]).encode())

    def test_main_content_must_be_list(self, validator, sample_issue):
        """mainContent that is not a list raises MalformedDocument."""
        sample_issue["mainContent"] = {"id": "a", "type": "article"}

        with pytest.raises(MalformedDocument, match="mainContent must be a list"):
            validator.validate(sample_issue)

    def test_null_values_accepted_when_present(self, validator, sample_issue):
        """Keys only need to be present; null layout and overrides pass."""
        sample_issue["layoutConfiguration"] = None
        sample_issue["styleOverrides"] = None

        assert validator.validate(sample_issue) is sample_issue

    def test_empty_main_content_accepted(self, validator, sample_issue):
        """An empty module list is a valid document."""
        sample_issue["mainContent"] = []
        sample_issue["layoutConfiguration"] = {}

        assert validator.validate(sample_issue)["mainContent"] == []

    def test_ill_typed_field_rejected(self, validator, sample_issue):
        """Fields of an unusable type raise MalformedDocument naming them."""
        sample_issue["cycleNumber"] = {"value": 7}

        with pytest.raises(MalformedDocument) as exc_info:
            validator.validate(sample_issue)

        assert exc_info.value.message == (
            "Invalid JSON structure: unexpected type for cycleNumber."
        )
        assert exc_info.value.errors == ["cycleNumber"]

    def test_ill_typed_layout_field_named(self, validator, sample_issue):
        """Nested layout fields are named by their full path."""
        sample_issue["layoutConfiguration"]["featuredVisualTargetId"] = ["art-2"]
        sample_issue["footerMantra"] = {"text": "bye"}

        with pytest.raises(MalformedDocument) as exc_info:
            validator.validate(sample_issue)

        assert exc_info.value.errors == [
            "footerMantra",
            "layoutConfiguration.featuredVisualTargetId",
        ]
        assert "pydantic" not in exc_info.value.message


class TestModuleEntries:
    """Tests for mainContent entry checks."""

    def test_missing_id_rejects_whole_document(self, validator, sample_issue):
        """One entry without an id rejects the upload."""
        del sample_issue["mainContent"][2]["id"]

        with pytest.raises(MalformedModule) as exc_info:
            validator.validate(sample_issue)

        assert exc_info.value.index == 2
        assert '"id" and "type"' in exc_info.value.message

    def test_missing_type_rejected(self, validator, sample_issue):
        """An entry without a type rejects the upload."""
        del sample_issue["mainContent"][0]["type"]

        with pytest.raises(MalformedModule):
            validator.validate(sample_issue)

    def test_empty_id_rejected(self, validator, sample_issue):
        """An empty id counts as missing."""
        sample_issue["mainContent"][1]["id"] = ""

        with pytest.raises(MalformedModule):
            validator.validate(sample_issue)

    @pytest.mark.parametrize("entry", [None, "article", 5, ["a", "b"]])
    def test_non_object_entry_rejected(self, validator, sample_issue, entry):
        """Entries that are not objects reject the upload."""
        sample_issue["mainContent"].append(entry)

        with pytest.raises(MalformedModule):
            validator.validate(sample_issue)

    def test_unknown_type_accepted(self, validator, sample_issue):
        """Unrecognized module types are valid at upload time."""
        sample_issue["mainContent"].append({"id": "x", "type": "hologram"})

        assert validator.validate(sample_issue) is sample_issue


class TestWarnings:
    """Tests for non-fatal document warnings."""

    def test_no_warnings_for_matching_target(self, validator, sample_issue):
        """A featured target that names a module is not a warning."""
        assert validator.warnings(sample_issue) == []

    def test_unmatched_featured_target_is_warning(self, validator, sample_issue, caplog):
        """A featured target naming no module is logged but accepted."""
        sample_issue["layoutConfiguration"]["featuredVisualTargetId"] = "missing"

        document = validator.validate(sample_issue)

        assert document is sample_issue
        assert validator.warnings(sample_issue) == [
            'featuredVisualTargetId "missing" not found in mainContent.'
        ]
        assert "missing" in caplog.text

    def test_no_warning_without_layout(self, validator, sample_issue):
        """A null layout produces no warnings."""
        sample_issue["layoutConfiguration"] = None

        assert validator.warnings(sample_issue) == []
