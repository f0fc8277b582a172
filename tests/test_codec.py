"""
Tests for the vault record codec.

Tests cover:
- Exact output format and escaping
- Round-trips with quotes, backslashes, newlines and ``},{`` in values
- Lenient decoding of malformed input
"""
import pytest

from password_generator.vault.codec import (
    CredentialRecord,
    deserialize,
    escape,
    parse_object,
    serialize,
    split_objects,
)
from password_generator.exceptions import MalformedRecordError


@pytest.fixture
def github():
    return CredentialRecord(service="github", username="alice", password="p@ss")


# --- Test Serialization ---

class TestSerialize:
    """Tests for serialize()."""

    def test_empty_list(self):
        """Test no records encode as an empty array."""
        assert serialize([]) == "[]"

    def test_single_record_format(self, github):
        """Test exact field order and quoting."""
        assert serialize([github]) == (
            '[{"service":"github","username":"alice","password":"p@ss"}]'
        )

    def test_records_joined_by_comma(self, github):
        """Test objects are separated by a bare comma."""
        text = serialize([github, github])
        assert text.count("},{") == 1

    def test_escape_rules(self):
        """Test only backslash, quote and newline are escaped."""
        assert escape('a\\b"c\nd') == 'a\\\\b\\"c\\nd'
        assert escape("{},:") == "{},:"


# --- Test Deserialization ---

class TestDeserialize:
    """Tests for deserialize()."""

    def test_roundtrip_plain(self, github):
        """Test plain records survive a round-trip."""
        records = [github, CredentialRecord(service="mail", username="bob", password="x")]
        assert deserialize(serialize(records)) == records

    @pytest.mark.parametrize("value", [
        'quote " inside',
        "back\\slash",
        "new\nline",
        "literal \\n not a newline",
        "ends with backslash \\",
        "},{",
        '"},{"service":"evil"}',
        "colon: brace{ comma,",
        "",
    ])
    def test_roundtrip_special_values(self, value):
        """Test values with delimiters and escapes round-trip in every field."""
        records = [
            CredentialRecord(service=value, username="u", password="p"),
            CredentialRecord(service="s", username=value, password="p"),
            CredentialRecord(service="s", username="u", password=value),
        ]
        assert deserialize(serialize(records)) == records

    def test_order_preserved(self):
        """Test records come back in the order written."""
        records = [
            CredentialRecord(service=str(i), username="u", password="p")
            for i in range(10)
        ]
        assert [r.service for r in deserialize(serialize(records))] == [
            str(i) for i in range(10)
        ]

    def test_surrounding_whitespace(self, github):
        """Test whitespace around the array is ignored."""
        assert deserialize("  " + serialize([github]) + "\n") == [github]

    @pytest.mark.parametrize("text", [
        None,
        "",
        "[]",
        "[ ]",
        "not json",
        "{}",
        "[",
    ])
    def test_malformed_or_empty_yields_empty(self, text):
        """Test non-array or empty input yields an empty list."""
        assert deserialize(text) == []

    def test_incomplete_object_skipped(self, github):
        """Test an object lacking a field is skipped, others are kept."""
        text = '[{"service":"x","username":"y"},' + serialize([github])[1:]
        assert deserialize(text) == [github]

    def test_unterminated_string_skipped(self):
        """Test an object with an open string yields nothing."""
        assert deserialize('[{"service":"x,"username":"y","password":"z}]') == []


# --- Test Helpers ---

class TestHelpers:
    """Tests for split_objects() and parse_object()."""

    def test_split_ignores_boundary_inside_string(self):
        """Test ``},{`` inside a quoted value does not split."""
        body = '{"service":"a},{b","username":"u","password":"p"},{"service":"c","username":"u","password":"p"}'
        assert len(split_objects(body)) == 2

    def test_parse_object_any_field_order(self):
        """Test fields are matched by name."""
        record = parse_object('{"password":"p","service":"s","username":"u"}')
        assert record == CredentialRecord(service="s", username="u", password="p")

    def test_parse_object_missing_field(self):
        """Test a missing field raises MalformedRecordError."""
        with pytest.raises(MalformedRecordError):
            parse_object('{"service":"s","username":"u"}')

    def test_parse_object_requires_braces(self):
        """Test text without braces raises MalformedRecordError."""
        with pytest.raises(MalformedRecordError):
            parse_object('"service":"s"')


class TestCredentialRecord:
    """Tests for the record model."""

    def test_equality(self, github):
        """Test records compare by field values."""
        assert github == CredentialRecord(service="github", username="alice", password="p@ss")

    def test_repr_masks_password(self, github):
        """Test repr() does not reveal the password."""
        assert "p@ss" not in repr(github)
        assert "github" in repr(github)

    def test_frozen(self, github):
        """Test records are immutable; edits replace them."""
        with pytest.raises(Exception):
            github.password = "changed"
