"""Tests for the metadata value model."""

from titleblock.core.document_processor.front_matter import (
    ABSENT,
    Absent,
    MappingValue,
    ScalarValue,
    SequenceValue,
    as_items,
    from_python,
)


class TestMetadataValues:
    """Tests for the tagged value union."""

    def test_absent_is_singleton_and_falsy(self):
        """Test ABSENT is unique and false."""
        assert Absent() is ABSENT
        assert not ABSENT
        assert ABSENT.text is None
        assert ABSENT.to_python() is None

    def test_scalar_text(self):
        """Test only string scalars expose text."""
        assert ScalarValue("Foo").text == "Foo"
        assert ScalarValue(3).text is None
        assert ScalarValue(True).text is None

    def test_mapping_get_missing_key(self):
        """Test a missing key reads as ABSENT."""
        assert MappingValue({}).get("title") is ABSENT

    def test_mapping_without_returns_new_mapping(self):
        """Test removing keys leaves the original mapping untouched."""
        mapping = MappingValue({"a": ScalarValue(1), "b": ScalarValue(2), "c": ScalarValue(3)})

        reduced = mapping.without(["b"])

        assert reduced.keys() == ["a", "c"]
        assert mapping.keys() == ["a", "b", "c"]

    def test_from_python_round_trip(self):
        """Test plain data converts to values and back."""
        data = {"title": "Foo", "tags": ["a", "b"], "meta": {"n": 1, "ok": False}}

        assert from_python(data).to_python() == data

    def test_from_python_null_is_absent(self):
        """Test YAML nulls become ABSENT."""
        assert from_python(None) is ABSENT
        assert from_python({"a": None}).get("a") is ABSENT

    def test_from_python_stringifies_keys(self):
        """Test non-string mapping keys are converted to strings."""
        assert from_python({1: "one"}).keys() == ["1"]

    def test_as_items(self):
        """Test coercion to an item sequence."""
        scalar = ScalarValue("A")
        sequence = SequenceValue((scalar, ScalarValue("B")))

        assert as_items(ABSENT) == ()
        assert as_items(scalar) == (scalar,)
        assert as_items(sequence) == sequence.items
