"""Tests for scalar canonicalization."""

from datetime import date, datetime, timedelta, timezone

import pytest

from docdiff import PropertyType, canonicalize, canonical_equal
from docdiff.canonicalizer import parse_datetime, comparison_key
from docdiff.exceptions import MalformedScalarError


class TestCanonicalize:
    """Test canonical forms per scalar kind."""

    def test_absent(self):
        """Absent values stay absent for every kind."""
        for kind in (PropertyType.STRING, PropertyType.DATE, PropertyType.BOOLEAN):
            assert canonicalize(kind, None) is None

    def test_boolean(self):
        """Booleans and their string forms read as true/false."""
        assert canonicalize(PropertyType.BOOLEAN, True) == "true"
        assert canonicalize(PropertyType.BOOLEAN, False) == "false"
        assert canonicalize(PropertyType.BOOLEAN, " TRUE ") == "true"

    def test_boolean_malformed(self):
        """Non boolean values are rejected."""
        with pytest.raises(MalformedScalarError):
            canonicalize(PropertyType.BOOLEAN, "yes")
        with pytest.raises(MalformedScalarError):
            canonicalize(PropertyType.BOOLEAN, 1)

    def test_integer(self):
        """Integers, integral floats and integer strings."""
        assert canonicalize(PropertyType.INTEGER, 10) == "10"
        assert canonicalize(PropertyType.INTEGER, " 42 ") == "42"
        assert canonicalize(PropertyType.LONG, 12.0) == "12"
        assert canonicalize(PropertyType.LONG, -3) == "-3"

    def test_integer_malformed(self):
        """Fractions, words and booleans are not integers."""
        with pytest.raises(MalformedScalarError):
            canonicalize(PropertyType.INTEGER, "ten")
        with pytest.raises(MalformedScalarError):
            canonicalize(PropertyType.LONG, 12.5)
        with pytest.raises(MalformedScalarError):
            canonicalize(PropertyType.INTEGER, True)

    def test_double(self):
        """Doubles use the float text form."""
        assert canonicalize(PropertyType.DOUBLE, 1) == "1.0"
        assert canonicalize(PropertyType.DOUBLE, 2.5) == "2.5"
        assert canonicalize(PropertyType.DOUBLE, "2.50") == "2.5"

    def test_double_malformed(self):
        """Non numeric strings are not doubles."""
        with pytest.raises(MalformedScalarError):
            canonicalize(PropertyType.DOUBLE, "two")

    def test_date_strings(self):
        """ISO 8601 strings are normalized to UTC seconds."""
        assert canonicalize(PropertyType.DATE, "2011-12-29T11:24:25Z") == "2011-12-29T11:24:25Z"
        assert canonicalize(PropertyType.DATE, "2011-12-30T00:00:00+01:00") == "2011-12-29T23:00:00Z"
        assert canonicalize(PropertyType.DATE, "2011-12-29") == "2011-12-29T00:00:00Z"
        assert canonicalize(PropertyType.DATE, "2011-12-29T11:24:25.123Z") == "2011-12-29T11:24:25Z"

    def test_date_objects(self):
        """Date and datetime objects, naive ones taken as UTC."""
        aware = datetime(2011, 12, 30, 1, 0, tzinfo=timezone(timedelta(hours=2)))
        assert canonicalize(PropertyType.DATE, aware) == "2011-12-29T23:00:00Z"
        assert canonicalize(PropertyType.DATE, datetime(2011, 12, 29, 8, 30)) == "2011-12-29T08:30:00Z"
        assert canonicalize(PropertyType.DATE, date(2011, 12, 29)) == "2011-12-29T00:00:00Z"

    def test_date_malformed(self):
        """Unparseable dates are rejected."""
        with pytest.raises(MalformedScalarError):
            canonicalize(PropertyType.DATE, "29/12/2011")
        with pytest.raises(MalformedScalarError):
            canonicalize(PropertyType.DATE, 42)

    def test_string_keeps_whitespace(self):
        """Strings keep their original text."""
        assert canonicalize(PropertyType.STRING, "jack ") == "jack "
        assert canonicalize(PropertyType.STRING, 5) == "5"
        assert canonicalize(PropertyType.UNDEFINED, "SampleType") == "SampleType"

    def test_string_from_date(self):
        """Date values read from YAML keep their ISO text in string fields."""
        assert canonicalize(PropertyType.STRING, date(2011, 12, 29)) == "2011-12-29"
        assert canonicalize(PropertyType.UNDEFINED, date(2011, 12, 29)) == "2011-12-29"

    def test_string_malformed(self):
        """Mappings are not strings."""
        with pytest.raises(MalformedScalarError):
            canonicalize(PropertyType.STRING, {"a": 1})

    def test_not_a_scalar_kind(self):
        """Only scalar kinds can be canonicalized."""
        with pytest.raises(MalformedScalarError):
            canonicalize(PropertyType.COMPLEX, "x")


class TestCanonicalEqual:
    """Test equality of canonical forms."""

    def test_absent(self):
        """Absent equals only absent."""
        assert canonical_equal(None, None) is True
        assert canonical_equal(None, "x") is False
        assert canonical_equal("", None) is False

    def test_trimmed(self):
        """Surrounding whitespace is ignored, inner whitespace is not."""
        assert canonical_equal("jack ", "jack") is True
        assert canonical_equal("  a b ", "a b") is True
        assert canonical_equal("a  b", "a b") is False
        assert comparison_key(" x ") == "x"

    def test_case_sensitive(self):
        """Comparison is case sensitive."""
        assert canonical_equal("Jack", "jack") is False


class TestParseDatetime:
    """Test ISO 8601 parsing."""

    def test_zulu_is_utc(self):
        """A trailing Z yields a UTC datetime."""
        parsed = parse_datetime("2011-12-29T11:24:25Z")
        assert parsed.tzinfo == timezone.utc

    def test_naive(self):
        """Values without offset stay naive."""
        assert parse_datetime("2011-12-29 11:24:25") == datetime(2011, 12, 29, 11, 24, 25)

    def test_invalid(self):
        """Unparseable input raises ValueError."""
        with pytest.raises(ValueError):
            parse_datetime("tomorrow")
