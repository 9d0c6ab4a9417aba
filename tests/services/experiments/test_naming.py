import pytest

from splitstats.services.experiments.exceptions import InvalidAlternative
from splitstats.services.experiments.naming import (
    PlainName,
    WeightedName,
    parse_alternative_name,
    validate_alternative_name,
)


class TestParseAlternativeName:
    def test_plain_string(self):
        spec = parse_alternative_name("red")

        assert spec == PlainName("red")
        assert spec.weight == 1.0

    @pytest.mark.parametrize("weight,expected", [(2, 2.0), (0.25, 0.25), ("3.5", 3.5), ("1", 1.0)])
    def test_weighted_mapping(self, weight, expected):
        spec = parse_alternative_name({"red": weight})

        assert spec == WeightedName("red", expected)

    def test_name_spec_passes_through(self):
        assert parse_alternative_name(PlainName("red")) == PlainName("red")
        assert parse_alternative_name(WeightedName("red", 2)) == WeightedName("red", 2.0)

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            None,
            42,
            4.2,
            ["red"],
            {},
            {"red": 1, "blue": 2},
            {1: 2},
            {"red": "heavy"},
            {"red": None},
            {"red": True},
            {"red": float("inf")},
            {"red": "nan"},
            PlainName(""),
        ],
    )
    def test_rejects_malformed(self, raw):
        with pytest.raises(InvalidAlternative):
            parse_alternative_name(raw)

    def test_invalid_alternative_is_value_error(self):
        with pytest.raises(ValueError):
            validate_alternative_name(7)


class TestValidateAlternativeName:
    @pytest.mark.parametrize("raw", ["a", "Basket Text", {"red": 0.1}, {"red": "10"}])
    def test_accepts_well_formed(self, raw):
        assert validate_alternative_name(raw) is None
