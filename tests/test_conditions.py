import pytest

from open_meteo import describe_condition_code
from open_meteo.conditions import CONDITIONS


@pytest.mark.parametrize("code, text", [
    (0, "Clear sky"),
    (3, "Overcast"),
    (45, "Fog"),
    (65, "Heavy rain"),
    (77, "Snow grains"),
    (99, "Thunderstorm with heavy hail"),
])
def test_known_codes(code, text):
    assert describe_condition_code(code) == text


@pytest.mark.parametrize("code", [-1, 4, 50, 100, 1000, None])
def test_unknown_codes_fall_back(code):
    assert describe_condition_code(code) == "Unknown"


def test_table_covers_wmo_groups():
    assert sorted(CONDITIONS) == [
        0, 1, 2, 3, 45, 48, 51, 53, 55, 56, 57, 61, 63, 65, 66, 67,
        71, 73, 75, 77, 80, 81, 82, 85, 86, 95, 96, 99,
    ]


def test_total_over_a_range():
    for code in range(-50, 200):
        assert describe_condition_code(code)
