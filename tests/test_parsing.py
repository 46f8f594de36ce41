import pytest

from peasantquest.parsing import (
    MapError,
    MapInfo,
    check_elements,
    check_name,
    check_rectangular,
    check_walls,
    count_elements,
    validate_map,
)

GOOD = ["1111111", "1P0C0E1", "1111111"]


def test_validate_map_describes_good_map():
    info = validate_map("maps/level.ber", GOOD)
    assert info == MapInfo(
        width=len(GOOD[0]), height=len(GOOD), collectibles=1, exits=1, players=1
    )


def test_validate_counts_several_collectibles_and_exits():
    rows = ["111111", "1PCCE1", "1E0C01", "111111"]
    info = validate_map("two.ber", rows)
    assert (info.collectibles, info.exits) == (
        sum(r.count("C") for r in rows),
        sum(r.count("E") for r in rows),
    )


@pytest.mark.parametrize("name", ["map", "xyz", "", "ab"])
def test_check_name_rejects_short_names(name):
    with pytest.raises(MapError, match="bad map extension or name"):
        check_name(name)


@pytest.mark.parametrize("name", ["a.be", "abc", "level.txt", "maps/map.ber"])
def test_validate_map_accepts_names_that_pass(name):
    assert validate_map(name, GOOD).players == 1


def test_check_elements_returns_height_and_last_row_width():
    rows = ["111", "1P1", "11"]
    assert check_elements(rows) == (len(rows), len(rows[-1]))


def test_check_elements_empty():
    assert check_elements([]) == (0, 0)


def test_check_elements_rejects_unknown_tile():
    with pytest.raises(MapError, match="bad elements"):
        check_elements(["11111", "1PXE1", "11111"])


def test_count_elements():
    assert count_elements(GOOD) == (1, 1, 1)


@pytest.mark.parametrize(
    "rows",
    [
        ["11111", "1P0E1", "11111"],
        ["11111", "1PC01", "11111"],
        ["111111", "1PPCE1", "111111"],
        ["11111", "10CE1", "11111"],
    ],
)
def test_count_elements_rejects_bad_counts(rows):
    with pytest.raises(MapError, match="bad number of elements"):
        count_elements(rows)


def test_check_rectangular_rejects_ragged_rows():
    with pytest.raises(MapError, match="map not rectangular"):
        check_rectangular(["11111", "1PCE1", "1111"], 4)


def test_validate_map_rejects_ragged_rows():
    with pytest.raises(MapError, match="map not rectangular"):
        validate_map("map.ber", ["1111111", "1PCE1", "1111111"])


@pytest.mark.parametrize(
    "rows",
    [
        ["11011", "1PCE1", "11111"],
        ["11111", "1PCE1", "11101"],
        ["11111", "0PCE1", "11111"],
        ["11111", "1PCE0", "11111"],
    ],
)
def test_check_walls_rejects_open_border(rows):
    with pytest.raises(MapError, match="bad wall"):
        check_walls(rows, len(rows[0]), len(rows))


def test_validate_map_stops_at_first_failing_rule():
    with pytest.raises(MapError, match="bad elements"):
        validate_map("map.ber", ["11111", "1PCE0", "1111Z"])