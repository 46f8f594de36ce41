import pytest

from peasantquest.game import Game, Key, MoveResult
from peasantquest.parsing import MapError

SIMPLE = ["11111", "1PCE1", "11111"]


def test_initial_state():
    game = Game(SIMPLE)
    assert game.player == (SIMPLE[1].index("P"), 1)
    assert game.collectibles == 1
    assert game.walk == 0
    assert game.rows == tuple(SIMPLE)


def test_collect_then_finish():
    game = Game(SIMPLE)
    start = game.player
    result = game.handle_key(Key.D)
    assert result.moved and result.collected and not result.finished
    assert result.origin == start
    assert result.position == (start[0] + 1, start[1])
    assert game.tile(*result.position) == "0"
    assert game.powered
    assert result.walk == game.walk
    final = game.handle_key(Key.D)
    assert final.finished
    assert game.walk == result.walk + 1


def test_wall_blocks_movement():
    game = Game(["1111", "1P01", "1111"])
    start = game.player
    result = game.handle_key(Key.W)
    assert result == MoveResult(start, start, 0)
    assert game.player == start


def test_exit_before_collecting_does_not_finish():
    game = Game(["111111", "1PEC01", "111111"])
    on_exit = game.handle_key(Key.D)
    assert on_exit.moved and not on_exit.finished
    assert game.tile(*game.player) == "E"
    assert game.handle_key(Key.D).collected
    back = game.handle_key(Key.A)
    assert back.finished
    assert game.player == game.exit_positions()[0]


def test_raw_key_codes_match_keys():
    game = Game(["1111", "101", "1P1", "1C1", "1E1", "111"])
    start = game.player
    up = game.handle_key(13)
    assert up.position == (start[0], start[1] - 1)
    down = game.handle_key(Key.S)
    assert down.position == start


def test_escape_quits_without_moving():
    game = Game(SIMPLE)
    result = game.handle_key(Key.ESCAPE)
    assert result.quit and not result.moved
    assert game.walk == 0


def test_unknown_key_does_nothing():
    game = Game(SIMPLE)
    result = game.handle_key(99)
    assert result == MoveResult(game.player, game.player, 0)


def test_exit_positions_in_row_order():
    game = Game(["11111", "1EPC1", "1C0E1", "11111"])
    exits = game.exit_positions()
    assert exits == sorted(exits, key=lambda p: (p[1], p[0]))
    assert all(game.tile(x, y) == "E" for x, y in exits)
    assert len(exits) == sum(row.count("E") for row in game.rows)


def test_tile_out_of_range():
    game = Game(SIMPLE)
    with pytest.raises(IndexError):
        game.tile(-1, 0)
    with pytest.raises(IndexError):
        game.tile(0, len(SIMPLE))


def test_map_without_player_is_rejected():
    with pytest.raises(MapError):
        Game(["1111", "1CE1", "1111"])


def test_last_player_tile_is_used():
    game = Game(["11111", "1PCP1", "1E001", "11111"])
    assert game.player == (SIMPLE[1].rindex("E"), 1)


def test_walk_counts_every_successful_step():
    game = Game(["111111", "1P00C1", "1E0001", "111111"])
    results = [game.handle_key(key) for key in (Key.D, Key.D, Key.W, Key.S, Key.D)]
    assert game.walk == sum(r.moved for r in results)
    assert [r.walk for r in results if r.moved] == list(range(1, game.walk + 1))