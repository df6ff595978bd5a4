import json
import random

import pytest

from leftover.game.board import create_empty_board
from leftover.game.session import Session
from leftover.storage import (
    HIGH_SCORE_KEY,
    SAVE_KEY,
    SaveStore,
    board_from_dict,
    board_to_dict,
    shape_from_dict,
    snapshot_from_dict,
    snapshot_to_dict,
)
from tests.helpers import board_from_rows, shape


def make_played_session():
    session = Session(rng=random.Random(11))
    session.board = board_from_rows([
        "aa..x.",
        "......",
        "..b...",
        "..b...",
        "......",
        "......",
    ])
    session.hand = [shape([(0, 0), (1, 0)], shape_id="h"), shape([(0, 0)], shape_id="d")]
    session.place("d", 5, 5)
    return session


def test_snapshot_round_trip():
    session = make_played_session()
    snapshot = session.snapshot()
    data = snapshot_to_dict(snapshot)
    assert set(data) == {"board", "score", "hand", "turn", "game_over", "combo"}
    restored = snapshot_from_dict(json.loads(json.dumps(data)))
    assert restored == snapshot
    assert restored.board.next_owner == snapshot.board.next_owner
    assert restored.board.cell(4, 0).color == snapshot.board.cell(4, 0).color


def test_save_and_load_session(tmp_path):
    store = SaveStore(tmp_path / "save.json")
    session = make_played_session()
    store.save_session(session)

    loaded = Session(rng=random.Random(99))
    assert store.load_session(loaded)
    assert loaded.board == session.board
    assert loaded.score == session.score
    assert loaded.hand == session.hand
    assert loaded.turn == session.turn
    assert loaded.combo == session.combo
    assert loaded.game_over == session.game_over
    assert list(loaded.history) == list(session.history)
    assert loaded.high_score == session.high_score


def test_loaded_history_supports_undo(tmp_path):
    store = SaveStore(tmp_path / "save.json")
    session = make_played_session()
    store.save_session(session)

    loaded = Session()
    store.load_session(loaded)
    assert loaded.undo()
    assert loaded.score == 0
    assert [s.id for s in loaded.hand] == ["h", "d"]


def test_load_without_file(tmp_path):
    store = SaveStore(tmp_path / "missing.json")
    session = Session(rng=random.Random(1))
    hand = list(session.hand)
    assert not store.load_session(session)
    assert session.hand == hand


def test_load_malformed_record(tmp_path):
    path = tmp_path / "save.json"
    path.write_text(json.dumps({SAVE_KEY: {"score": 500}, HIGH_SCORE_KEY: 800}))
    store = SaveStore(path)
    session = Session(rng=random.Random(1))
    assert not store.load_session(session)
    assert session.score == 0
    assert session.high_score == 800


def test_load_rejects_board_with_wrong_dimensions(tmp_path):
    store = SaveStore(tmp_path / "save.json")
    store.save_session(make_played_session())
    record = store.get(SAVE_KEY)
    record["board"]["status"] = record["board"]["status"][:3]
    store.set(SAVE_KEY, record)

    session = Session(rng=random.Random(1))
    board, hand = session.board, list(session.hand)
    assert not store.load_session(session)
    assert session.board == board
    assert session.hand == hand
    assert session.score == 0


def test_board_from_dict_rejects_short_color_row():
    data = board_to_dict(create_empty_board())
    data["color"][2] = data["color"][2][:4]
    with pytest.raises(ValueError):
        board_from_dict(data)


def test_board_from_dict_rejects_unknown_status():
    data = board_to_dict(create_empty_board())
    data["status"][0][0] = 7
    with pytest.raises(ValueError):
        board_from_dict(data)


def test_loaded_hand_cells_are_normalized():
    restored = shape_from_dict({"id": "d", "cells": [[2, 2]], "color": "#ef4444"})
    assert restored.cells == ((0, 0),)
    restored = shape_from_dict({"id": "h", "cells": [[4, 1], [3, 1]], "color": "#ef4444"})
    assert restored.cells == ((0, 0), (1, 0))


def test_load_corrupt_file(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("{not json")
    store = SaveStore(path)
    assert not store.load_session(Session())


def test_clear_session_keeps_high_score(tmp_path):
    store = SaveStore(tmp_path / "save.json")
    session = make_played_session()
    store.save_session(session)
    store.clear_session()
    assert store.get(SAVE_KEY) is None
    assert store.load_high_score() == session.high_score
    assert not store.load_session(Session())


def test_high_score_never_decreases(tmp_path):
    store = SaveStore(tmp_path / "save.json")
    store.set(HIGH_SCORE_KEY, 1000)
    session = make_played_session()
    store.save_session(session)
    assert store.load_high_score() == 1000
