from leftover.game.session import Session
from leftover.renderer import render_board, render_hand, render_session, render_shape
from tests.helpers import board_from_rows, shape


def test_render_board():
    board = board_from_rows([
        "aa....",
        "....x.",
        "......",
        "......",
        "......",
        "......",
    ])
    lines = render_board(board).splitlines()
    assert lines[0] == "  0 1 2 3 4 5"
    assert lines[1] == "0 # # . . . ."
    assert lines[2] == "1 . . . . x ."


def test_render_shape():
    l_shape = shape([(1, 0), (0, 1), (1, 1)])
    assert render_shape(l_shape) == [" #", "##"]


def test_render_hand():
    text = render_hand([shape([(0, 0), (1, 0), (2, 0)], shape_id="a"), shape([(0, 0), (0, 1)], shape_id="b")])
    lines = text.splitlines()
    assert lines[0].startswith("[0]")
    assert "[1]" in lines[0]
    assert lines[1].startswith("###")
    assert render_hand([]) == "(empty hand)"


def test_render_session_shows_game_over(session):
    session.game_over = True
    text = render_session(session)
    assert "Score: 0" in text
    assert text.endswith("GAME OVER")
