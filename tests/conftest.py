import random

import pytest

from leftover.game.board import create_empty_board
from leftover.game.session import Session
from tests.helpers import shape


@pytest.fixture
def empty_board():
    return create_empty_board()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def session(rng):
    return Session(rng=rng)


@pytest.fixture
def dot():
    return shape([(0, 0)], shape_id="dot")


@pytest.fixture
def domino_h():
    return shape([(0, 0), (1, 0)], shape_id="domino")
