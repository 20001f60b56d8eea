import pytest

from src.puzzle import Puzzle
from src.session import GameSession, Player, ScoreStore
from src.utils import ManualClock


@pytest.fixture
def clock():
    """Clock starting at an arbitrary non-zero time."""
    return ManualClock(start_ms=1_000_000)


@pytest.fixture
def cat_dog_puzzle():
    """3x3 puzzle hiding CAT and DOG on the first two rows."""
    return Puzzle(
        grid=[
            ["C", "A", "T"],
            ["D", "O", "G"],
            ["X", "Y", "Z"],
        ],
        words=["CAT", "DOG"],
        theme="Animals",
        difficulty="easy",
    )


@pytest.fixture
def store():
    return ScoreStore()


@pytest.fixture
def player():
    return Player(name="Ada", age=9, difficulty="easy", preferences={"animals"})


@pytest.fixture
def session(clock, store, player, cat_dog_puzzle):
    """Active session on the CAT/DOG puzzle that waits for new_puzzle() after a level."""
    session = GameSession.create(store=store, clock=clock, seed=7, auto_advance=False, pacing_delay=0)
    session.set_player(player)
    session.load_puzzle(cat_dog_puzzle)
    session.drain_events()
    return session
