import random

import pytest

from Models.game_session import GameSession
from Models.stats_store import StatsStore


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms / 1000


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stats(tmp_path):
    return StatsStore(str(tmp_path / "stats.json"))


@pytest.fixture
def session(stats, clock):
    game = GameSession(stats, block_size=3, clock=clock, rng=random.Random(1234))
    game.new_game()
    return game
