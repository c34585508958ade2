import pytest


class FakeListener:
    """Records every GameLogic callback."""

    def __init__(self):
        self.level = None
        self.actions = None
        self.exception = None
        self.won = 0
        self.lost = []

    def on_logic_initialized(self, level):
        self.level = level

    def on_game_win(self):
        self.won += 1

    def on_game_lose(self, reason=None):
        self.lost.append(reason)

    def play(self, actions):
        self.actions = actions

    def panic(self, exception):
        self.exception = exception


@pytest.fixture
def listener():
    return FakeListener()
