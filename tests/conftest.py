import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest


class RecordingVoice:
    def __init__(self):
        self.played = []

    def play(self, frequency, duration):
        self.played.append((frequency, duration))


@pytest.fixture
def voice():
    return RecordingVoice()
