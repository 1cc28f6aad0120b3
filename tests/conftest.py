import random

import pytest

from lovehop.services import SoundController


class RecordingSound(SoundController):
    def __init__(self):
        self.events = []

    def pickup(self):
        self.events.append(("pickup",))

    def death(self, cause):
        self.events.append(("death", cause))

    def door_open(self):
        self.events.append(("door_open",))

    def scene_enter(self, scene):
        self.events.append(("scene_enter", scene))

    def scene_exit(self):
        self.events.append(("scene_exit",))


class ZeroRandom(random.Random):
    """Every probability roll succeeds."""

    def random(self):
        return 0.0


@pytest.fixture
def rng():
    return random.Random(1337)


@pytest.fixture
def sound():
    return RecordingSound()
