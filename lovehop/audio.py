"""pygame.mixer sound controller.

Every sound is optional. If the mixer can't start or a file is missing the
controller just stays quiet for that sound.
"""

import logging
import os
import random
from typing import Dict, Optional

import pygame

from lovehop.config import CAUSE_CAR, CAUSE_WATER
from lovehop.services import SoundController

logger = logging.getLogger(__name__)

# Volume settings - easy to tweak
VOLUMES = {
    "background": 0.4,
    "pickup": 0.6,
    "cars": 0.3,
    "splash": 0.8,
    "romantic": 0.5,
    "door": 0.7,
    "honk": 0.8,
}

SOUND_FILES = {
    "pickup": "pickup-sound.wav",
    "cars": "car-sounds.wav",
    "splash": "splash-sound.wav",
    "door": "door-opening.wav",
    "honk": "car-honk.wav",
}
BACKGROUND_MUSIC = "background-music.mp3"
ROMANTIC_MUSIC = "romantic-music.wav"

# Random pause between car-noise clips (ms)
CAR_BREAK_MS = (1000, 3000)
# Romantic music waits for the door sound to play a little
ROMANTIC_DELAY_MS = 500


class MixerSound(SoundController):
    def __init__(self, assets_dir: str, rng: Optional[random.Random] = None):
        self.assets_dir = assets_dir
        self.rng = rng or random.Random()
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.enabled = self._init_mixer()

        self.cars_active = False
        self.car_timer = 0.0
        self.car_channel: Optional[pygame.mixer.Channel] = None
        self.romantic_delay: Optional[float] = None
        self.music: Optional[str] = None

        if self.enabled:
            self._load_sounds()
            self._play_music(BACKGROUND_MUSIC, VOLUMES["background"])

    def _init_mixer(self) -> bool:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as e:
            logger.warning("Audio disabled: %s", e)
            return False
        return True

    def _load_sounds(self):
        for name, filename in SOUND_FILES.items():
            path = os.path.join(self.assets_dir, filename)
            if not os.path.exists(path):
                logger.info("Sound %s not found at %s", name, path)
                continue
            try:
                sound = pygame.mixer.Sound(path)
            except pygame.error as e:
                logger.warning("Could not load %s: %s", path, e)
                continue
            sound.set_volume(VOLUMES[name])
            self.sounds[name] = sound

    def _play(self, name: str) -> Optional[pygame.mixer.Channel]:
        sound = self.sounds.get(name)
        if sound is None:
            return None
        return sound.play()

    def _play_music(self, filename: str, volume: float):
        path = os.path.join(self.assets_dir, filename)
        if not os.path.exists(path):
            return
        try:
            pygame.mixer.music.load(path)
            pygame.mixer.music.set_volume(volume)
            pygame.mixer.music.play(-1)
            self.music = filename
        except pygame.error as e:
            logger.warning("Could not play %s: %s", path, e)

    # -- events --

    def pickup(self):
        self._play("pickup")

    def death(self, cause: str):
        if cause == CAUSE_WATER:
            self._play("splash")
        elif cause == CAUSE_CAR:
            self._play("honk")

    def door_open(self):
        self._play("door")

    def scene_enter(self, scene: str):
        if not self.enabled:
            return
        if scene == "play":
            self.cars_active = True
            self.car_timer = 0.0
        elif scene == "homeInterior":
            self.romantic_delay = ROMANTIC_DELAY_MS

    def scene_exit(self):
        self.cars_active = False
        self.romantic_delay = None
        if self.car_channel is not None:
            self.car_channel.stop()
            self.car_channel = None
        if self.enabled and self.music == ROMANTIC_MUSIC:
            self._play_music(BACKGROUND_MUSIC, VOLUMES["background"])

    def tick(self, dt: float):
        if not self.enabled:
            return

        if self.romantic_delay is not None:
            self.romantic_delay -= dt
            if self.romantic_delay <= 0:
                self.romantic_delay = None
                self._play_music(ROMANTIC_MUSIC, VOLUMES["romantic"])

        if not self.cars_active:
            return
        if self.car_channel is not None and self.car_channel.get_busy():
            return
        # Clip finished (or never started): wait out a random break, then replay.
        self.car_timer -= dt
        if self.car_timer <= 0:
            self.car_channel = self._play("cars")
            self.car_timer = self.rng.uniform(*CAR_BREAK_MS)
