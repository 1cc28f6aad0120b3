"""Epilogue scenes: the home interior, the tofu soup and the bonus game.

Each scene object lives only while its scene is active and is fed the frame
delta in milliseconds. The home interior never ends by itself; it waits for
the soup button.
"""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from lovehop.config import (
    BONUS_SECONDS,
    HEART_SPAWN_MS,
    HOME_APPROACH_SPEED,
    HOME_FADE_MIN_MS,
    HOME_HEARTS_MS,
    HOME_HUG_GAP,
    HOME_WALK_SPEED,
    HOME_WALK_START_X,
    RING_GROWTH,
    RING_SPAWN_MS,
    RING_THICKNESS,
    SOUP_BUTTON_H,
    SOUP_BUTTON_W,
    SOUP_SHOW_MS,
    STEAM_PER_SPAWN,
    STEAM_SPAWN_MS,
    TILE,
    WINDOW_H,
    WINDOW_W,
)

logger = logging.getLogger(__name__)


class Scene(Enum):
    TITLE = "title"
    PLAY = "play"
    ENDING = "ending"
    BONUS = "bonus"
    BONUS_OVER = "bonusOver"
    HOME_INTERIOR = "homeInterior"
    TOFU_SOUP = "tofuSoup"


class HomePhase(Enum):
    FADE_IN = "fadeIn"
    PLAYER_WALK = "playerWalk"
    APPROACH = "approach"
    HEARTS = "hearts"
    SHOW_BUTTON = "showButton"


class SoupPhase(Enum):
    FADE_IN = "fadeIn"
    SHOW_SOUP = "showSoup"


@dataclass
class Particle:
    x: float
    y: float
    scale: float
    opacity: float


@dataclass
class Ring:
    x: float
    y: float
    r: float = 0.0
    w: float = RING_THICKNESS
    spent: bool = False  # a ring only strikes once


# ----------------------------- Home interior -----------------------------

class HomeInterior:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.phase = HomePhase.FADE_IN
        self.fade_opacity = 0.0
        self.player_x = float(HOME_WALK_START_X)
        self.partner_x = WINDOW_W / 2
        self.timer = 0.0
        self.hearts_timer = 0.0
        self.hearts: List[Particle] = []

    @property
    def button_rect(self) -> Tuple[float, float, float, float]:
        """Hit box of the soup button, just below the characters."""
        return ((WINDOW_W - SOUP_BUTTON_W) / 2, WINDOW_H * 0.75 + 50, SOUP_BUTTON_W, SOUP_BUTTON_H)

    @property
    def waiting(self) -> bool:
        return self.phase is HomePhase.SHOW_BUTTON

    def button_hit(self, x: float, y: float) -> bool:
        if not self.waiting:
            return False
        bx, by, bw, bh = self.button_rect
        return bx <= x <= bx + bw and by <= y <= by + bh

    def _enter(self, phase: HomePhase):
        logger.debug("Home interior: %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        self.timer = 0.0

    def _spawn_heart(self):
        centre = (self.player_x + self.partner_x) / 2
        self.hearts.append(Particle(
            x=centre + (self.rng.random() - 0.5) * 60,
            y=WINDOW_H / 2 + (self.rng.random() - 0.5) * 40,
            scale=0.5 + self.rng.random() * 0.5,
            opacity=1.0,
        ))

    def _float_hearts(self, dt: float, rise: float, fade: float, grow: float = 0.0):
        for heart in self.hearts:
            heart.y -= dt * rise
            heart.scale += dt * grow
            heart.opacity -= dt * fade
        self.hearts = [h for h in self.hearts if h.opacity > 0]

    def update(self, dt: float):
        self.timer += dt
        phase = self.phase

        if phase is HomePhase.FADE_IN:
            self.fade_opacity = min(1.0, self.fade_opacity + dt / 1000)
            if self.fade_opacity >= 1 and self.timer > HOME_FADE_MIN_MS:
                self._enter(HomePhase.PLAYER_WALK)

        elif phase is HomePhase.PLAYER_WALK:
            self.player_x += dt * HOME_WALK_SPEED
            if self.player_x >= WINDOW_W / 3:
                self._enter(HomePhase.APPROACH)

        elif phase is HomePhase.APPROACH:
            step = dt * HOME_APPROACH_SPEED
            self.player_x += step
            self.partner_x -= step
            if abs(self.player_x - self.partner_x) < HOME_HUG_GAP:
                self._enter(HomePhase.HEARTS)
                self.hearts_timer = 0.0

        elif phase is HomePhase.HEARTS:
            # hearts_timer runs alongside self.timer, which resets per heart
            self.hearts_timer += dt
            if self.timer > HEART_SPAWN_MS:
                self._spawn_heart()
                self.timer = 0.0
            self._float_hearts(dt, rise=0.05, fade=0.001, grow=0.0005)
            if self.hearts_timer > HOME_HEARTS_MS:
                self._enter(HomePhase.SHOW_BUTTON)

        elif phase is HomePhase.SHOW_BUTTON:
            # Holds until the button is pressed.
            if self.timer > HEART_SPAWN_MS:
                self._spawn_heart()
                self.timer = 0.0
            self._float_hearts(dt, rise=0.02, fade=0.0005)


# ----------------------------- Tofu soup -----------------------------

class TofuSoup:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.phase = SoupPhase.FADE_IN
        self.fade_opacity = 0.0
        self.timer = 0.0
        self.soup_timer = 0.0
        self.steam: List[Particle] = []

    def _spawn_steam(self):
        for _ in range(STEAM_PER_SPAWN):
            self.steam.append(Particle(
                x=WINDOW_W / 2 + (self.rng.random() - 0.5) * 80,
                y=WINDOW_H / 2 + 100,
                scale=0.5 + self.rng.random() * 0.3,
                opacity=0.8,
            ))

    def update(self, dt: float) -> bool:
        self.timer += dt

        if self.phase is SoupPhase.FADE_IN:
            self.fade_opacity = min(1.0, self.fade_opacity + dt / 1000)
            if self.fade_opacity >= 1 and self.timer > HOME_FADE_MIN_MS:
                self.phase = SoupPhase.SHOW_SOUP
                self.timer = 0.0
                self.soup_timer = 0.0
            return False

        self.soup_timer += dt
        if self.timer > STEAM_SPAWN_MS:
            self._spawn_steam()
            self.timer = 0.0

        for puff in self.steam:
            puff.y -= dt * 0.06
            puff.x += (self.rng.random() - 0.5) * dt * 0.01
            puff.opacity -= dt * 0.0008
            puff.scale += dt * 0.001
        self.steam = [p for p in self.steam if p.opacity > 0]

        return self.soup_timer > SOUP_SHOW_MS


# ----------------------------- Bonus game -----------------------------

class BonusGame:
    """Dodge the rings the cat keeps shouting out for 30 seconds."""

    def __init__(self):
        self.time_left = float(BONUS_SECONDS)
        self.cat = (WINDOW_W / 2, WINDOW_H / 2)
        self.token = [WINDOW_W / 2, WINDOW_H / 2]
        self.rings: List[Ring] = []
        self.ring_timer = 0.0
        self.hits = 0

    def move(self, dx: int, dy: int) -> bool:
        step = TILE
        x, y = self.token
        nx, ny = x + dx * step, y + dy * step
        if dx < 0 and x <= step or dx > 0 and x >= WINDOW_W - step:
            return False
        if dy < 0 and y <= step or dy > 0 and y >= WINDOW_H - step:
            return False
        self.token = [nx, ny]
        return True

    def _struck(self, ring: Ring) -> bool:
        dist = math.hypot(self.token[0] - ring.x, self.token[1] - ring.y)
        return abs(dist - ring.r) < ring.w / 2

    def update(self, dt: float) -> Tuple[bool, int]:
        """Returns (finished, hits this frame)."""
        self.time_left -= dt / 1000

        self.ring_timer += dt
        if self.ring_timer > RING_SPAWN_MS:
            self.rings.append(Ring(*self.cat))
            self.ring_timer = 0.0

        hits = 0
        limit = max(WINDOW_W, WINDOW_H)
        for ring in self.rings:
            ring.r += dt * RING_GROWTH
            if not ring.spent and self._struck(ring):
                ring.spent = True
                self.token = [WINDOW_W / 2, WINDOW_H / 2]
                hits += 1
        self.rings = [r for r in self.rings if r.r <= limit]
        self.hits += hits

        return self.time_left <= 0, hits
