"""Collaborators the simulation talks to but never looks inside.

The core only calls these; nothing they return (or fail to do) changes the
simulation. The null versions here are what tests and headless runs use.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

logger = logging.getLogger(__name__)

MAX_REASONS = 10

DEFAULT_REASONS = [
    "You make me laugh every day",
    "You're always there when I need you",
    "You make the best soup",
    "You give the warmest hugs",
    "You listen to me patiently",
    "You support my dreams",
    "You make ordinary moments special",
    "You have the kindest heart",
    "You make me want to be better",
    "You are my home",
]


# ----------------------------- Sound -----------------------------

class SoundController:
    """Fire-and-forget sound events. The base class is silent."""

    def pickup(self):
        pass

    def death(self, cause: str):
        pass

    def door_open(self):
        pass

    def scene_enter(self, scene: str):
        pass

    def scene_exit(self):
        pass

    def tick(self, dt: float):
        """Advance any timers the controller keeps for itself."""


class NullSound(SoundController):
    pass


# ----------------------------- Rendering -----------------------------

class Renderer:
    def draw(self, snapshot):
        raise NotImplementedError


class NullRenderer(Renderer):
    def draw(self, snapshot):
        pass


# ----------------------------- Narrative text -----------------------------

@dataclass(frozen=True)
class Narrative:
    player_name: str = "You"
    partner_name: str = "Your Love"
    reasons: Tuple[str, ...] = tuple(DEFAULT_REASONS)


def normalise_reasons(reasons: List[str]) -> Tuple[str, ...]:
    """Keep the first ten non-blank lines, padding with placeholders."""
    kept = [r.strip() for r in reasons if isinstance(r, str) and r.strip()][:MAX_REASONS]
    while len(kept) < MAX_REASONS:
        kept.append(f"Reason {len(kept) + 1}")
    return tuple(kept)


class ConfigStore:
    def narrative(self) -> Narrative:
        raise NotImplementedError


@dataclass
class StaticConfigStore(ConfigStore):
    value: Narrative = field(default_factory=Narrative)

    def narrative(self) -> Narrative:
        return self.value


class JsonConfigStore(ConfigStore):
    """Reads names and reasons from a JSON file.

    Accepts the keys ``playerName``, ``boyfriendName`` (or ``partnerName``)
    and ``reasons``. Anything missing or malformed falls back to the defaults.
    """

    def __init__(self, path: str):
        self.path = path
        self._cached = None

    def _load(self) -> Narrative:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info("No narrative config at %s, using defaults", self.path)
            return Narrative()
        except (OSError, ValueError) as e:
            logger.warning("Could not read narrative config %s: %s", self.path, e)
            return Narrative()

        if not isinstance(data, dict):
            logger.warning("Narrative config %s is not an object, using defaults", self.path)
            return Narrative()

        default = Narrative()
        reasons = data.get("reasons")
        return Narrative(
            player_name=str(data.get("playerName") or default.player_name),
            partner_name=str(data.get("partnerName") or data.get("boyfriendName") or default.partner_name),
            reasons=normalise_reasons(reasons) if isinstance(reasons, list) else default.reasons,
        )

    def narrative(self) -> Narrative:
        if self._cached is None:
            self._cached = self._load()
        return self._cached
