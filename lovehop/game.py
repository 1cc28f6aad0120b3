"""Top-level game state: which scene is showing and what each frame does.

Input never touches the simulation directly. The front end pushes commands
with ``Game.push``; ``Game.update`` drains them once per frame and then
advances whichever scene is active.
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, Optional, Tuple

from lovehop.camera import Camera
from lovehop.collision import Difficulty, resolve
from lovehop.config import HOP_COOLDOWN_MS, MAX_DT_MS, TOAST_MS
from lovehop.goal import GoalZone, House, HouseEntrance
from lovehop.hazards import HazardSet, HazardSimulator, HazardSpawner, Log, Vehicle
from lovehop.ingredients import Ingredient, IngredientRegistry, IngredientSlot
from lovehop.lanes import classify
from lovehop.player import Player
from lovehop.scenes import BonusGame, HomeInterior, Scene, TofuSoup
from lovehop.services import ConfigStore, Narrative, NullSound, SoundController, StaticConfigStore

logger = logging.getLogger(__name__)


class Command(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    START = auto()
    RESTART = auto()
    ACTIVATE_BONUS = auto()
    RETURN_TO_TITLE = auto()
    ACTIVATE = auto()
    CLICK = auto()
    # Shortcuts for trying out the ending; only honoured with debug=True
    DEBUG_COLLECT_ALL = auto()
    DEBUG_TELEPORT = auto()


DIRECTIONS = {
    Command.UP: (0, -1),
    Command.DOWN: (0, 1),
    Command.LEFT: (-1, 0),
    Command.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Input:
    command: Command
    pos: Optional[Tuple[float, float]] = None


@dataclass
class Toast:
    message: str
    remaining: float = TOAST_MS


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything a renderer needs for one frame.

    The tuples are copies, but player, goal, house and the scene objects are
    the live ones. Read it during the frame it was taken; don't keep it.
    """
    scene: Scene
    running: bool
    alive: bool
    death_cause: Optional[str]
    player: Player
    camera_y: float
    vehicles: Tuple[Vehicle, ...]
    logs: Tuple[Log, ...]
    slots: Tuple[IngredientSlot, ...]
    checklist: Tuple[Tuple[Ingredient, bool], ...]
    goal: GoalZone
    house: House
    entrance: Optional[HouseEntrance]
    game_speed: float
    score: int
    best_score: int
    home: Optional[HomeInterior]
    soup: Optional[TofuSoup]
    bonus: Optional[BonusGame]
    ending: Optional[Narrative]
    toast: Optional[str]


class Game:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        sound: Optional[SoundController] = None,
        config: Optional[ConfigStore] = None,
        debug: bool = False,
    ):
        self.rng = rng or random.Random()
        self.sound = sound or NullSound()
        self.config = config or StaticConfigStore()
        self.debug = debug

        self.scene = Scene.TITLE
        self.running = False
        self.hop_cooldown = 0.0
        self.inputs: Deque[Input] = deque()

        self.player = Player()
        self.hazards = HazardSet()
        self.spawner = HazardSpawner(self.rng)
        self.simulator = HazardSimulator()
        self.camera = Camera()
        self.difficulty = Difficulty()
        self.goal = GoalZone()
        self.ingredients = IngredientRegistry(self.rng)
        self.death_cause: Optional[str] = None
        self.best_score = 0

        # Per-scene state, only set while that scene is showing
        self.home: Optional[HomeInterior] = None
        self.soup: Optional[TofuSoup] = None
        self.bonus: Optional[BonusGame] = None
        self.ending: Optional[Narrative] = None

        self.toast: Optional[Toast] = None

        self.ingredients.reset(self.lane_at)

    # ----------------------------- Queries -----------------------------

    def lane_at(self, row: int) -> str:
        return classify(row, self.goal)

    @property
    def score(self) -> int:
        return -self.camera.max_progress

    def snapshot(self) -> FrameSnapshot:
        return FrameSnapshot(
            scene=self.scene,
            running=self.running,
            alive=self.player.alive,
            death_cause=self.death_cause,
            player=self.player,
            camera_y=self.camera.y,
            vehicles=tuple(self.hazards.vehicles),
            logs=tuple(self.hazards.logs),
            slots=tuple(self.ingredients.slots),
            checklist=tuple(self.ingredients.checklist()),
            goal=self.goal,
            house=self.goal.house,
            entrance=self.goal.entrance,
            game_speed=self.difficulty.game_speed,
            score=self.score,
            best_score=self.best_score,
            home=self.home,
            soup=self.soup,
            bonus=self.bonus,
            ending=self.ending,
            toast=self.toast.message if self.toast else None,
        )

    # ----------------------------- Input -----------------------------

    def push(self, command: Command, pos: Optional[Tuple[float, float]] = None):
        self.inputs.append(Input(command, pos))

    def _drain_inputs(self):
        while self.inputs:
            self._handle(self.inputs.popleft())

    def _handle(self, inp: Input):
        handler = self._handlers().get(self.scene)
        if handler is None or not handler(inp):
            logger.debug("Ignored %s in %s", inp.command.name, self.scene.value)

    def _handlers(self):
        return {
            Scene.TITLE: self._handle_title,
            Scene.PLAY: self._handle_play,
            Scene.HOME_INTERIOR: self._handle_home,
            Scene.ENDING: self._handle_ending,
            Scene.BONUS: self._handle_bonus,
            Scene.BONUS_OVER: self._handle_bonus_over,
        }

    def _handle_title(self, inp: Input) -> bool:
        if inp.command in (Command.START, Command.ACTIVATE):
            self.start()
            return True
        return False

    def _handle_play(self, inp: Input) -> bool:
        cmd = inp.command
        if cmd is Command.RESTART:
            self.restart()
            return True
        if cmd is Command.RETURN_TO_TITLE:
            self.back_to_title()
            return True
        if not self.running:
            return False
        if cmd in DIRECTIONS:
            return self._hop(*DIRECTIONS[cmd])
        if self.debug and cmd is Command.DEBUG_COLLECT_ALL:
            self._debug_collect_all()
            return True
        if self.debug and cmd is Command.DEBUG_TELEPORT:
            self._debug_teleport()
            return True
        return False

    def _handle_home(self, inp: Input) -> bool:
        if self.home is None:
            return False
        if inp.command is Command.CLICK and inp.pos is not None:
            if self.home.button_hit(*inp.pos):
                self._start_tofu_soup()
                return True
        if inp.command is Command.ACTIVATE and self.home.waiting:
            self._start_tofu_soup()
            return True
        return False

    def _handle_ending(self, inp: Input) -> bool:
        if inp.command is Command.ACTIVATE_BONUS:
            self.start_bonus()
            return True
        if inp.command is Command.RESTART:
            self.restart()
            return True
        if inp.command is Command.RETURN_TO_TITLE:
            self.back_to_title()
            return True
        return False

    def _handle_bonus(self, inp: Input) -> bool:
        if self.bonus is None or inp.command not in DIRECTIONS:
            return False
        if self.hop_cooldown > 0:
            return False
        if self.bonus.move(*DIRECTIONS[inp.command]):
            self.hop_cooldown = HOP_COOLDOWN_MS
        return True

    def _handle_bonus_over(self, inp: Input) -> bool:
        if inp.command in (Command.RETURN_TO_TITLE, Command.ACTIVATE):
            self.back_to_title()
            return True
        return False

    # ----------------------------- Transitions -----------------------------

    def reset_world(self):
        """Wipe the run: player, hazards, ingredients, house, camera, difficulty."""
        self.player.reset()
        self.hazards.clear()
        self.spawner.reset()
        self.camera.reset()
        self.difficulty.reset()
        self.goal.reset()
        self.ingredients.reset(self.lane_at)
        self.hop_cooldown = 0.0
        self.death_cause = None
        self.home = self.soup = self.bonus = None
        self.ending = None

    def start(self):
        self._begin_play()

    def restart(self):
        self._begin_play()

    def _begin_play(self):
        if self.scene is not Scene.TITLE:
            self.sound.scene_exit()
        self.reset_world()
        self.scene = Scene.PLAY
        self.running = True
        self.sound.scene_enter(Scene.PLAY.value)
        logger.info("Run started")

    def back_to_title(self):
        self.scene = Scene.TITLE
        self.running = False
        self.home = self.soup = self.bonus = None
        self.ending = None
        self.sound.scene_exit()
        logger.info("Back to title")

    def start_bonus(self):
        self.ending = None
        self.scene = Scene.BONUS
        self.running = True
        self.bonus = BonusGame()
        logger.info("Bonus round started")

    def _game_over(self, cause: str):
        self.player.alive = False
        self.running = False
        self.death_cause = cause
        self.sound.scene_exit()
        self.sound.death(cause)
        logger.info("Died (%s) at row %d", cause, self.player.world_y)

    def _enter_house(self):
        self.scene = Scene.HOME_INTERIOR
        self.running = True
        self.home = HomeInterior(self.rng)
        self.sound.scene_exit()
        self.sound.door_open()
        self.sound.scene_enter(Scene.HOME_INTERIOR.value)
        logger.info("Reached the house at row %d", self.player.world_y)

    def _start_tofu_soup(self):
        self.scene = Scene.TOFU_SOUP
        self.running = True
        self.home = None
        self.soup = TofuSoup(self.rng)
        logger.info("Soup's on")

    def _win(self):
        self.scene = Scene.ENDING
        self.running = False
        self.soup = None
        self.ending = self.config.narrative()
        self.sound.scene_exit()
        logger.info("Ending reached")

    # ----------------------------- Play -----------------------------

    def _hop(self, dc: int, dr: int) -> bool:
        if self.hop_cooldown > 0:
            return False

        if self.player.hop(dc, dr):
            self.hop_cooldown = HOP_COOLDOWN_MS
            if dr < 0 and self.camera.record_progress(self.player.world_y):
                self.difficulty.on_progress(self.camera.max_progress)
                self.best_score = max(self.best_score, self.score)

        self._check_pickup()
        self._check_house()
        return True

    def _check_pickup(self):
        for slot in self.ingredients.pick_up(self.player.grid_x, self.player.world_y):
            self.sound.pickup()
            self._toast(f"Picked: {slot.label}")
            if self.ingredients.complete and self._spawn_goal():
                self._toast("All ingredients collected! The house awaits!")

    def _spawn_goal(self) -> bool:
        return self.goal.spawn(self.camera.y)

    def _check_house(self):
        if not self.ingredients.complete:
            return
        if self.goal.at_door(self.player.grid_x, self.player.world_y):
            self._enter_house()

    def _debug_collect_all(self):
        self.ingredients.collect_all()
        self._spawn_goal()
        self._toast("All ingredients collected! House spawning!")

    def _debug_teleport(self):
        self._debug_collect_all()
        house = self.goal.house
        self.player.world_y = house.world_y
        self.player.grid_x = house.grid_x + 2
        self.player.on_log = None
        self.camera.record_progress(self.player.world_y)
        self.camera.snap()
        self._toast("At the house door!")

    def _update_play(self):
        self.spawner.tick(self.hazards, self.camera.y, self.difficulty.game_speed, self.goal)

        cause = self.simulator.step(self.hazards, self.player)
        if cause:
            self._game_over(cause)
            return

        self.camera.update()
        self.ingredients.tick(self.player.world_y, self.lane_at)

        cause = resolve(self.player, self.hazards, self.goal)
        if cause:
            self._game_over(cause)

    # ----------------------------- Frame -----------------------------

    def _toast(self, message: str):
        self.toast = Toast(message)

    def update(self, dt: float):
        """Advance one frame. ``dt`` is in milliseconds."""
        dt = min(dt, MAX_DT_MS)

        if self.toast is not None:
            self.toast.remaining -= dt
            if self.toast.remaining <= 0:
                self.toast = None

        if self.hop_cooldown > 0:
            self.hop_cooldown = max(0.0, self.hop_cooldown - dt)

        self._drain_inputs()

        if not self.running:
            return

        if self.scene is Scene.PLAY:
            self._update_play()
        elif self.scene is Scene.HOME_INTERIOR:
            self.home.update(dt)
        elif self.scene is Scene.TOFU_SOUP:
            if self.soup.update(dt):
                self._win()
        elif self.scene is Scene.BONUS:
            finished, hits = self.bonus.update(dt)
            if hits:
                self._toast("MEOW!")
            if finished:
                self.scene = Scene.BONUS_OVER
                self.running = False
                self.bonus = None
                logger.info("Bonus round over")
