"""pygame front end: window, event pump, frame clock."""

import logging
from typing import Optional

import pygame

from lovehop.config import FPS, WINDOW_H, WINDOW_W
from lovehop.game import Command, Game
from lovehop.render import PygameRenderer
from lovehop.scenes import Scene
from lovehop.services import Renderer

logger = logging.getLogger(__name__)

MOVE_KEYS = {
    pygame.K_UP: Command.UP,
    pygame.K_w: Command.UP,
    pygame.K_DOWN: Command.DOWN,
    pygame.K_s: Command.DOWN,
    pygame.K_LEFT: Command.LEFT,
    pygame.K_a: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT,
    pygame.K_d: Command.RIGHT,
}

CONFIRM_KEYS = (pygame.K_SPACE, pygame.K_RETURN)


def key_command(key: int, scene: Scene) -> Optional[Command]:
    """Translate a key press into a command for the current scene."""
    if key in MOVE_KEYS and scene in (Scene.PLAY, Scene.BONUS):
        return MOVE_KEYS[key]

    if scene is Scene.TITLE and key in CONFIRM_KEYS:
        return Command.START
    if scene is Scene.HOME_INTERIOR and key in CONFIRM_KEYS:
        return Command.ACTIVATE
    if scene is Scene.BONUS_OVER and key in CONFIRM_KEYS + (pygame.K_t,):
        return Command.RETURN_TO_TITLE

    if key == pygame.K_r and scene in (Scene.PLAY, Scene.ENDING):
        return Command.RESTART
    if key == pygame.K_b and scene is Scene.ENDING:
        return Command.ACTIVATE_BONUS

    if scene is Scene.PLAY:
        if key == pygame.K_c:
            return Command.DEBUG_COLLECT_ALL
        if key == pygame.K_t:
            return Command.DEBUG_TELEPORT
    return None


class App:
    def __init__(self, game: Game, renderer: Optional[Renderer] = None):
        pygame.init()
        pygame.display.set_caption("Love Journey")
        self.screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
        self.clock = pygame.time.Clock()

        self.game = game
        self.renderer = renderer or PygameRenderer(self.screen)
        self.running = False

    def run(self):
        self.running = True
        while self.running:
            dt = self.clock.tick(FPS)

            self._handle_events()
            if not self.running:
                break
            self.game.sound.tick(dt)
            self.game.update(dt)
            self.renderer.draw(self.game.snapshot())

        pygame.quit()

    def stop(self):
        self.running = False

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.stop()
                    continue
                command = key_command(event.key, self.game.scene)
                if command is not None:
                    self.game.push(command)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.game.push(Command.CLICK, event.pos)
