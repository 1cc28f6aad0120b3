import pygame
import pytest

from lovehop.__main__ import parse_args
from lovehop.app import key_command
from lovehop.game import Command
from lovehop.scenes import Scene


@pytest.mark.parametrize("key,command", [
    (pygame.K_UP, Command.UP),
    (pygame.K_w, Command.UP),
    (pygame.K_s, Command.DOWN),
    (pygame.K_LEFT, Command.LEFT),
    (pygame.K_d, Command.RIGHT),
])
def test_movement_keys(key, command):
    assert key_command(key, Scene.PLAY) is command
    assert key_command(key, Scene.BONUS) is command
    assert key_command(key, Scene.TITLE) is None


def test_scene_specific_keys():
    assert key_command(pygame.K_SPACE, Scene.TITLE) is Command.START
    assert key_command(pygame.K_RETURN, Scene.HOME_INTERIOR) is Command.ACTIVATE
    assert key_command(pygame.K_r, Scene.PLAY) is Command.RESTART
    assert key_command(pygame.K_r, Scene.ENDING) is Command.RESTART
    assert key_command(pygame.K_b, Scene.ENDING) is Command.ACTIVATE_BONUS
    assert key_command(pygame.K_b, Scene.PLAY) is None
    assert key_command(pygame.K_t, Scene.BONUS_OVER) is Command.RETURN_TO_TITLE
    assert key_command(pygame.K_t, Scene.PLAY) is Command.DEBUG_TELEPORT
    assert key_command(pygame.K_c, Scene.PLAY) is Command.DEBUG_COLLECT_ALL
    assert key_command(pygame.K_c, Scene.ENDING) is None


def test_cli_defaults():
    args = parse_args([])
    assert args.assets == "assets"
    assert args.config is None
    assert not args.debug
    assert not args.mute
    assert args.log_level == "INFO"


def test_cli_flags():
    args = parse_args(["--config", "n.json", "--seed", "3", "--mute", "--debug", "--log-level", "DEBUG"])
    assert args.config == "n.json"
    assert args.seed == 3
    assert args.mute and args.debug
    assert args.log_level == "DEBUG"
