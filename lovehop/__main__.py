"""
Love Journey - hop across roads and rivers collecting soup ingredients,
then find the way home.

Controls:
- Arrow keys / WASD: move
- Space / Enter: start, press the soup button
- R: restart      B: bonus round (on the ending screen)
- Esc: quit

Run:
    python -m lovehop [--config narrative.json] [--assets DIR]
"""

import argparse
import logging
import random

from lovehop.app import App
from lovehop.audio import MixerSound
from lovehop.game import Game
from lovehop.services import JsonConfigStore, NullSound, StaticConfigStore


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="lovehop", description="Love Journey hopper")
    p.add_argument("--config", help="narrative JSON (playerName, boyfriendName, reasons)")
    p.add_argument("--assets", default="assets", help="directory holding the sound files")
    p.add_argument("--seed", type=int, help="seed for a reproducible run")
    p.add_argument("--mute", action="store_true", help="no audio")
    p.add_argument("--debug", action="store_true", help="enable C/T ending shortcuts")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rng = random.Random(args.seed)
    sound = NullSound() if args.mute else MixerSound(args.assets, random.Random(args.seed))
    config = JsonConfigStore(args.config) if args.config else StaticConfigStore()

    App(Game(rng=rng, sound=sound, config=config, debug=args.debug)).run()


if __name__ == "__main__":
    main()
