import os, sys

# headless pygame for rendering and audio tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Ensure project root is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tests.helpers import FixedRandom, board_with_rows

__all__ = [
    "FixedRandom",
    "board_with_rows",
]
