"""Frame-gated key polling and on-screen buttons"""
from typing import Dict, List, Sequence, Tuple
import pygame
from fallblock_config import CONFIG

# polled every MOVE_KEY_CHECK_FRAME frames
MOVE_KEYS: List[Tuple[int, str]] = [
    (pygame.K_LEFT, "move_left"),
    (pygame.K_RIGHT, "move_right"),
    (pygame.K_UP, "fall_block"),
    (pygame.K_DOWN, "move_down"),
]
# polled every ROTATION_KEY_CHECK_FRAME frames
OPERATION_KEYS: List[Tuple[int, str]] = [
    (pygame.K_x, "rotate_right"),
    (pygame.K_z, "rotate_left"),
    (pygame.K_r, "reset"),
    (pygame.K_a, "stock"),
]
# edge-triggered on KEYDOWN, not polled
EVENT_KEYS: Dict[int, str] = {
    pygame.K_F1: "toggle_debug",
}

BUTTONS: List[Tuple[str, str]] = [
    ("left_button", "move_left"),
    ("right_button", "move_right"),
    ("down_button", "move_down"),
    ("rotate_left_button", "rotate_left"),
    ("rotate_right_button", "rotate_right"),
]


class KeyPoller:
    """Turns held keys into commands at a fixed frame cadence.

    ``keys`` is anything indexable by a pygame key constant, such as the
    result of ``pygame.key.get_pressed()``.
    """
    def __init__(self, move_every=None, operation_every=None):
        self.move_every = move_every or CONFIG["MOVE_KEY_CHECK_FRAME"]
        self.operation_every = operation_every or CONFIG["ROTATION_KEY_CHECK_FRAME"]

    def poll(self, frame: int, keys) -> List[str]:
        commands = []
        if frame % self.move_every == 0:
            commands.extend(cmd for key, cmd in MOVE_KEYS if keys[key])
        if frame % self.operation_every == 0:
            commands.extend(cmd for key, cmd in OPERATION_KEYS if keys[key])
        return commands


def button_at(buttons: Sequence[Tuple[str, str, pygame.Rect]], pos) -> str:
    """Command of the button under ``pos``, or '' when none is hit."""
    for _name, cmd, rect in buttons:
        if rect.collidepoint(pos):
            return cmd
    return ""
