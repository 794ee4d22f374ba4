"""Input adapter: pygame key events -> Commands"""
from typing import Dict, Optional

import pygame

from blockfall_loop import Command

KEYMAP: Dict[int, Command] = {
    pygame.K_RETURN: Command.START_GAME,
    pygame.K_KP_ENTER: Command.START_GAME,
    pygame.K_ESCAPE: Command.STOP_GAME,
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_r: Command.RESTART,
}


def decode(event, keymap: Dict[int, Command] = None) -> Optional[Command]:
    """Return the command for a KEYDOWN event, or None for anything else."""
    if event.type != pygame.KEYDOWN:
        return None
    return (keymap or KEYMAP).get(event.key)

