"""
Input intents and the keyboard mapping hosts use to produce them.
"""

from enum import Enum
from typing import Dict, Optional


class Intent(Enum):
    """Discrete player actions consumed by the engine."""
    SHIFT_LEFT = 'left'
    SHIFT_RIGHT = 'right'
    SOFT_DROP_STEP = 'soft_drop'
    ROTATE = 'rotate'
    QUIT = 'quit'


# Tk keysyms, compared case-insensitively
KEY_BINDINGS: Dict[str, Intent] = {
    'left': Intent.SHIFT_LEFT,
    'a': Intent.SHIFT_LEFT,
    'right': Intent.SHIFT_RIGHT,
    'd': Intent.SHIFT_RIGHT,
    'down': Intent.SOFT_DROP_STEP,
    's': Intent.SOFT_DROP_STEP,
    'up': Intent.ROTATE,
    'w': Intent.ROTATE,
    'escape': Intent.QUIT,
    'q': Intent.QUIT,
}


def translate_key(keysym: str) -> Optional[Intent]:
    """Map a raw key name to an intent, or None for unbound keys."""
    return KEY_BINDINGS.get(keysym.lower())
