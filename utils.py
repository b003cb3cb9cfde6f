# utils.py

import random
import re
from typing import List, Optional

from errors import InvalidFrameCount, InvalidReference

HIT_COLOR = "#4cc9f0"
FAULT_COLOR = "#f72585"
EMPTY_COLOR = "lightgray"

# Plain ASCII integers only: no "+5", "1_000" or non-ASCII digits
_INT_TOKEN = re.compile(r"-?[0-9]+")


def get_color(fault):
    """Return a color for a hit/fault cell."""
    return FAULT_COLOR if fault else HIT_COLOR


def _parse_int(token: str) -> Optional[int]:
    if _INT_TOKEN.fullmatch(token) is None:
        return None
    return int(token)


def parse_reference_string(text: str) -> List[int]:
    """
    Parse a comma separated page reference string such as "7, 0, 1, 2".

    Blank entries are skipped; anything else that is not an integer raises
    InvalidReference with its position among the non-blank entries.
    """
    tokens = [t.strip() for t in text.split(',') if t.strip() != '']
    pages = []
    for i, token in enumerate(tokens):
        page = _parse_int(token)
        if page is None:
            raise InvalidReference(i, token)
        pages.append(page)
    return pages


def parse_frame_count(value, max_frames: Optional[int] = None) -> int:
    """Parse a frame count from an int or numeric string."""
    if isinstance(value, bool):
        raise InvalidFrameCount(value)
    count = value if isinstance(value, int) else _parse_int(str(value).strip())
    if count is None or count < 1 or (max_frames is not None and count > max_frames):
        raise InvalidFrameCount(value)
    return count


def parse_seed(text: str) -> int:
    """
    Parse the random seed field.

    A blank field draws a fresh seed, so every run made from one click
    (the main run and the policy comparison) shares the same generator state.
    """
    text = text.strip()
    if text == '':
        return random.randrange(2 ** 32)
    seed = _parse_int(text)
    if seed is None:
        raise ValueError(f"Random seed must be an integer, got {text!r}")
    return seed
