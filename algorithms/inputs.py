"""
inputs.py — Input helpers
==========================
Random arrays for the sort visualisers and the parser for the
"custom array" text box.  Algorithms assume their input already passed
through here.
"""

import random
from typing import List, Optional

import config


def generate_random_array(size: int, seed: Optional[int] = None) -> List[int]:
    """`size` integers drawn uniformly from [MIN_VALUE, MAX_VALUE]."""
    rng = random.Random(seed)
    return [rng.randint(config.MIN_VALUE, config.MAX_VALUE) for _ in range(size)]


def parse_custom_array(text: str) -> List[int]:
    """
    Parse "8, 3, 10, 1, 6" into integers.

    Entries that are not integers or fall outside [MIN_VALUE, MAX_VALUE]
    are dropped.  Raises ValueError when nothing usable is left.
    """
    values: List[int] = []
    for token in text.split(","):
        token = token.strip()
        try:
            value = int(token)
        except ValueError:
            continue
        if config.MIN_VALUE <= value <= config.MAX_VALUE:
            values.append(value)

    if not values:
        raise ValueError(
            f"Enter a comma-separated list of numbers between {config.MIN_VALUE} and {config.MAX_VALUE}."
        )
    return values
