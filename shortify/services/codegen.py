"""Random short code generation."""

import random

from shortify.core.config import URL_SAFE_ALPHABET

DEFAULT_CODE_LENGTH = 6

# OS-backed source; draws are uniform and independent
_random = random.SystemRandom()


def generate_short_code(length: int = DEFAULT_CODE_LENGTH, alphabet: str = URL_SAFE_ALPHABET) -> str:
    """
    Generate a random short code of the given length.

    The code is not checked against existing rows. The store's unique
    constraint rejects a collision on insert.

    Args:
        length: Number of characters to draw
        alphabet: Characters to draw from

    Returns:
        str: A random short code
    """
    if length < 1:
        raise ValueError("Short code length must be positive")
    if not alphabet:
        alphabet = URL_SAFE_ALPHABET
    return "".join(_random.choice(alphabet) for _ in range(length))
