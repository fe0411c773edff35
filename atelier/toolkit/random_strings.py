"""Random strings for the file names and other opaque identifiers.

The strings are NOT cryptographically secure: the default source is seeded from the wall clock on every call.
Use `secrets` for anything that has to be unguessable.
"""

import random
import string
import time

RANDOM_STRING_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


def generate_random_string(length: int, rng: random.Random | None = None) -> str:
    """Generate a string of exactly `length` alphanumeric characters.

    Args:
        length: Length of the string, non-negative
        rng: Random source to draw from. A new time-seeded one is used if not provided

    Returns:
        str: The random string

    Raises:
        ValueError: If the length is negative
    """
    if length < 0:
        raise ValueError(f"The length should be non-negative, got {length}.")

    if rng is None:
        rng = random.Random(time.time_ns())

    return "".join(rng.choice(RANDOM_STRING_ALPHABET) for _ in range(length))


__all__ = ["RANDOM_STRING_ALPHABET", "generate_random_string"]
