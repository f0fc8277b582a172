"""Random password generation from selectable character pools."""
import secrets
import string

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()-_=+<>?"

_random = secrets.SystemRandom()


def generate_password(
    length: int,
    *,
    upper: bool = True,
    lower: bool = True,
    digits: bool = True,
    symbols: bool = True,
) -> str:
    """Return a random password drawn from the enabled pools.

    The result holds at least one character from every enabled pool; the
    remaining positions are drawn from their union and then shuffled.

    Raises:
        ValueError: If no pool is enabled or ``length`` is shorter than
            the number of enabled pools.
    """
    pools = [
        pool for pool, enabled in (
            (UPPERCASE, upper),
            (LOWERCASE, lower),
            (DIGITS, digits),
            (SYMBOLS, symbols),
        ) if enabled
    ]
    if not pools:
        raise ValueError("Select at least one character type")
    if length < len(pools):
        raise ValueError(
            f"Length {length} is too short for {len(pools)} character type(s)"
        )
    alphabet = "".join(pools)
    chars = [_random.choice(pool) for pool in pools]
    chars.extend(_random.choice(alphabet) for _ in range(length - len(chars)))
    _random.shuffle(chars)
    return "".join(chars)
