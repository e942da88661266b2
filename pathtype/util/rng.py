from __future__ import annotations

"""Seed tokens and the seeded generator.

A token is ``"oo"`` followed by 49 base58 characters. The part after the prefix
is cut into four equal chunks; each chunk decodes to one 32-bit word and the
four words seed an sfc32 generator. Same token, same stream.
"""

import logging
import math
import random
from dataclasses import dataclass

from pathtype.errors import InvalidSeedToken

_LOGGER = logging.getLogger("pathtype.rng")

ALPHABET = "123456789abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ"
TOKEN_PREFIX = "oo"
TOKEN_BODY_LEN = 49

_MASK = 0xFFFFFFFF
_INDEX = {c: i for i, c in enumerate(ALPHABET)}


def b58dec(chunk: str) -> int:
    v = 0
    for c in chunk:
        idx = _INDEX.get(c)
        if idx is None:
            raise InvalidSeedToken(f"invalid seed character: {c!r}")
        v = (v * len(ALPHABET) + idx) & _MASK
    return v


def new_token(source: random.Random | None = None) -> str:
    rnd = source or random.SystemRandom()
    return TOKEN_PREFIX + "".join(rnd.choice(ALPHABET) for _ in range(TOKEN_BODY_LEN))


def decode_token(token: str) -> tuple[int, int, int, int]:
    if not isinstance(token, str):
        raise InvalidSeedToken(f"seed token must be a string, got {type(token).__name__}")
    trunc = token[2:]
    size = len(trunc) // 4
    if size < 1:
        raise InvalidSeedToken(f"seed token too short: {token!r}")
    words = [b58dec(trunc[i * size : (i + 1) * size]) for i in range(4)]
    return words[0], words[1], words[2], words[3]


@dataclass(frozen=True)
class Seed:
    token: str
    words: tuple[int, int, int, int]

    @staticmethod
    def from_token(token: str) -> "Seed":
        return Seed(token=token, words=decode_token(token))


def init_seed(token: str | None = None) -> Seed:
    """Create a Seed, generating a fresh token when none (or a bad one) is given."""

    if token:
        try:
            return Seed.from_token(token)
        except InvalidSeedToken as e:
            _LOGGER.warning("invalid seed token %r (%s); using a fresh seed", token, e)
    return Seed.from_token(new_token())


class SeededRandom:
    """sfc32 over four 32-bit words."""

    def __init__(self, a: int, b: int, c: int, d: int) -> None:
        self._a = a & _MASK
        self._b = b & _MASK
        self._c = c & _MASK
        self._d = d & _MASK

    def next(self) -> float:
        a, b, c, d = self._a, self._b, self._c, self._d
        t = (a + b + d) & _MASK
        d = (d + 1) & _MASK
        a = b ^ (b >> 9)
        b = (c + (c << 3)) & _MASK
        c = ((c << 21) | (c >> 11)) & _MASK
        c = (c + t) & _MASK
        self._a, self._b, self._c, self._d = a, b, c, d
        return t / 4294967296.0

    def next_int(self, lo: int, hi: int) -> int:
        return int(math.floor(self.next() * (int(hi) - int(lo) + 1))) + int(lo)

    def coin_toss(self, percent: float) -> bool:
        return self.next() * 100 < float(percent)


def derive(seed: Seed | str) -> SeededRandom:
    words = seed.words if isinstance(seed, Seed) else decode_token(seed)
    return SeededRandom(*words)


def noise_seed_for(seed: Seed) -> int:
    """First draw of the seed's stream, scaled to the noise seed range."""

    return int(math.floor(derive(seed).next() * 10000))
