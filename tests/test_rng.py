from __future__ import annotations

import logging

import pytest

from pathtype.errors import InvalidSeedToken
from pathtype.util.rng import (
    ALPHABET,
    SeededRandom,
    b58dec,
    decode_token,
    derive,
    init_seed,
    new_token,
    noise_seed_for,
)


def test_short_token_decodes_to_single_char_words() -> None:
    # "abc123" -> "c123" -> four one-character chunks
    assert decode_token("abc123") == (ALPHABET.index("c"), 0, 1, 2)


def test_sfc32_first_draws_are_exact() -> None:
    rng = SeededRandom(11, 0, 1, 2)
    assert rng.next() == 13 / 4294967296
    assert rng.next() == 12 / 4294967296


def test_derive_is_pure() -> None:
    token = new_token()
    a = derive(token)
    b = derive(init_seed(token))
    assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]


def test_draws_stay_in_unit_interval() -> None:
    rng = derive(new_token())
    vals = [rng.next() for _ in range(2000)]
    assert all(0.0 <= v < 1.0 for v in vals)


def test_next_int_is_inclusive() -> None:
    rng = derive("oo" + "z" * 49)
    seen = {rng.next_int(3, 5) for _ in range(500)}
    assert seen == {3, 4, 5}


def test_coin_toss_edges() -> None:
    rng = derive(new_token())
    assert not any(rng.coin_toss(0) for _ in range(100))
    assert all(rng.coin_toss(100) for _ in range(100))


def test_b58dec_stays_32_bit() -> None:
    assert 0 <= b58dec("Z" * 12) < 2**32


@pytest.mark.parametrize("token", ["oo0OIl0OIl", "ab", "", "oo!!!!!!!!"])
def test_malformed_tokens_raise(token: str) -> None:
    with pytest.raises(InvalidSeedToken):
        decode_token(token)


def test_init_seed_falls_back_on_bad_token(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="pathtype.rng"):
        seed = init_seed("oo0OIl0OIl")
    assert seed.token != "oo0OIl0OIl"
    assert seed.token.startswith("oo") and len(seed.token) == 51
    assert "invalid seed token" in caplog.text


def test_new_token_shape() -> None:
    t = new_token()
    assert t.startswith("oo")
    assert len(t) == 51
    assert all(c in ALPHABET for c in t[2:])


def test_noise_seed_is_first_draw() -> None:
    seed = init_seed("abc123")
    assert noise_seed_for(seed) == int(13 / 4294967296 * 10000)
