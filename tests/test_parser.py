#!/usr/bin/env python3

from __future__ import annotations as __annotations

import logging

import pytest

from phc.parser import PHCParseError, parse_phc
from phc.raw import Both, Neither, RawPHC, SaltOnly
from phc.salt import Ascii

from typing import TYPE_CHECKING  # isort: skip

if TYPE_CHECKING:
    from numpy.random import Generator as RNG


NAME_CHARS = 'abcdefghijklmnopqrstuvwxyz0123456789-'
VALUE_CHARS = NAME_CHARS + 'ABCDEFGHIJKLMNOPQRSTUVWXYZ/+.'

PARAMS = ['', '$i=10000', '$i=10000,mem=heap']
SALT_AND_HASH = ['', '$abcdefg', '$abcdefg$aGVsbG8']


def test_id_only() -> None:

    raw = parse_phc('$abc-123')
    assert raw.id == 'abc-123'
    assert raw.params == ()
    assert raw.salt_and_hash == Neither()


def test_id_and_param() -> None:

    raw = parse_phc('$abc-123$i=10000')
    assert raw.params == (('i', '10000'),)
    assert raw.salt_and_hash == Neither()


def test_params_and_salt() -> None:

    raw = parse_phc('$abc-123$i=10000,mem=heap$abcdefg')
    assert raw.params == (('i', '10000'), ('mem', 'heap'))
    assert raw.salt_and_hash == SaltOnly(Ascii('abcdefg'))
    assert raw.hash is None


def test_salt_and_hash_without_params() -> None:

    raw = parse_phc('$abc-123$abcdefg$aGVsbG8')
    assert raw.params == ()
    assert raw.salt_and_hash == Both(Ascii('abcdefg'), b'hello')


def test_parse_classmethod() -> None:

    assert RawPHC.parse('$abc-123$i=10000') == parse_phc('$abc-123$i=10000')


@pytest.mark.parametrize('params', PARAMS)
@pytest.mark.parametrize('salt_and_hash', SALT_AND_HASH)
def test_round_trip(params: str, salt_and_hash: str) -> None:

    text = '$abc-123' + params + salt_and_hash
    assert parse_phc(text).serialize() == text


def test_duplicate_params_are_kept() -> None:

    raw = parse_phc('$abc$i=1,i=2')
    assert raw.params == (('i', '1'), ('i', '2'))


def test_salt_with_value_only_characters() -> None:

    raw = parse_phc('$abc$Salt.With-Dots$aGVsbG8')
    assert raw.salt == Ascii('Salt.With-Dots')
    assert str(raw) == '$abc$Salt.With-Dots$aGVsbG8'


@pytest.mark.parametrize('text', [
    '',
    'abc',
    '$',
    '$abc_123',
    '$ABC',
    '$abc$',
    '$abc$i=',
    '$abc$i=1,',
    '$abc$i=1,j',
    '$abc$i=1$',
    '$abc$salt$',
    '$abc$salt$hash.with.dots',
    '$abc$salt$aGVsbG9',
    '$abc$salt$aGVsbG8=',
    '$abc$salt$a',
    '$abc$salt$aGVsbG8$extra',
    '$abc$$salt',
    '$abc$i=1 ',
])
def test_malformed_input_fails(text: str) -> None:

    with pytest.raises(PHCParseError):
        parse_phc(text)


def test_parse_error_is_a_value_error_with_position() -> None:

    with pytest.raises(ValueError) as exc_info:
        parse_phc('$abc_123')
    assert exc_info.value.position == 4
    assert exc_info.value.text == '$abc_123'


def test_rejected_input_is_not_logged_or_echoed(caplog: pytest.LogCaptureFixture) -> None:

    text = '$abc$secretsalt$aGVsbG8='
    with caplog.at_level(logging.DEBUG), pytest.raises(PHCParseError) as exc_info:
        parse_phc(text)
    assert caplog.records == []
    assert 'secretsalt' not in str(exc_info.value)
    assert str(exc_info.value) == 'invalid PHC string at position 23'


def _random_token(rng: RNG, chars: str, max_len: int = 12) -> str:

    return ''.join(rng.choice(list(chars), size=int(rng.integers(1, max_len + 1))))


def test_generated_round_trip(deterministic_rng: RNG) -> None:

    rng = deterministic_rng
    for _ in range(200):
        params = [
            (_random_token(rng, NAME_CHARS), _random_token(rng, VALUE_CHARS))
            for _ in range(int(rng.integers(0, 4)))
        ]
        match int(rng.integers(0, 3)):
            case 0:
                salt, hash = None, None
            case 1:
                salt, hash = _random_token(rng, VALUE_CHARS), None
            case _:
                salt, hash = _random_token(rng, VALUE_CHARS), rng.bytes(int(rng.integers(1, 33)))

        raw = RawPHC.from_parts(_random_token(rng, NAME_CHARS), params, salt, hash)
        text = raw.serialize()
        assert parse_phc(text) == raw
        assert parse_phc(text).serialize() == text


if __name__ == '__main__':
    pytest.main()
