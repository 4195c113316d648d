#!/usr/bin/env python3

"""
Recursive descent parser for PHC strings.

    phc           := '$' id params? salt_and_hash?
    id            := name
    params        := '$' name '=' value (',' name '=' value)*
    salt_and_hash := '$' value ('$' base64)?

Every rule takes the text and a start offset and returns the parsed value
along with the offset after it, or `None` if the rule does not match there.
"""

from __future__ import annotations as _annotations

import re as _re

from .raw import NAME_RE as _NAME_RE, VALUE_RE as _VALUE_RE, RawPHC, salt_and_hash_from_option
from .salt import b64decode_unpadded as _b64decode_unpadded

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .raw import SaltAndHash


_BASE64_RE = _re.compile(r'[a-zA-Z0-9/+]+')


class PHCParseError(ValueError):

    text: str
    position: int

    def __init__(self, text: str, position: int) -> None:
        super().__init__(f"invalid PHC string at position {position}")
        self.text = text
        self.position = position


def _char(c: str, text: str, pos: int) -> int | None:
    if text.startswith(c, pos):
        return pos + len(c)
    return None


def _token(pattern: _re.Pattern[str], text: str, pos: int) -> tuple[str, int] | None:
    m = pattern.match(text, pos)
    if m is None:
        return None
    return m.group(), m.end()


def _id(text: str, pos: int) -> tuple[str, int] | None:
    pos = _char('$', text, pos)
    if pos is None:
        return None
    return _token(_NAME_RE, text, pos)


def _param(text: str, pos: int) -> tuple[tuple[str, str], int] | None:
    if (r := _token(_NAME_RE, text, pos)) is None:
        return None
    name, pos = r
    if (pos := _char('=', text, pos)) is None:
        return None
    if (r := _token(_VALUE_RE, text, pos)) is None:
        return None
    value, pos = r
    return (name, value), pos


def _params(text: str, pos: int) -> tuple[list[tuple[str, str]], int]:
    start = pos
    if (pos := _char('$', text, pos)) is None or (r := _param(text, pos)) is None:
        return [], start

    pair, pos = r
    params = [pair]
    while (after_comma := _char(',', text, pos)) is not None:
        if (r := _param(text, after_comma)) is None:
            # leave the separator unconsumed
            break
        pair, pos = r
        params.append(pair)

    return params, pos


def _hash(text: str, pos: int) -> tuple[bytes, int] | None:
    if (after_dollar := _char('$', text, pos)) is None:
        return None
    if (r := _token(_BASE64_RE, text, after_dollar)) is None:
        return None
    encoded, end = r
    if (data := _b64decode_unpadded(encoded)) is None:
        return None
    return data, end


def _salt_and_hash(text: str, pos: int) -> tuple[SaltAndHash, int]:
    if (after_dollar := _char('$', text, pos)) is None or (r := _token(_VALUE_RE, text, after_dollar)) is None:
        return salt_and_hash_from_option(None), pos

    salt, pos = r
    if (r := _hash(text, pos)) is None:
        return salt_and_hash_from_option((salt, None)), pos

    hash, pos = r
    return salt_and_hash_from_option((salt, hash)), pos


def parse_phc(text: str) -> RawPHC:
    """
    Parse a PHC string into a `RawPHC`.

    Raises `PHCParseError` unless the whole of `text` matches the grammar.
    """

    if (r := _id(text, 0)) is None:
        raise PHCParseError(text, 0)
    id, pos = r

    params, pos = _params(text, pos)
    salt_and_hash, pos = _salt_and_hash(text, pos)

    if pos != len(text):
        raise PHCParseError(text, pos)

    return RawPHC(id, tuple(params), salt_and_hash)
