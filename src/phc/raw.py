#!/usr/bin/env python3

"""
Raw, unassociated PHC string data.

The structures here only describe the syntax of a PHC string. They are used
to move data between the serialized string form and a representation that
a particular hash function knows how to work with.
"""

from __future__ import annotations as _annotations

import re as _re

from abc import ABC as _ABC
from dataclasses import dataclass as _dataclass

from .salt import Salt, b64encode_unpadded as _b64encode_unpadded

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any
    from .params import ParamSet


NAME_RE = _re.compile(r'[a-z0-9-]+')
VALUE_RE = _re.compile(r'[a-zA-Z0-9/+.-]+')


class SaltAndHash(_ABC):
    """
    Salt and hash information stored in a PHC string.

    One of `Neither`, `SaltOnly` or `Both`. There is no variant for a hash
    without a salt. Use `salt_and_hash_from_option` to build one.
    """

    salt: Salt | None
    hash: bytes | None


@_dataclass(frozen=True, slots=True)
class Neither(SaltAndHash):

    @property
    def salt(self) -> None:
        return None

    @property
    def hash(self) -> None:
        return None


@_dataclass(frozen=True, slots=True)
class SaltOnly(SaltAndHash):

    salt: Salt

    def __post_init__(self) -> None:
        if not isinstance(self.salt, Salt):
            raise TypeError(f"salt must be a Salt, not {type(self.salt).__name__!r}")

    @property
    def hash(self) -> None:
        return None


@_dataclass(frozen=True, slots=True)
class Both(SaltAndHash):

    salt: Salt
    hash: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.salt, Salt):
            raise TypeError(f"salt must be a Salt, not {type(self.salt).__name__!r}")
        if not isinstance(self.hash, bytes):
            raise TypeError(f"hash must be bytes, not {type(self.hash).__name__!r}")
        if not self.hash:
            raise ValueError("hash must not be empty")


NEITHER = Neither()


def salt_and_hash_from_option(
    salt_and_hash: tuple[Salt | str | bytes | None, bytes | None] | None,
) -> SaltAndHash:
    """
    Create a `SaltAndHash` from an optional pair of salt and optional hash.

    A hash can only be given together with a salt.
    """

    match salt_and_hash:
        case None:
            return NEITHER
        case (None, None):
            raise ValueError("salt and hash pair without a salt")
        case (None, _):
            raise ValueError("a hash cannot be present without a salt")
        case (salt, None):
            return SaltOnly(Salt.of(salt))
        case (salt, bytes() | bytearray() | memoryview() as hash):
            return Both(Salt.of(salt), bytes(hash))
        case (_, hash):
            raise TypeError(f"hash must be bytes, not {type(hash).__name__!r}")
        case _:
            raise TypeError(f"expected None or a (salt, hash) pair, got {salt_and_hash!r}")


@_dataclass(frozen=True, slots=True)
class RawPHC:
    """A parsed PHC string that has not been associated with a hash function."""

    id: str
    params: tuple[tuple[str, str], ...] = ()
    salt_and_hash: SaltAndHash = NEITHER

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not NAME_RE.fullmatch(self.id):
            raise ValueError(f"invalid id: {self.id!r}")

        params: list[tuple[str, str]] = []
        for pair in self.params:
            match pair:
                case (str(name), str(value)):
                    if not NAME_RE.fullmatch(name):
                        raise ValueError(f"invalid parameter name: {name!r}")
                    if not VALUE_RE.fullmatch(value):
                        raise ValueError(f"invalid value for parameter {name!r}: {value!r}")
                    params.append((name, value))
                case _:
                    raise ValueError(f"parameters must be (name, value) string pairs, got {pair!r}")
        object.__setattr__(self, 'params', tuple(params))

        if not isinstance(self.salt_and_hash, SaltAndHash):
            raise TypeError(
                f"salt_and_hash must be a SaltAndHash, not {type(self.salt_and_hash).__name__!r}"
            )

    @classmethod
    def from_parts(
        cls,
        id: str,
        params: Iterable[tuple[str, str]] = (),
        salt: Salt | str | bytes | None = None,
        hash: bytes | None = None,
    ) -> RawPHC:
        pair = None if salt is None and hash is None else (salt, hash)
        return cls(id, tuple(params), salt_and_hash_from_option(pair))

    @classmethod
    def parse(cls, text: str) -> RawPHC:
        from .parser import parse_phc
        return parse_phc(text)

    @property
    def salt(self) -> Salt | None:
        return self.salt_and_hash.salt

    @property
    def hash(self) -> bytes | None:
        return self.salt_and_hash.hash

    def extract(self, param_set: ParamSet) -> tuple[Any, ...] | None:
        return param_set.extract(self.params)

    def serialize(self) -> str:
        parts = ['$', self.id]

        if self.params:
            parts.append('$')
            parts.append(','.join(f'{name}={value}' for name, value in self.params))

        match self.salt_and_hash:
            case Neither():
                pass
            case SaltOnly(salt=salt):
                parts.append(f'${salt}')
            case Both(salt=salt, hash=hash):
                parts.append(f'${salt}${_b64encode_unpadded(hash)}')

        return ''.join(parts)

    def __str__(self) -> str:
        return self.serialize()
