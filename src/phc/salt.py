#!/usr/bin/env python3

from __future__ import annotations as _annotations

import binascii as _binascii
import re as _re

from abc import ABC as _ABC, abstractmethod as _abstractmethod
from base64 import b64decode as _b64decode, b64encode as _b64encode
from dataclasses import dataclass as _dataclass

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Self


SALT_CHARS_RE = _re.compile(r'[a-zA-Z0-9/+.-]+')


def b64encode_unpadded(data: bytes) -> str:
    return _b64encode(data).decode('ascii').rstrip('=')


def b64decode_unpadded(text: str) -> bytes | None:
    """
    Decode standard-alphabet base64 without padding.

    Only the canonical encoding is accepted: padding characters, a length
    of ``1 (mod 4)`` and non-zero trailing bits all yield ``None``, so that
    decoding followed by `b64encode_unpadded` gives back `text` unchanged.
    """

    if '=' in text or len(text) % 4 == 1:
        return None

    try:
        data = _b64decode(text + '=' * (-len(text) % 4), validate=True)
    except _binascii.Error:
        return None

    if b64encode_unpadded(data) != text:
        return None

    return data


class Salt(_ABC):

    @classmethod
    def of(cls, value: Salt | str | bytes | bytearray | memoryview) -> Salt:
        match value:
            case Salt():
                return value
            case str():
                return Ascii(value)
            case bytes() | bytearray() | memoryview():
                return Binary(bytes(value))
            case _:
                raise TypeError(f"cannot make a salt from {type(value).__name__!r}")

    @_abstractmethod
    def __str__(self) -> str:
        raise NotImplementedError

    @_abstractmethod
    def as_binary(self) -> Salt:
        raise NotImplementedError


@_dataclass(frozen=True, slots=True)
class Ascii(Salt):
    """A salt given literally, using the characters ``[a-zA-Z0-9/+.-]``."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"ascii salt must be str, not {type(self.text).__name__!r}")
        if not SALT_CHARS_RE.fullmatch(self.text):
            raise ValueError(f"invalid ascii salt: {self.text!r}")

    def __str__(self) -> str:
        return self.text

    def as_binary(self) -> Salt:
        """
        Reinterpret the text as unpadded base64.

        If the text is not valid base64 the salt is returned unchanged.
        """

        data = b64decode_unpadded(self.text)
        if data is None:
            return self
        return Binary(data)


@_dataclass(frozen=True, slots=True)
class Binary(Salt):

    data: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytes):
            raise TypeError(f"binary salt must be bytes, not {type(self.data).__name__!r}")
        if not self.data:
            raise ValueError("binary salt must not be empty")

    def __str__(self) -> str:
        return b64encode_unpadded(self.data)

    def as_binary(self) -> Self:
        return self
