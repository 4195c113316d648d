#!/usr/bin/env python3

from __future__ import annotations as _annotations

from abc import ABC as _ABC, abstractmethod as _abstractmethod
from typing import Generic as _Generic, TypeVar as _TypeVar

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from collections.abc import Sequence


T = _TypeVar('T')


class Param(_ABC, _Generic[T]):
    """
    Transforms one hash function parameter to and from its raw, serialized
    value.
    """

    @_abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @_abstractmethod
    def default(self) -> T | None:
        """The value to use when the parameter is absent, `None` if it is required."""
        raise NotImplementedError

    @_abstractmethod
    def extract(self, raw: str) -> T | None:
        """Parse a serialized value, returning `None` if it is malformed."""
        raise NotImplementedError

    @_abstractmethod
    def serialize(self, value: T) -> str | None:
        """Render a value, returning `None` if it should be left out."""
        raise NotImplementedError

    def extract_from(self, raw_params: Sequence[tuple[str, str]]) -> T | None:
        from .params import RawParamSlice
        return RawParamSlice(raw_params).extract_single(self)
