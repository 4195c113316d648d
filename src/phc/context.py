#!/usr/bin/env python3

from __future__ import annotations as _annotations

from typing import NamedTuple as _NamedTuple

from .parser import parse_phc
from .raw import RawPHC

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from typing import Any
    from .params import ParamSet
    from .salt import Salt


class PHC(_NamedTuple):
    id: str
    params: tuple[Any, ...]
    salt: Salt | None
    hash: bytes | None


class PHCContext:
    """
    Binds hash function ids to the parameter sets they are declared with.
    """

    _schemes: dict[str, ParamSet]
    _default: str | None

    def __init__(
        self,
        schemes: Mapping[str, ParamSet],
        default: str | None = None,
    ) -> None:
        self._schemes = {}
        for id, params in schemes.items():
            try:
                RawPHC(id)
            except ValueError:
                raise ValueError(f"invalid scheme id {id!r}") from None
            self._schemes[id] = params

        if default is not None and default not in self._schemes:
            raise ValueError(f"unknown default scheme: {default!r}")

        self._default = default
        if self._default is None and self._schemes:
            self._default = next(iter(self._schemes))

    def schemes(self) -> tuple[str, ...]:
        return tuple(self._schemes.keys())

    def default_scheme(self) -> str | None:
        return self._default

    def param_set(self, scheme: str | None = None) -> ParamSet:
        if scheme is None:
            if self._default is None:
                raise ValueError("no default scheme set")
            scheme = self._default

        try:
            return self._schemes[scheme]
        except KeyError:
            raise ValueError(f"unknown scheme: {scheme!r}") from None

    def identify(self, text: str | RawPHC) -> str | None:
        """Return the id of `text` if it is a registered scheme, else `None`."""

        if isinstance(text, str):
            try:
                text = parse_phc(text)
            except ValueError:
                return None

        return text.id if text.id in self._schemes else None

    def parse(self, text: str | RawPHC) -> PHC | None:
        """
        Parse `text` and extract the parameters of its scheme.

        Raises `PHCParseError` for malformed strings and `ValueError` for
        unknown schemes. Returns `None` if the parameters cannot be
        extracted.
        """

        raw = parse_phc(text) if isinstance(text, str) else text
        params = self.param_set(raw.id).extract(raw.params)
        if params is None:
            return None

        return PHC(raw.id, params, raw.salt, raw.hash)

    def format(
        self,
        values: Sequence[Any],
        salt: Salt | str | bytes | None = None,
        hash: bytes | None = None,
        scheme: str | None = None,
    ) -> str:
        if scheme is None:
            scheme = self.default_scheme()
            if scheme is None:
                raise ValueError("no default scheme set")

        params = self.param_set(scheme).serialize(values)
        return RawPHC.from_parts(scheme, params, salt, hash).serialize()
