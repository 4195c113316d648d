#!/usr/bin/env python3

"""
Typed extraction of hash function parameters from raw PHC parameter lists.

A `ParamSet` declares, in order, the parameters a hash function expects:

    >>> params = param_set(param('i', uint), param('mem', default=True))
    >>> params.extract([('i', '10000')])
    (10000, True)

Parameters have to appear in the raw list in the declared order. A declared
parameter that is not at the current position takes its default value and
consumes nothing, so a reordered list fails to extract even if every name
is present.
"""

from __future__ import annotations as _annotations

from .ifc import Param, T

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from typing import Any


UINT32_MAX = 2**32 - 1


def uint(raw: str) -> int:
    """Parse an unsigned 32-bit decimal integer, without sign or whitespace."""

    if not raw.isascii() or not raw.isdigit():
        raise ValueError(f"invalid unsigned integer: {raw!r}")
    value = int(raw)
    if value > UINT32_MAX:
        raise ValueError(f"unsigned integer out of range: {raw!r}")
    return value


def _parse_bool(raw: str) -> bool:
    match raw:
        case 'true':
            return True
        case 'false':
            return False
        case _:
            raise ValueError(f"invalid boolean: {raw!r}")


def _render_bool(value: bool) -> str:
    return 'true' if value else 'false'


_CODECS: dict[type, tuple[Callable[[str], Any], Callable[[Any], str]]] = {
    bool: (_parse_bool, _render_bool),
}


class GenParam(Param[T]):
    """
    A generic parameter, suitable for most uses.

    Values are parsed by calling `type` on the raw text and rendered with
    `str()`, except for `bool`, which uses ``true`` and ``false``. Both can be
    overridden with `parse` and `render`. A parse function signals malformed
    input by raising `ValueError` or `TypeError`, or by returning `None`.

    The default codec only round-trips for types whose constructor accepts
    what `str()` produces. An `Enum` renders as ``Mode.A``, which does not
    parse back, and `int` also accepts text such as ``1_000`` when `extract`
    is called directly. Pass `parse` and `render` for such types.
    """

    _name: str
    _default: T | None
    _parse: Callable[[str], T | None]
    _render: Callable[[T], str]

    def __init__(
        self,
        name: str,
        type: Callable[[str], T] | None = None,
        default: T | None = None,
        *,
        parse: Callable[[str], T | None] | None = None,
        render: Callable[[T], str] | None = None,
    ) -> None:
        if type is None:
            type = str if default is None else default.__class__

        codec_parse, codec_render = _CODECS.get(type, (type, str))

        self._name = name
        self._default = default
        self._parse = codec_parse if parse is None else parse
        self._render = codec_render if render is None else render

    def __repr__(self) -> str:
        if self._default is None:
            return f'{self.__class__.__name__}({self._name!r})'
        return f'{self.__class__.__name__}({self._name!r}, default={self._default!r})'

    def name(self) -> str:
        return self._name

    def default(self) -> T | None:
        return self._default

    def extract(self, raw: str) -> T | None:
        try:
            return self._parse(raw)
        except (ValueError, TypeError):
            return None

    def serialize(self, value: T) -> str | None:
        if self._default is not None and value == self._default:
            return None
        return self._render(value)


def param(
    name: str,
    type: Callable[[str], T] | None = None,
    default: T | None = None,
    **kwargs: Callable[..., Any],
) -> GenParam[T]:
    return GenParam(name, type, default, **kwargs)


class RawParamSlice:
    """A cursor over raw ``(name, value)`` pairs that only moves forward."""

    _pairs: Sequence[tuple[str, str]]
    _pos: int

    def __init__(self, pairs: Sequence[tuple[str, str]]) -> None:
        self._pairs = pairs
        self._pos = 0

    @property
    def remaining(self) -> Sequence[tuple[str, str]]:
        return self._pairs[self._pos:]

    def next_if_key(self, key: str) -> str | None:
        if self._pos < len(self._pairs):
            name, value = self._pairs[self._pos]
            if name == key:
                self._pos += 1
                return value
        return None

    def extract_single(self, param: Param[T]) -> T | None:
        value = self.next_if_key(param.name())
        if value is None:
            return param.default()
        return param.extract(value)


class ParamSet:

    _params: tuple[Param[Any], ...]

    def __init__(self, *params: Param[Any] | str) -> None:
        if not params:
            raise ValueError("a parameter set needs at least one parameter")

        self._params = tuple(GenParam(p) if isinstance(p, str) else p for p in params)
        for p in self._params:
            if not isinstance(p, Param):
                raise TypeError(f"expected a Param, got {p!r}")

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({", ".join(map(repr, self._params))})'

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[Param[Any]]:
        return iter(self._params)

    def names(self) -> tuple[str, ...]:
        return tuple(p.name() for p in self._params)

    def extract(self, raw_params: Sequence[tuple[str, str]]) -> tuple[Any, ...] | None:
        """
        Extract a typed tuple, aligned with the declared parameters, from raw
        ``(name, value)`` pairs.

        Returns `None` as soon as one parameter is missing without a default
        or has a malformed value.
        """

        raw = RawParamSlice(raw_params)
        values = []
        for p in self._params:
            value = raw.extract_single(p)
            if value is None:
                return None
            values.append(value)

        return tuple(values)

    def serialize(self, values: Sequence[Any]) -> tuple[tuple[str, str], ...]:
        """Render values to raw pairs, leaving out those equal to their default."""

        if len(values) != len(self._params):
            raise ValueError(f"expected {len(self._params)} values, got {len(values)}")

        pairs = []
        for p, value in zip(self._params, values):
            rendered = p.serialize(value)
            if rendered is not None:
                pairs.append((p.name(), rendered))

        return tuple(pairs)


def param_set(*params: Param[Any] | str) -> ParamSet:
    return ParamSet(*params)
