"""Tagged option for related data handed to the view assembler.

A relation is either ``Loaded(value)`` - the caller fetched it, possibly
empty - or ``OMITTED`` - the caller never asked for it.  The assembler
branches on the tag instead of on ``None``/emptiness, so an empty review
list and an unrequested review list can never be confused.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Loaded(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class _Omitted:
    def __repr__(self) -> str:
        return "OMITTED"


OMITTED: Final = _Omitted()

Relation = Union[Loaded[T], _Omitted]


def map_loaded(relation: Relation[T], fn: Callable[[T], U]) -> Relation[U]:
    """Apply *fn* to a loaded value; OMITTED passes through untouched."""
    if isinstance(relation, Loaded):
        return Loaded(fn(relation.value))
    return OMITTED


def value_or(relation: Relation[T], default: U) -> T | U:
    if isinstance(relation, Loaded):
        return relation.value
    return default
