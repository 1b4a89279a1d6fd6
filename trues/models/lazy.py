# models/lazy.py – memoizing cell with an explicit "resolved to nothing" state

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_UNRESOLVED = object()


class Lazy(Generic[T]):
    """
    A single cached value.

    States: unresolved, resolved to None, resolved to a value. Once resolved
    the resolver is never called again until ``reset()``.
    """
    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value: object = _UNRESOLVED

    @classmethod
    def of(cls, value: Optional[T]) -> "Lazy[T]":
        cell: Lazy[T] = cls()
        cell.set(value)
        return cell

    @property
    def resolved(self) -> bool:
        return self._value is not _UNRESOLVED

    def peek(self) -> Optional[T]:
        """Cached value without resolving (None while unresolved)."""
        return None if self._value is _UNRESOLVED else self._value  # type: ignore[return-value]

    def get_or_resolve(self, resolver: Callable[[], Optional[T]]) -> Optional[T]:
        if self._value is _UNRESOLVED:
            self._value = resolver()
        return self._value  # type: ignore[return-value]

    def set(self, value: Optional[T]) -> None:
        self._value = value

    def reset(self) -> None:
        self._value = _UNRESOLVED

    def __repr__(self) -> str:
        if self._value is _UNRESOLVED:
            return "Lazy(<unresolved>)"
        return f"Lazy({self._value!r})"
