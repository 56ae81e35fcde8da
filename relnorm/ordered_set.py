"""
Упорядоченное множество: детерминированная коллекция без повторов
"""
from typing import Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


def _members_of(elements: Iterable) -> frozenset:
    if isinstance(elements, OrderedSet):
        return elements._members
    if isinstance(elements, (set, frozenset)):
        return elements
    return frozenset(elements)


class OrderedSet(Generic[T]):
    """
    Неизменяемое множество, элементы которого всегда перебираются
    в порядке возрастания (элементы должны поддерживать операцию <).

    Все операции алгебры множеств возвращают новый экземпляр того же
    класса, что и левый операнд.

    Помимо операций, нужных алгоритмам нормализации, поддерживаются
    contains_element и symmetric_difference (оператор ^).
    """

    __slots__ = ("_items", "_members", "_hash")

    def __init__(self, elements: Iterable[T] = ()):
        members = frozenset(elements)
        self._members = members
        self._items = tuple(sorted(members))
        self._hash: Optional[int] = None

    def _new(self, elements: Iterable[T]) -> "OrderedSet[T]":
        return type(self)(elements)

    # Базовые операции

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, element: object) -> bool:
        return element in self._members

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedSet):
            return self._members == other._members
        return NotImplemented

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._members)
        return self._hash

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"

    def __str__(self) -> str:
        return ", ".join(str(item) for item in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def first(self) -> T:
        """Наименьший элемент множества"""
        if not self._items:
            raise IndexError("множество пусто")
        return self._items[0]

    def contains_element(self, element: T) -> bool:
        return element in self._members

    # Отношения включения

    def contains(self, other: Iterable[T]) -> bool:
        """Проверка, является ли other подмножеством (нестрогим) этого множества"""
        return self._members >= _members_of(other)

    def is_contained_in(self, other: Iterable[T]) -> bool:
        return self._members <= _members_of(other)

    def strictly_contains(self, other: Iterable[T]) -> bool:
        return self._members > _members_of(other)

    def is_strictly_contained_in(self, other: Iterable[T]) -> bool:
        return self._members < _members_of(other)

    # Алгебра множеств

    def union(self, *others: Iterable[T]) -> "OrderedSet[T]":
        members = set(self._members)
        for other in others:
            members.update(other)
        return self._new(members)

    def intersection(self, other: Iterable[T]) -> "OrderedSet[T]":
        return self._new(self._members.intersection(other))

    def difference(self, other: Iterable[T]) -> "OrderedSet[T]":
        return self._new(self._members.difference(other))

    def symmetric_difference(self, other: Iterable[T]) -> "OrderedSet[T]":
        return self._new(self._members.symmetric_difference(other))

    def with_element(self, element: T) -> "OrderedSet[T]":
        return self._new(self._members | {element})

    def without_element(self, element: T) -> "OrderedSet[T]":
        return self._new(self._members - {element})

    def __or__(self, other: "OrderedSet[T]") -> "OrderedSet[T]":
        return self.union(other)

    def __and__(self, other: "OrderedSet[T]") -> "OrderedSet[T]":
        return self.intersection(other)

    def __sub__(self, other: "OrderedSet[T]") -> "OrderedSet[T]":
        return self.difference(other)

    def __xor__(self, other: "OrderedSet[T]") -> "OrderedSet[T]":
        return self.symmetric_difference(other)
