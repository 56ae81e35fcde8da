"""
Модуль с классами для представления данных реляционной модели
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from relnorm.ordered_set import OrderedSet

ATTRIBUTE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_@$%]+$")


class NormalizationError(ValueError):
    """Базовая ошибка: нарушено предусловие при построении объектов схемы"""


class SchemaError(NormalizationError):
    """Некорректные атрибуты, ФЗ или отношение"""


class DecompositionError(NormalizationError):
    """Некорректная декомпозиция"""


class NormalForm(Enum):
    """Перечисление нормальных форм (по возрастанию строгости)"""
    FIRST_NF = "1NF"
    SECOND_NF = "2NF"
    THIRD_NF = "3NF"
    BCNF = "BCNF"

    @property
    def level(self) -> int:
        return _NORMAL_FORM_LEVELS[self]

    def contains(self, other: "NormalForm") -> bool:
        """
        Проверка, включает ли эта форма другую: НФБК включает 3НФ, 2НФ и 1НФ.
        Каждая форма включает саму себя.
        """
        return self.level >= other.level

    def is_contained_in(self, other: "NormalForm") -> bool:
        return other.contains(self)

    def next_form(self) -> "NormalForm":
        """Следующая (более строгая) форма; для НФБК - она сама"""
        forms = list(NormalForm)
        return forms[min(self.level, len(forms) - 1)]

    @classmethod
    def from_name(cls, name: str) -> "NormalForm":
        """Получить форму по имени: "2NF", "3nf", "BCNF", "THIRD_NF" ..."""
        normalized = name.strip().upper()
        for form in cls:
            if normalized in (form.value, form.name):
                return form
        raise SchemaError(f"Неизвестная нормальная форма: {name!r}")

    def __lt__(self, other: "NormalForm") -> bool:
        if isinstance(other, NormalForm):
            return self.level < other.level
        return NotImplemented

    def __str__(self) -> str:
        return self.value


_NORMAL_FORM_LEVELS = {form: index for index, form in enumerate(NormalForm, start=1)}


@dataclass(frozen=True, order=True)
class Attribute:
    """Класс для представления атрибута отношения"""
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not ATTRIBUTE_NAME_PATTERN.match(self.name):
            raise SchemaError(f"Недопустимое имя атрибута: {self.name!r}")

    def __repr__(self):
        return self.name

    def __str__(self):
        return self.name


class Descriptor(OrderedSet[Attribute]):
    """
    Дескриптор - множество атрибутов.

    Дескрипторы упорядочены сначала по количеству атрибутов, затем
    попарным сравнением атрибутов в порядке возрастания.
    """

    @classmethod
    def of(cls, *names: str) -> "Descriptor":
        """Построить дескриптор по именам атрибутов"""
        return cls(Attribute(name) for name in names)

    def is_single_attribute(self) -> bool:
        return len(self) == 1

    def _sort_key(self) -> Tuple[int, Tuple[Attribute, ...]]:
        return len(self), tuple(self)

    def __lt__(self, other: "Descriptor") -> bool:
        if isinstance(other, Descriptor):
            return self._sort_key() < other._sort_key()
        return NotImplemented

    def __le__(self, other: "Descriptor") -> bool:
        if isinstance(other, Descriptor):
            return self._sort_key() <= other._sort_key()
        return NotImplemented

    def __gt__(self, other: "Descriptor") -> bool:
        if isinstance(other, Descriptor):
            return self._sort_key() > other._sort_key()
        return NotImplemented

    def __ge__(self, other: "Descriptor") -> bool:
        if isinstance(other, Descriptor):
            return self._sort_key() >= other._sort_key()
        return NotImplemented


@dataclass(frozen=True, order=True)
class FunctionalDependency:
    """Класс для представления функциональной зависимости X → Y"""
    determinant: Descriptor
    dependent: Descriptor

    def __post_init__(self):
        # Допускаем любые итерируемые наборы атрибутов, храним дескрипторы
        if not isinstance(self.determinant, Descriptor):
            object.__setattr__(self, "determinant", Descriptor(self.determinant))
        if not isinstance(self.dependent, Descriptor):
            object.__setattr__(self, "dependent", Descriptor(self.dependent))
        if self.determinant.is_empty():
            raise SchemaError("Детерминант функциональной зависимости не может быть пустым")
        if self.dependent.is_empty():
            raise SchemaError("Зависимая часть функциональной зависимости не может быть пустой")

    @classmethod
    def of(cls, determinant: Iterable[str], dependent: Iterable[str]) -> "FunctionalDependency":
        """Построить ФЗ по именам атрибутов: FunctionalDependency.of("AB", "C")"""
        return cls(Descriptor.of(*determinant), Descriptor.of(*dependent))

    def __repr__(self):
        return f"{{{self.determinant}}} → {{{self.dependent}}}"

    @property
    def attributes(self) -> Descriptor:
        """Все атрибуты, упомянутые в ФЗ"""
        return self.determinant.union(self.dependent)

    def is_trivial(self) -> bool:
        """Проверка, является ли ФЗ тривиальной"""
        return self.dependent.is_contained_in(self.determinant)

    def split(self) -> "FunctionalDependencySet":
        """Разложить X → A1..An на X → A1, ..., X → An"""
        return FunctionalDependencySet(
            FunctionalDependency(self.determinant, Descriptor([attr]))
            for attr in self.dependent
        )

    def is_composed_of(self, descriptor: Descriptor) -> bool:
        """Обе части ФЗ являются подмножествами дескриптора"""
        return (self.determinant.is_contained_in(descriptor)
                and self.dependent.is_contained_in(descriptor))


class FunctionalDependencySet(OrderedSet[FunctionalDependency]):
    """Множество функциональных зависимостей в каноническом порядке"""

    def attributes(self) -> Descriptor:
        """Объединение атрибутов всех ФЗ множества"""
        attrs = set()
        for fd in self:
            attrs.update(fd.determinant)
            attrs.update(fd.dependent)
        return Descriptor(attrs)

    def is_composed_of(self, descriptor: Descriptor) -> bool:
        return all(fd.is_composed_of(descriptor) for fd in self)

    def __str__(self):
        return "; ".join(repr(fd) for fd in self)
