"""
Отношение R(A, F) и его производные свойства
"""
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional

from relnorm import analyzer
from relnorm.fd_algorithms import FDAlgorithms
from relnorm.models import (
    Attribute, Descriptor, FunctionalDependency, FunctionalDependencySet, NormalForm, SchemaError
)
from relnorm.ordered_set import OrderedSet

if TYPE_CHECKING:
    from relnorm.decomposition import Decomposition

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Relation:
    """
    Класс для представления отношения

    Минимальное покрытие, потенциальные ключи и нормальная форма
    вычисляются один раз при создании и далее не меняются.
    """
    name: str
    attributes: Descriptor
    functional_dependencies: FunctionalDependencySet = field(default_factory=FunctionalDependencySet)
    minimal_cover: FunctionalDependencySet = field(init=False, repr=False)
    candidate_keys: OrderedSet[Descriptor] = field(init=False, repr=False)
    normal_form: NormalForm = field(init=False, repr=False)

    def __post_init__(self):
        # Типы элементов проверяются до упорядочивания
        attributes = list(self.attributes)
        fds = list(self.functional_dependencies)
        for attr in attributes:
            if not isinstance(attr, Attribute):
                raise SchemaError(f"Ожидался атрибут, получено {attr!r}")
        for fd in fds:
            if not isinstance(fd, FunctionalDependency):
                raise SchemaError(f"Ожидалась функциональная зависимость, получено {fd!r}")

        object.__setattr__(self, "attributes", Descriptor(attributes))
        object.__setattr__(self, "functional_dependencies", FunctionalDependencySet(fds))
        self._validate()

        object.__setattr__(self, "minimal_cover", FDAlgorithms.minimal_cover(self.functional_dependencies))
        object.__setattr__(self, "candidate_keys",
                           FDAlgorithms.find_candidate_keys(self.attributes, self.minimal_cover))
        object.__setattr__(self, "normal_form", analyzer.classify(self))
        logger.debug("Отношение %s: ключи [%s], форма %s",
                     self.name, "; ".join(str(key) for key in self.candidate_keys), self.normal_form)

    def _validate(self):
        if not isinstance(self.name, str) or not self.name:
            raise SchemaError("Имя отношения должно быть непустой строкой")
        if self.attributes.is_empty():
            raise SchemaError(f"Отношение {self.name} не содержит атрибутов")
        for fd in self.functional_dependencies:
            missing = fd.attributes.difference(self.attributes)
            if not missing.is_empty():
                raise SchemaError(
                    f"ФЗ {fd!r} использует атрибуты {{{missing}}}, отсутствующие в отношении {self.name}"
                )

    # Ключи и простые атрибуты

    @property
    def prime_attributes(self) -> Descriptor:
        """Простые атрибуты (входящие хотя бы в один ключ)"""
        return Descriptor().union(*self.candidate_keys)

    @property
    def non_prime_attributes(self) -> Descriptor:
        return self.attributes.difference(self.prime_attributes)

    def is_superkey(self, descriptor: Iterable) -> bool:
        """Содержит ли дескриптор какой-либо потенциальный ключ"""
        return any(key.is_contained_in(descriptor) for key in self.candidate_keys)

    def is_candidate_key(self, descriptor: Iterable) -> bool:
        return Descriptor(descriptor) in self.candidate_keys

    def is_prime(self, descriptor: Iterable) -> bool:
        """Является ли дескриптор подмножеством какого-либо ключа"""
        return any(key.contains(descriptor) for key in self.candidate_keys)

    def is_strictly_prime(self, descriptor: Iterable) -> bool:
        """Является ли дескриптор собственным подмножеством какого-либо ключа"""
        return any(key.strictly_contains(descriptor) for key in self.candidate_keys)

    def closure(self, descriptor: Iterable) -> Descriptor:
        """Замыкание дескриптора относительно минимального покрытия"""
        return FDAlgorithms.closure(descriptor, self.minimal_cover)

    def decompose(self) -> Optional["Decomposition"]:
        """Декомпозиция по правилу нормальной формы, в которой находится отношение"""
        from relnorm.decomposition import NORMAL_FORM_RULES
        return NORMAL_FORM_RULES[self.normal_form].decompose(self)

    # Сравнение и представление

    def _sort_key(self):
        return self.name, self.attributes, tuple(self.functional_dependencies)

    def __eq__(self, other):
        if isinstance(other, Relation):
            return (self.name == other.name and self.attributes == other.attributes
                    and self.functional_dependencies == other.functional_dependencies)
        return NotImplemented

    def __hash__(self):
        return hash((self.name, self.attributes, self.functional_dependencies))

    def __lt__(self, other):
        if isinstance(other, Relation):
            return self._sort_key() < other._sort_key()
        return NotImplemented

    def __repr__(self):
        return f"{self.name}({self.attributes})"

    def __str__(self):
        return f"{self.name}({{{self.attributes}}}, {{{self.functional_dependencies}}})"
