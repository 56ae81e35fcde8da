"""
Алгоритмы для работы с функциональными зависимостями
"""
import logging
from typing import Dict, Iterable, List, Optional

from relnorm.combinations import Combinations
from relnorm.models import Descriptor, FunctionalDependency, FunctionalDependencySet
from relnorm.ordered_set import OrderedSet

logger = logging.getLogger(__name__)


class FDAlgorithms:
    """Класс с алгоритмами для работы с функциональными зависимостями"""

    @staticmethod
    def closure(attributes: Iterable, fds: Iterable[FunctionalDependency]) -> Descriptor:
        """
        Вычисление замыкания множества атрибутов

        На каждом шаге ищется первая (в каноническом порядке) ФЗ X → Y,
        у которой X содержится в замыкании, а Y - еще нет. Y добавляется
        в замыкание, и просмотр начинается с начала.

        Args:
            attributes: Множество атрибутов
            fds: Функциональные зависимости (перебираются в переданном порядке)

        Returns:
            Замыкание множества атрибутов
        """
        closure = set(attributes)
        fd_list = list(fds)

        while True:
            for fd in fd_list:
                if fd.determinant.is_contained_in(closure) and not fd.dependent.is_contained_in(closure):
                    closure.update(fd.dependent)
                    break
            else:
                break

        return Descriptor(closure)

    @staticmethod
    def implies(fds: Iterable[FunctionalDependency], fd: FunctionalDependency) -> bool:
        """Принадлежит ли ФЗ замыканию множества ФЗ (выводится ли она из fds)"""
        return fd.dependent.is_contained_in(FDAlgorithms.closure(fd.determinant, fds))

    @staticmethod
    def covers(fds: Iterable[FunctionalDependency], other: Iterable[FunctionalDependency]) -> bool:
        """Покрывает ли fds множество other: каждая ФЗ из other выводится из fds"""
        fd_list = list(fds)
        return all(FDAlgorithms.implies(fd_list, fd) for fd in other)

    @staticmethod
    def is_equivalent(fds: Iterable[FunctionalDependency], other: Iterable[FunctionalDependency]) -> bool:
        """Эквивалентность множеств ФЗ (взаимное покрытие)"""
        fd_list = list(fds)
        other_list = list(other)
        return FDAlgorithms.covers(fd_list, other_list) and FDAlgorithms.covers(other_list, fd_list)

    @staticmethod
    def complete_determinant(fd: FunctionalDependency, fds: Iterable[FunctionalDependency]) -> Descriptor:
        """
        Минимальная часть детерминанта, от которой полностью зависит Y

        Среди (|X|-1)-подмножеств X берется первое, замыкание которого
        содержит Y, и поиск продолжается рекурсивно уже в нем.

        Returns:
            Подмножество Z ⊆ X такое, что Z → Y полная
        """
        fd_list = list(fds)
        return FDAlgorithms._complete_determinant(fd.determinant, fd.dependent, fd_list)

    @staticmethod
    def _complete_determinant(determinant: Descriptor, dependent: Descriptor,
                              fds: List[FunctionalDependency]) -> Descriptor:
        if determinant.is_single_attribute():
            return determinant
        for subset in Combinations(determinant, len(determinant) - 1):
            if dependent.is_contained_in(FDAlgorithms.closure(subset, fds)):
                return FDAlgorithms._complete_determinant(subset, dependent, fds)
        return determinant

    @staticmethod
    def is_complete(fd: FunctionalDependency, fds: Iterable[FunctionalDependency]) -> bool:
        """
        Проверка полноты ФЗ: ни одно (|X|-1)-подмножество X не определяет Y.
        ФЗ с одноатрибутным детерминантом всегда полная.
        """
        if fd.determinant.is_single_attribute():
            return True
        fd_list = list(fds)
        for subset in Combinations(fd.determinant, len(fd.determinant) - 1):
            if fd.dependent.is_contained_in(FDAlgorithms.closure(subset, fd_list)):
                return False
        return True

    @staticmethod
    def is_partial(fd: FunctionalDependency, fds: Iterable[FunctionalDependency]) -> bool:
        return not FDAlgorithms.is_complete(fd, fds)

    @staticmethod
    def is_elemental(fd: FunctionalDependency, fds: Iterable[FunctionalDependency]) -> bool:
        """Элементарная ФЗ: полная и с одним зависимым атрибутом"""
        return FDAlgorithms.is_complete(fd, fds) and fd.dependent.is_single_attribute()

    @staticmethod
    def extraneous_attributes(fd: FunctionalDependency,
                              fds: Iterable[FunctionalDependency]) -> Optional[Descriptor]:
        """
        Посторонние атрибуты детерминанта

        Returns:
            X \\ Z, где Z - полная часть детерминанта, или None, если ФЗ полная
        """
        complete = FDAlgorithms.complete_determinant(fd, fds)
        if complete == fd.determinant:
            return None
        return fd.determinant.difference(complete)

    @staticmethod
    def minimal_cover(fds: Iterable[FunctionalDependency]) -> FunctionalDependencySet:
        """
        Минимальное (каноническое) покрытие множества ФЗ

        Четыре шага в фиксированном порядке: разделение правых частей,
        удаление тривиальных ФЗ, удаление посторонних атрибутов слева,
        удаление избыточных ФЗ.
        """
        source = FunctionalDependencySet(fds)
        if source.is_empty():
            return source

        # Шаг 1: Разделить правые части
        split_fds = FunctionalDependencySet().union(*(fd.split() for fd in source))

        # Шаг 2: Удалить тривиальные ФЗ
        nontrivial = FunctionalDependencySet(fd for fd in split_fds if not fd.is_trivial())

        # Шаг 3: Удалить посторонние атрибуты из левых частей
        # (полнота проверяется относительно множества, полученного на шаге 2)
        snapshot = list(nontrivial)
        reduced = FunctionalDependencySet(
            FunctionalDependency(FDAlgorithms._complete_determinant(fd.determinant, fd.dependent, snapshot),
                                 fd.dependent)
            for fd in snapshot
        )

        # Шаг 4: Удалить избыточные ФЗ
        remaining = list(reduced)
        for fd in reduced:
            index = remaining.index(fd)
            others = remaining[:index] + remaining[index + 1:]
            if fd.dependent.is_contained_in(FDAlgorithms.closure(fd.determinant, others)):
                remaining = others

        result = FunctionalDependencySet(remaining)
        logger.debug("Минимальное покрытие %d ФЗ -> %d ФЗ", len(source), len(result))
        return result

    @staticmethod
    def is_superkey(descriptor: Descriptor, attributes: Descriptor,
                    fds: Iterable[FunctionalDependency]) -> bool:
        """
        Проверка, является ли множество атрибутов суперключом

        Returns:
            True, если замыкание дескриптора содержит все атрибуты отношения
        """
        return FDAlgorithms.closure(descriptor, fds).contains(attributes)

    @staticmethod
    def find_candidate_keys(attributes: Descriptor,
                            fds: Iterable[FunctionalDependency]) -> OrderedSet[Descriptor]:
        """
        Найти все потенциальные (минимальные) ключи отношения

        Рекурсивный перебор, начиная со всего множества атрибутов: если ни одно
        (n-1)-подмножество суперключа не является суперключом, то он сам - ключ.

        Returns:
            Множество минимальных ключей (хотя бы один для непустых атрибутов)
        """
        fd_list = list(fds)
        cache: Dict[Descriptor, OrderedSet[Descriptor]] = {}

        def keys_within(descriptor: Descriptor) -> OrderedSet[Descriptor]:
            if descriptor in cache:
                return cache[descriptor]

            if not FDAlgorithms.is_superkey(descriptor, attributes, fd_list):
                keys: OrderedSet[Descriptor] = OrderedSet()
            elif descriptor.is_single_attribute():
                keys = OrderedSet([descriptor])
            else:
                keys = OrderedSet().union(*(
                    keys_within(subset)
                    for subset in Combinations(descriptor, len(descriptor) - 1)
                ))
                if keys.is_empty():
                    keys = OrderedSet([descriptor])

            cache[descriptor] = keys
            return keys

        return keys_within(Descriptor(attributes))
