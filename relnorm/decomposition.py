"""
Модуль с алгоритмами декомпозиции для различных нормальных форм
"""
import logging
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple

from relnorm import analyzer
from relnorm.fd_algorithms import FDAlgorithms
from relnorm.models import (
    DecompositionError, Descriptor, FunctionalDependency, FunctionalDependencySet, NormalForm
)
from relnorm.relation import Relation

logger = logging.getLogger(__name__)


def child_names(parent_name: str, count: int) -> List[str]:
    """Имена дочерних отношений: R -> R.1, R.2, ...; R.1 -> R.1.1, ..."""
    return [f"{parent_name}.{index}" for index in range(1, count + 1)]


class Decomposition:
    """Результат декомпозиции отношения на два и более дочерних отношения"""

    def __init__(self, parent: Relation, children: Iterable[Relation]):
        children = tuple(sorted(set(children)))
        if len(children) < 2:
            raise DecompositionError(
                f"Декомпозиция {parent.name} должна содержать не менее двух отношений, получено {len(children)}"
            )
        self.parent = parent
        self.children: Tuple[Relation, ...] = children

    @classmethod
    def from_split(cls, parent: Relation,
                   attrs_a: Descriptor, fds_a: FunctionalDependencySet,
                   attrs_b: Descriptor, fds_b: FunctionalDependencySet) -> "Decomposition":
        """Бинарная декомпозиция; имена дочерних отношений выводятся из имени родителя"""
        name_a, name_b = child_names(parent.name, 2)
        return cls(parent, [Relation(name_a, attrs_a, fds_a), Relation(name_b, attrs_b, fds_b)])

    def _children_fds(self) -> FunctionalDependencySet:
        return FunctionalDependencySet().union(*(child.minimal_cover for child in self.children))

    def is_legal(self) -> bool:
        """
        Декомпозиция легальна, если объединение минимальных покрытий дочерних
        отношений эквивалентно минимальному покрытию родителя
        """
        return FDAlgorithms.is_equivalent(self._children_fds(), self.parent.minimal_cover)

    def is_lossless(self) -> bool:
        """
        Декомпозиция без потерь: пересечение I атрибутов всех дочерних
        отношений функционально определяет атрибуты хотя бы одного из них
        """
        intersection = self.children[0].attributes
        for child in self.children[1:]:
            intersection = intersection.intersection(child.attributes)

        closure = FDAlgorithms.closure(intersection, self.parent.minimal_cover)
        return any(closure.contains(child.attributes) for child in self.children)

    def preserved_dependencies(self) -> List[FunctionalDependency]:
        """ФЗ минимального покрытия родителя, выводимые из ФЗ дочерних отношений"""
        children_fds = list(self._children_fds())
        return [fd for fd in self.parent.minimal_cover if FDAlgorithms.implies(children_fds, fd)]

    def lost_dependencies(self) -> List[FunctionalDependency]:
        children_fds = list(self._children_fds())
        return [fd for fd in self.parent.minimal_cover if not FDAlgorithms.implies(children_fds, fd)]

    def summary(self) -> str:
        """Краткое описание: имена отношений и свойства декомпозиции"""
        text = f"Декомпозиция {self.parent.name} на {', '.join(child.name for child in self.children)}"
        legal = self.is_legal()
        lossless = self.is_lossless()
        if legal and lossless:
            text += " (легальная, без потерь)"
        elif legal:
            text += " (легальная)"
        elif lossless:
            text += " (без потерь)"
        return text

    def __repr__(self):
        return f"Decomposition({self.parent.name} -> {[child.name for child in self.children]})"


class Decomposer:
    """Правила декомпозиции: одно разбиение на два отношения за шаг"""

    @staticmethod
    def split_partial_dependency(relation: Relation) -> Optional[Decomposition]:
        """
        Устранение частичной зависимости (нарушение 2НФ)

        R1 = X ∪ {A} с единственной ФЗ X → A; R2 - остальные ФЗ минимального
        покрытия. Атрибут A удаляется из R2, если он не встречается ни в одной
        из оставшихся ФЗ.
        """
        fd = analyzer.find_partial_dependency(relation)
        if fd is None:
            return None

        rest = relation.minimal_cover.without_element(fd)
        attrs_b = relation.attributes
        if not any(other.attributes.contains(fd.dependent) for other in rest):
            attrs_b = attrs_b.difference(fd.dependent)

        logger.debug("%s: устранение частичной зависимости %r", relation.name, fd)
        return Decomposition.from_split(
            relation,
            fd.attributes, FunctionalDependencySet([fd]),
            attrs_b, rest,
        )

    @staticmethod
    def split_transitive_dependency(relation: Relation) -> Optional[Decomposition]:
        """Устранение транзитивной зависимости (нарушение 3НФ)"""
        fd = analyzer.find_transitive_dependency(relation)
        if fd is None:
            return None
        logger.debug("%s: устранение транзитивной зависимости %r", relation.name, fd)
        return Decomposer._split_off(relation, fd)

    @staticmethod
    def split_bcnf_violation(relation: Relation) -> Optional[Decomposition]:
        """Устранение зависимости от детерминанта, не являющегося суперключом (нарушение НФБК)"""
        fd = analyzer.find_bcnf_violation(relation)
        if fd is None:
            return None
        logger.debug("%s: устранение нарушения НФБК %r", relation.name, fd)
        return Decomposer._split_off(relation, fd)

    @staticmethod
    def _split_off(relation: Relation, fd: FunctionalDependency) -> Decomposition:
        # R1: X ∪ Y с ФЗ X → Y; R2: все атрибуты кроме Y и ФЗ, целиком лежащие в R2
        attrs_b = relation.attributes.difference(fd.dependent)
        fds_b = FunctionalDependencySet(
            other for other in relation.minimal_cover if other.is_composed_of(attrs_b)
        )
        return Decomposition.from_split(
            relation,
            fd.attributes, FunctionalDependencySet([fd]),
            attrs_b, fds_b,
        )

    @staticmethod
    def no_decomposition(relation: Relation) -> Optional[Decomposition]:
        # НФБК - максимальный распознаваемый уровень
        return None


class NormalFormRule(NamedTuple):
    """
    Правило уровня решетки нормальных форм: предикат уровня и разбиение
    отношения, находящегося ровно на этом уровне, в сторону следующего
    """
    form: NormalForm
    is_normalized: Callable[[Relation], bool]
    decompose: Callable[[Relation], Optional[Decomposition]]


NORMAL_FORM_RULES: Dict[NormalForm, NormalFormRule] = {
    NormalForm.FIRST_NF: NormalFormRule(NormalForm.FIRST_NF, analyzer.is_1nf,
                                        Decomposer.split_partial_dependency),
    NormalForm.SECOND_NF: NormalFormRule(NormalForm.SECOND_NF, analyzer.is_2nf,
                                         Decomposer.split_transitive_dependency),
    NormalForm.THIRD_NF: NormalFormRule(NormalForm.THIRD_NF, analyzer.is_3nf,
                                        Decomposer.split_bcnf_violation),
    NormalForm.BCNF: NormalFormRule(NormalForm.BCNF, analyzer.is_bcnf,
                                    Decomposer.no_decomposition),
}
