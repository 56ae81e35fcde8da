"""
Модуль для анализа нормальных форм отношений
"""
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from relnorm.models import FunctionalDependency, NormalForm

if TYPE_CHECKING:
    from relnorm.relation import Relation


def _partial_dependencies(relation: "Relation") -> Iterator[FunctionalDependency]:
    non_prime = relation.non_prime_attributes
    for fd in relation.minimal_cover:
        if fd.is_trivial():
            continue
        if relation.is_strictly_prime(fd.determinant) and fd.dependent.is_contained_in(non_prime):
            yield fd


def _transitive_dependencies(relation: "Relation") -> Iterator[FunctionalDependency]:
    prime = relation.prime_attributes
    for fd in relation.minimal_cover:
        if fd.is_trivial():
            continue
        if not relation.is_superkey(fd.determinant) and not fd.dependent.is_contained_in(prime):
            yield fd


def _bcnf_violations(relation: "Relation") -> Iterator[FunctionalDependency]:
    for fd in relation.minimal_cover:
        if fd.is_trivial():
            continue
        if not relation.is_superkey(fd.determinant):
            yield fd


def find_partial_dependency(relation: "Relation") -> Optional[FunctionalDependency]:
    """
    Первая ФЗ X → A минимального покрытия, нарушающая 2НФ:
    X - собственное подмножество ключа, A - непростой атрибут
    """
    return next(_partial_dependencies(relation), None)


def find_transitive_dependency(relation: "Relation") -> Optional[FunctionalDependency]:
    """
    Первая ФЗ X → A, нарушающая 3НФ: X не суперключ, A - непростой атрибут
    """
    return next(_transitive_dependencies(relation), None)


def find_bcnf_violation(relation: "Relation") -> Optional[FunctionalDependency]:
    """Первая ФЗ, детерминант которой не является суперключом"""
    return next(_bcnf_violations(relation), None)


def is_1nf(relation: "Relation") -> bool:
    # Атрибуты атомарны по построению
    return True


def is_2nf(relation: "Relation") -> bool:
    return find_partial_dependency(relation) is None


def is_3nf(relation: "Relation") -> bool:
    return find_transitive_dependency(relation) is None


def is_bcnf(relation: "Relation") -> bool:
    return find_bcnf_violation(relation) is None


def classify(relation: "Relation") -> NormalForm:
    """
    Нормальная форма отношения: самая строгая из полностью выполненных.
    Проверяются последовательно 2НФ, 3НФ и НФБК; не ниже 1НФ.
    """
    if not is_2nf(relation):
        return NormalForm.FIRST_NF
    if not is_3nf(relation):
        return NormalForm.SECOND_NF
    if not is_bcnf(relation):
        return NormalForm.THIRD_NF
    return NormalForm.BCNF


class NormalFormAnalyzer:
    """Класс для анализа нормальных форм"""

    def __init__(self, relation: "Relation"):
        self.relation = relation
        self.candidate_keys = relation.candidate_keys
        self.prime_attributes = relation.prime_attributes
        self.non_prime_attributes = relation.non_prime_attributes

    def check_1nf(self) -> Tuple[bool, List[str]]:
        """
        Проверка первой нормальной формы

        Returns:
            (соответствует_1НФ, список_нарушений)
        """
        # Все атрибуты считаются атомарными, отношение непусто по построению
        return True, []

    def check_2nf(self) -> Tuple[bool, List[str]]:
        """
        Проверка второй нормальной формы

        Returns:
            (соответствует_2НФ, список_нарушений)
        """
        violations = []
        for fd in _partial_dependencies(self.relation):
            keys = [key for key in self.candidate_keys if key.strictly_contains(fd.determinant)]
            violations.append(
                f"Частичная зависимость: {fd!r} "
                f"(детерминант - часть ключа {{{keys[0]}}})"
            )
        return len(violations) == 0, violations

    def check_3nf(self) -> Tuple[bool, List[str]]:
        """
        Проверка третьей нормальной формы

        Returns:
            (соответствует_3НФ, список_нарушений)
        """
        violations = []
        for fd in _transitive_dependencies(self.relation):
            violations.append(
                f"Нарушение 3НФ: {fd!r} "
                f"(детерминант не является суперключом, зависимый атрибут непростой)"
            )
        return len(violations) == 0, violations

    def check_bcnf(self) -> Tuple[bool, List[str]]:
        """
        Проверка нормальной формы Бойса-Кодда

        Returns:
            (соответствует_НФБК, список_нарушений)
        """
        violations = []
        for fd in _bcnf_violations(self.relation):
            violations.append(f"Нарушение НФБК: {fd!r} (детерминант не является суперключом)")
        return len(violations) == 0, violations

    def determine_normal_form(self) -> Tuple[NormalForm, List[str]]:
        """
        Определить нормальную форму отношения

        Returns:
            (нормальная_форма, нарушения_следующей_формы)
        """
        is_2nf_ok, violations_2nf = self.check_2nf()
        if not is_2nf_ok:
            return NormalForm.FIRST_NF, violations_2nf

        is_3nf_ok, violations_3nf = self.check_3nf()
        if not is_3nf_ok:
            return NormalForm.SECOND_NF, violations_3nf

        is_bcnf_ok, violations_bcnf = self.check_bcnf()
        if not is_bcnf_ok:
            return NormalForm.THIRD_NF, violations_bcnf

        return NormalForm.BCNF, []

    def get_analysis_report(self) -> str:
        """Получить подробный отчет об анализе"""
        report = f"Анализ отношения: {self.relation.name}\n"
        report += "=" * 50 + "\n\n"

        report += f"Атрибуты: {{{self.relation.attributes}}}\n"

        report += f"\nФункциональные зависимости ({len(self.relation.functional_dependencies)}):\n"
        for fd in self.relation.functional_dependencies:
            report += f"  - {fd!r}\n"

        report += f"\nМинимальное покрытие ({len(self.relation.minimal_cover)} ФЗ):\n"
        for fd in self.relation.minimal_cover:
            report += f"  - {fd!r}\n"

        report += f"\nПотенциальные ключи ({len(self.candidate_keys)}):\n"
        for key in self.candidate_keys:
            report += f"  - {{{key}}}\n"

        report += f"\nПростые атрибуты: {{{self.prime_attributes}}}\n"
        report += f"Непростые атрибуты: {{{self.non_prime_attributes}}}\n"

        nf, violations = self.determine_normal_form()
        report += f"\nТекущая нормальная форма: {nf.value}\n"

        if violations:
            report += "\nНарушения:\n"
            for v in violations:
                report += f"  - {v}\n"

        return report
