"""
Рекурсивная декомпозиция отношения до заданной нормальной формы
"""
import logging
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from relnorm.decomposition import Decomposition
from relnorm.models import NormalForm
from relnorm.relation import Relation

if TYPE_CHECKING:
    from relnorm.config import NormalizationSettings

logger = logging.getLogger(__name__)


class DecompositionTreeNode:
    """
    Узел дерева декомпозиции

    Узел является листом, если его отношение уже находится в требуемой
    нормальной форме, либо если полученная декомпозиция не удовлетворяет
    требованиям легальности / отсутствия потерь. Во втором случае
    декомпозиция сохраняется в узле, но дочерние узлы не создаются.

    По умолчанию легальность и отсутствие потерь не требуются, в отличие
    от NormalizationSettings, где оба требования включены.
    """

    def __init__(self, relation: Relation, target: NormalForm,
                 require_legal: bool = False, require_lossless: bool = False):
        self.relation = relation
        self.decomposition: Optional[Decomposition] = None
        self.children: Tuple["DecompositionTreeNode", ...] = ()

        if relation.normal_form.contains(target):
            return

        decomposition = relation.decompose()
        if decomposition is None:
            return
        self.decomposition = decomposition

        if require_legal and not decomposition.is_legal():
            logger.info("%s: декомпозиция отклонена (нелегальная)", relation.name)
            return
        if require_lossless and not decomposition.is_lossless():
            logger.info("%s: декомпозиция отклонена (с потерями)", relation.name)
            return

        self.children = tuple(
            DecompositionTreeNode(child, target, require_legal, require_lossless)
            for child in decomposition.children
        )

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_rejected(self) -> bool:
        """Декомпозиция вычислена, но не применена"""
        return self.decomposition is not None and not self.children

    def walk(self) -> Iterator["DecompositionTreeNode"]:
        """Обход дерева в прямом порядке"""
        yield self
        for child in self.children:
            yield from child.walk()

    def final_nodes(self) -> List["DecompositionTreeNode"]:
        return [node for node in self.walk() if node.is_leaf]

    def depth(self) -> int:
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children)

    def __repr__(self):
        return f"DecompositionTreeNode({self.relation!r}, {self.relation.normal_form})"


class RecursiveDecomposition:
    """
    Дерево декомпозиции отношения и его итоговые отношения (листья)

    Без явных require_legal / require_lossless декомпозиция не ограничена.
    Настройки командной строки (NormalizationSettings, оба требования
    включены) передаются через from_settings.
    """

    def __init__(self, relation: Relation, target: NormalForm = NormalForm.BCNF,
                 require_legal: bool = False, require_lossless: bool = False):
        self.target = target
        self.require_legal = require_legal
        self.require_lossless = require_lossless
        self.root = DecompositionTreeNode(relation, target, require_legal, require_lossless)

    @classmethod
    def from_settings(cls, relation: Relation, settings: "NormalizationSettings") -> "RecursiveDecomposition":
        return cls(relation, settings.target_form, settings.require_legal, settings.require_lossless)

    def final_relations(self) -> Tuple[Relation, ...]:
        """Листья дерева без повторов, упорядоченные по имени"""
        return tuple(sorted({node.relation for node in self.root.final_nodes()}))

    def steps(self) -> List[Decomposition]:
        """Примененные декомпозиции в порядке обхода"""
        return [node.decomposition for node in self.root.walk()
                if node.decomposition is not None and node.children]

    def rejected(self) -> List[Decomposition]:
        """Декомпозиции, отклоненные из-за требований легальности / отсутствия потерь"""
        return [node.decomposition for node in self.root.walk() if node.is_rejected]

    def reached_target(self) -> bool:
        return all(relation.normal_form.contains(self.target) for relation in self.final_relations())
