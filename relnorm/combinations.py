"""
Генератор сочетаний: ленивый перебор k-элементных подмножеств
"""
import math
from itertools import combinations
from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar

from relnorm.ordered_set import OrderedSet

T = TypeVar("T")


def binomial(n: int, k: int) -> int:
    """Биномиальный коэффициент C(n, k); 0 при k вне [0, n]"""
    if k < 0 or k > n:
        return 0
    return math.comb(n, k)


class Combinations(Generic[T]):
    """
    Все k-элементные подмножества упорядоченного множества.

    Подмножества выдаются в лексикографическом порядке по возрастанию
    элементов: сначала все сочетания, содержащие наименьший элемент,
    затем сочетания без него и т.д. Каждое подмножество строится фабрикой
    (по умолчанию - классом исходного множества), поэтому сочетания
    атрибутов дескриптора сами являются дескрипторами.
    """

    def __init__(self, elements: OrderedSet[T], size: int,
                 factory: Optional[Callable[[Iterable[T]], OrderedSet[T]]] = None):
        if size < 1 or size > len(elements):
            raise ValueError(
                f"Размер сочетания должен быть в диапазоне [1, {len(elements)}], получено {size}"
            )
        self.elements = elements
        self.size = size
        self._factory = factory or type(elements)

    def __iter__(self) -> Iterator[OrderedSet[T]]:
        for combo in combinations(self.elements, self.size):
            yield self._factory(combo)

    def __len__(self) -> int:
        return self.count()

    def count(self) -> int:
        """Количество сочетаний C(n, k)"""
        return binomial(len(self.elements), self.size)
