"""
Исследование производительности: время анализа и декомпозиции случайных схем
"""
import argparse
import time
from typing import Dict, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from relnorm.models import Descriptor, FunctionalDependency, NormalForm
from relnorm.recursive import RecursiveDecomposition
from relnorm.relation import Relation


def generate_random_relation(n_attributes: int, n_dependencies: int, rng: np.random.Generator,
                             max_determinant: int = 2, name: str = "R") -> Relation:
    """
    Сгенерировать случайное отношение

    Args:
        n_attributes: Количество атрибутов (не меньше 2)
        n_dependencies: Количество ФЗ
        rng: Генератор случайных чисел numpy
        max_determinant: Максимальный размер детерминанта
        name: Имя отношения

    Returns:
        Отношение с атрибутами A0..A{n-1} и ФЗ вида X → A
    """
    if n_attributes < 2:
        raise ValueError("Нужно не меньше двух атрибутов")
    names = [f"A{i}" for i in range(n_attributes)]

    fds = []
    for _ in range(n_dependencies):
        size = int(rng.integers(1, min(max_determinant, n_attributes - 1) + 1))
        chosen = rng.choice(n_attributes, size=size + 1, replace=False)
        determinant = Descriptor.of(*(names[i] for i in chosen[:size]))
        dependent = Descriptor.of(names[chosen[size]])
        fds.append(FunctionalDependency(determinant, dependent))

    return Relation(name, Descriptor.of(*names), fds)


def run_performance_test(attribute_counts: Sequence[int] = (4, 5, 6, 7, 8),
                         dependencies_per_relation: Optional[int] = None,
                         repeats: int = 5, seed: int = 42,
                         target: NormalForm = NormalForm.BCNF) -> Dict[int, Dict[str, float]]:
    """
    Измерить время анализа (построение отношения) и рекурсивной декомпозиции

    Returns:
        {число_атрибутов: {"analysis", "analysis_std", "decomposition",
        "decomposition_std", "leaves"}}, время в секундах
    """
    rng = np.random.default_rng(seed)
    results: Dict[int, Dict[str, float]] = {}

    for n in attribute_counts:
        m = dependencies_per_relation if dependencies_per_relation is not None else n
        analysis_times = []
        decomposition_times = []
        leaves = []

        for _ in range(repeats):
            start = time.perf_counter()
            relation = generate_random_relation(n, m, rng)
            analysis_times.append(time.perf_counter() - start)

            start = time.perf_counter()
            tree = RecursiveDecomposition(relation, target)
            decomposition_times.append(time.perf_counter() - start)
            leaves.append(len(tree.final_relations()))

        results[n] = {
            "analysis": float(np.mean(analysis_times)),
            "analysis_std": float(np.std(analysis_times)),
            "decomposition": float(np.mean(decomposition_times)),
            "decomposition_std": float(np.std(decomposition_times)),
            "leaves": float(np.mean(leaves)),
        }
        print(f"[INFO] N={n}, M={m}: анализ {results[n]['analysis'] * 1000:.2f} мс, "
              f"декомпозиция {results[n]['decomposition'] * 1000:.2f} мс, "
              f"отношений {results[n]['leaves']:.1f}")

    return results


def plot_performance(results: Dict[int, Dict[str, float]]) -> Figure:
    """Построение графика времени выполнения от количества атрибутов"""
    n_values = np.array(sorted(results))
    analysis = np.array([results[n]["analysis"] for n in n_values]) * 1000
    analysis_std = np.array([results[n]["analysis_std"] for n in n_values]) * 1000
    decomposition = np.array([results[n]["decomposition"] for n in n_values]) * 1000
    decomposition_std = np.array([results[n]["decomposition_std"] for n in n_values]) * 1000

    fig, ax = plt.subplots(figsize=(12, 7))
    ax.errorbar(n_values, analysis, yerr=analysis_std, marker='o', linestyle='-',
                color='dodgerblue', capsize=3, label='Время анализа')
    ax.errorbar(n_values, decomposition, yerr=decomposition_std, marker='s', linestyle='--',
                color='orangered', capsize=3, label='Время декомпозиции')

    ax.set_title('Зависимость времени выполнения от количества атрибутов (N)', fontsize=16)
    ax.set_xlabel('Количество атрибутов (N)', fontsize=12)
    ax.set_ylabel('Время выполнения (мс)', fontsize=12)
    ax.set_xticks(n_values)
    ax.legend()
    ax.grid(True, which="both", ls="--", linewidth=0.5)
    fig.tight_layout()
    return fig


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="relnorm-benchmark",
                                     description="Время анализа и декомпозиции случайных отношений")
    parser.add_argument("--sizes", type=int, nargs="+", default=[4, 5, 6, 7, 8],
                        help="количества атрибутов")
    parser.add_argument("--dependencies", type=int, help="количество ФЗ (по умолчанию равно N)")
    parser.add_argument("--repeats", type=int, default=5)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--output", help="файл для графика; без него график показывается на экране")
    args = parser.parse_args(argv)

    results = run_performance_test(args.sizes, args.dependencies, args.repeats, args.seed)
    fig = plot_performance(results)
    if args.output:
        fig.savefig(args.output)
        plt.close(fig)
        print(f"[INFO] График сохранен в {args.output}")
    else:
        plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
