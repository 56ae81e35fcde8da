"""
Модуль визуализации дерева декомпозиции (matplotlib)
"""
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from relnorm.models import NormalForm
from relnorm.recursive import DecompositionTreeNode, RecursiveDecomposition

# Цвета для разных уровней нормализации
NORMAL_FORM_COLORS = {
    NormalForm.FIRST_NF: "#FF6B6B",
    NormalForm.SECOND_NF: "#FECA57",
    NormalForm.THIRD_NF: "#45B7D1",
    NormalForm.BCNF: "#96CEB4",
}


def _layout(root: DecompositionTreeNode) -> Dict[int, Tuple[float, float]]:
    """
    Координаты узлов: листья расставляются слева направо с шагом 1,
    родитель - посередине над своими детьми, y = -глубина
    """
    positions: Dict[int, Tuple[float, float]] = {}
    next_leaf = [0.0]

    def place(node: DecompositionTreeNode, depth: int) -> float:
        if node.is_leaf:
            x = next_leaf[0]
            next_leaf[0] += 1.0
        else:
            xs = [place(child, depth + 1) for child in node.children]
            x = sum(xs) / len(xs)
        positions[id(node)] = (x, -float(depth))
        return x

    place(root, 0)
    return positions


def _node_label(node: DecompositionTreeNode) -> str:
    relation = node.relation
    keys = " | ".join(str(key) for key in relation.candidate_keys)
    return f"{relation.name} [{relation.normal_form.value}]\n{{{relation.attributes}}}\nключи: {keys}"


def draw_decomposition_tree(tree: RecursiveDecomposition, ax: Optional[Axes] = None) -> Figure:
    """
    Нарисовать дерево декомпозиции

    Args:
        tree: Результат рекурсивной декомпозиции
        ax: Оси для рисования (по умолчанию создается новая фигура)

    Returns:
        Фигура matplotlib
    """
    positions = _layout(tree.root)
    leaves = len(tree.root.final_nodes())
    depth = tree.root.depth()

    if ax is None:
        fig, ax = plt.subplots(figsize=(max(4.0, 3.2 * leaves), max(3.0, 2.2 * (depth + 1))))
    else:
        fig = ax.figure

    for node in tree.root.walk():
        x, y = positions[id(node)]
        for child in node.children:
            cx, cy = positions[id(child)]
            ax.plot([x, cx], [y - 0.15, cy + 0.15], color="black", linewidth=1, zorder=1)

        ax.text(x, y, _node_label(node), ha="center", va="center", fontsize=8, zorder=2,
                bbox=dict(boxstyle="round,pad=0.4",
                          facecolor=NORMAL_FORM_COLORS[node.relation.normal_form],
                          edgecolor="black"))

        if node.is_rejected:
            ax.text(x, y - 0.35, "декомпозиция отклонена", ha="center", va="top",
                    fontsize=7, color="red", style="italic")

    ax.set_xlim(-0.75, max(leaves - 1, 0) + 0.75)
    ax.set_ylim(-depth - 0.75, 0.75)
    ax.set_axis_off()
    ax.set_title(f"Декомпозиция {tree.root.relation.name} до {tree.target.value}",
                 fontsize=12, fontweight="bold")
    fig.tight_layout()
    return fig


def save_decomposition_tree(tree: RecursiveDecomposition, path: Union[str, Path], dpi: int = 150) -> Path:
    """Сохранить изображение дерева декомпозиции в файл"""
    path = Path(path)
    fig = draw_decomposition_tree(tree)
    try:
        fig.savefig(path, dpi=dpi)
    finally:
        plt.close(fig)
    return path
