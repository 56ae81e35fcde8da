import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from relnorm.models import NormalForm
from relnorm.recursive import RecursiveDecomposition
from relnorm.visualization import (
    NORMAL_FORM_COLORS, draw_decomposition_tree, save_decomposition_tree
)


def _texts(fig):
    return [text.get_text() for text in fig.axes[0].texts]


def test_colors_for_every_form():
    assert set(NORMAL_FORM_COLORS) == set(NormalForm)


def test_draw_tree(transitive_relation):
    fig = draw_decomposition_tree(RecursiveDecomposition(transitive_relation))
    try:
        assert isinstance(fig, Figure)
        texts = _texts(fig)
        assert len(texts) == 3
        assert texts[0].startswith("R [2NF]")
        assert any(text.startswith("R.1 [BCNF]") for text in texts)
        assert fig.axes[0].get_title() == "Декомпозиция R до BCNF"
    finally:
        plt.close(fig)


def test_draw_on_existing_axes(mutual_keys_relation):
    fig, ax = plt.subplots()
    try:
        assert draw_decomposition_tree(RecursiveDecomposition(mutual_keys_relation), ax=ax) is fig
        assert len(ax.texts) == 1
    finally:
        plt.close(fig)


def test_rejected_node_is_marked(third_nf_relation):
    tree = RecursiveDecomposition(third_nf_relation, require_legal=True)
    fig = draw_decomposition_tree(tree)
    try:
        assert "декомпозиция отклонена" in _texts(fig)
    finally:
        plt.close(fig)


def test_save_tree(tmp_path, transitive_relation):
    path = save_decomposition_tree(RecursiveDecomposition(transitive_relation), tmp_path / "tree.png")
    assert path == tmp_path / "tree.png"
    assert path.exists()
