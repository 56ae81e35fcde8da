import numpy as np
import pytest

from relnorm.config import NormalizationSettings
from relnorm.models import Descriptor, NormalForm
from relnorm.performance import generate_random_relation
from relnorm.recursive import DecompositionTreeNode, RecursiveDecomposition
from tests.factories import fd, relation


def test_decomposition_to_bcnf(transitive_relation):
    tree = RecursiveDecomposition(transitive_relation, NormalForm.BCNF)
    finals = tree.final_relations()

    assert [r.name for r in finals] == ["R.1", "R.2"]
    assert [r.attributes for r in finals] == [Descriptor.of("B", "C"), Descriptor.of("A", "B")]
    assert all(r.normal_form is NormalForm.BCNF for r in finals)
    assert tree.reached_target()
    assert len(tree.steps()) == 1
    assert tree.rejected() == []
    assert tree.root.depth() == 1


def test_relation_already_in_target(transitive_relation):
    tree = RecursiveDecomposition(transitive_relation, NormalForm.SECOND_NF)
    assert tree.final_relations() == (transitive_relation,)
    assert tree.root.is_leaf
    assert not tree.root.is_rejected
    assert tree.steps() == []


def test_bcnf_relation_stays_whole(mutual_keys_relation):
    tree = RecursiveDecomposition(mutual_keys_relation)
    assert tree.final_relations() == (mutual_keys_relation,)
    assert tree.reached_target()


def test_illegal_decomposition_is_rejected(third_nf_relation):
    tree = RecursiveDecomposition(third_nf_relation, NormalForm.BCNF, require_legal=True)

    assert tree.final_relations() == (third_nf_relation,)
    assert tree.root.is_rejected
    assert len(tree.rejected()) == 1
    assert tree.steps() == []
    assert not tree.reached_target()


def test_illegal_decomposition_is_applied_when_allowed(third_nf_relation):
    tree = RecursiveDecomposition(third_nf_relation, NormalForm.BCNF)
    assert [r.name for r in tree.final_relations()] == ["R.1", "R.2"]
    assert tree.reached_target()


def test_from_settings(third_nf_relation):
    settings = NormalizationSettings(target_form=NormalForm.BCNF, require_legal=False)
    tree = RecursiveDecomposition.from_settings(third_nf_relation, settings)
    assert tree.require_lossless
    assert not tree.require_legal
    assert len(tree.final_relations()) == 2


def test_multi_level_names():
    # 1НФ -> 2НФ -> НФБК: потомки второго уровня получают имена R.x.y
    r = relation("R", "ABCDE", fd("AB", "C"), fd("B", "D"), fd("D", "E"))
    tree = RecursiveDecomposition(r, NormalForm.BCNF)
    names = [rel.name for rel in tree.final_relations()]

    assert tree.root.depth() >= 2
    assert any(name.count(".") == 2 for name in names)
    assert names == sorted(names)
    assert tree.reached_target()


def test_tree_walk(transitive_relation):
    tree = RecursiveDecomposition(transitive_relation)
    nodes = list(tree.root.walk())
    assert nodes[0] is tree.root
    assert len(nodes) == 3
    assert [node.relation for node in tree.root.final_nodes()] == list(tree.root.decomposition.children)


def test_node_repr(mutual_keys_relation):
    node = DecompositionTreeNode(mutual_keys_relation, NormalForm.BCNF)
    assert repr(node) == "DecompositionTreeNode(R(A, B), BCNF)"


@pytest.mark.parametrize("seed", range(10))
def test_unconstrained_decomposition_reaches_bcnf(seed):
    r = generate_random_relation(6, 6, np.random.default_rng(seed))
    tree = RecursiveDecomposition(r, NormalForm.BCNF)
    finals = tree.final_relations()

    assert all(rel.normal_form is NormalForm.BCNF for rel in finals)
    assert Descriptor().union(*(rel.attributes for rel in finals)) == r.attributes
    assert all(d.is_lossless() for d in tree.steps())


@pytest.mark.parametrize("seed", range(10))
def test_constrained_decomposition_keeps_every_step_valid(seed):
    r = generate_random_relation(6, 6, np.random.default_rng(seed))
    tree = RecursiveDecomposition(r, NormalForm.BCNF, require_legal=True, require_lossless=True)

    for step in tree.steps():
        assert step.is_legal()
        assert step.is_lossless()
    for node in tree.root.final_nodes():
        assert node.relation.normal_form is NormalForm.BCNF or node.is_rejected


def test_default_requirements_differ_from_settings(third_nf_relation):
    bare = RecursiveDecomposition(third_nf_relation)
    configured = RecursiveDecomposition.from_settings(third_nf_relation, NormalizationSettings())

    assert not bare.require_legal and not bare.require_lossless
    assert configured.require_legal and configured.require_lossless
    assert len(bare.final_relations()) == 2
    assert configured.final_relations() == (third_nf_relation,)
