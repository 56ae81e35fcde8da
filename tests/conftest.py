import matplotlib

matplotlib.use("Agg")

import pytest

from relnorm.relation import Relation
from tests.factories import fd, relation


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("RELNORM_RELATION_NAME", "RELNORM_TARGET_FORM", "RELNORM_REQUIRE_LEGAL",
                "RELNORM_REQUIRE_LOSSLESS", "RELNORM_LOG_LEVEL", "RELNORM_LOG_FILE"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def transitive_relation() -> Relation:
    """R(A, B, C), A → B, B → C"""
    return relation("R", "ABC", fd("A", "B"), fd("B", "C"))


@pytest.fixture
def mutual_keys_relation() -> Relation:
    """R(A, B), A → B, B → A"""
    return relation("R", "AB", fd("A", "B"), fd("B", "A"))


@pytest.fixture
def partial_relation() -> Relation:
    """R(A, B, C, D), AB → C, B → D: частичная зависимость B → D"""
    return relation("R", "ABCD", fd("AB", "C"), fd("B", "D"))


@pytest.fixture
def third_nf_relation() -> Relation:
    """R(A, B, C), AB → C, C → B: 3НФ, но не НФБК"""
    return relation("R", "ABC", fd("AB", "C"), fd("C", "B"))
