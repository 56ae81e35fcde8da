"""
Разбор текстовой записи атрибутов и функциональных зависимостей

    A, B, C            - дескриптор
    A, B -> C          - ФЗ (допускается также стрелка →)
    A -> B; B -> C     - множество ФЗ (через ";" или по одной на строке)
"""
import re
from typing import Iterable

from relnorm.models import (
    ATTRIBUTE_NAME_PATTERN, Attribute, Descriptor, FunctionalDependency,
    FunctionalDependencySet, SchemaError
)
from relnorm.relation import Relation

ARROW_PATTERN = re.compile(r"->|→")
FD_SEPARATOR_PATTERN = re.compile(r"[;\n]")


class SchemaParseError(SchemaError):
    """Текст не соответствует синтаксису схемы"""


def parse_attribute(text: str) -> Attribute:
    name = text.strip()
    if not ATTRIBUTE_NAME_PATTERN.match(name):
        raise SchemaParseError(f"Недопустимое имя атрибута: {text!r}")
    return Attribute(name)


def parse_descriptor(text: str) -> Descriptor:
    """Дескриптор из списка атрибутов через запятую"""
    tokens = re.sub(r"\s+", "", text).split(",")
    return Descriptor(parse_attribute(token) for token in tokens)


def parse_dependency(text: str) -> FunctionalDependency:
    """ФЗ вида "X -> Y" """
    parts = ARROW_PATTERN.split(text)
    if len(parts) != 2:
        raise SchemaParseError(f"Ожидалась ФЗ вида 'X -> Y', получено {text!r}")
    determinant, dependent = parts
    try:
        return FunctionalDependency(parse_descriptor(determinant), parse_descriptor(dependent))
    except SchemaParseError:
        raise
    except SchemaError as e:
        raise SchemaParseError(f"Некорректная ФЗ {text!r}: {e}") from e


def parse_dependencies(text: str) -> FunctionalDependencySet:
    """Множество ФЗ; пустая строка - пустое множество"""
    pieces = [piece for piece in FD_SEPARATOR_PATTERN.split(text) if piece.strip()]
    return FunctionalDependencySet(parse_dependency(piece) for piece in pieces)


def parse_dependency_lines(lines: Iterable[str]) -> FunctionalDependencySet:
    """Множество ФЗ по одной на строке; чтение прекращается на первой пустой строке"""
    fds = []
    for line in lines:
        if not line.strip():
            break
        fds.append(parse_dependency(line))
    return FunctionalDependencySet(fds)


def parse_relation(name: str, attributes: str, dependencies: str = "") -> Relation:
    """Построить отношение по текстовой записи атрибутов и ФЗ"""
    return Relation(name, parse_descriptor(attributes), parse_dependencies(dependencies))
