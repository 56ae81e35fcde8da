"""
Командная строка: анализ отношения и рекурсивная декомпозиция

Пример:
    relnorm --attributes "A, B, C" --fd "A -> B" --fd "B -> C" --target BCNF

Без --attributes атрибуты читаются из первой строки стандартного ввода,
затем ФЗ - по одной на строке до пустой строки.
"""
import argparse
import dataclasses
import logging
import sys
from typing import IO, Optional, Sequence

from relnorm.analyzer import NormalFormAnalyzer
from relnorm.config import NormalizationSettings
from relnorm.logging_config import configure_logging
from relnorm.models import FunctionalDependencySet, NormalForm, NormalizationError
from relnorm.recursive import RecursiveDecomposition
from relnorm.relation import Relation
from relnorm.schema_parser import (
    parse_dependencies, parse_dependency, parse_dependency_lines, parse_descriptor
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relnorm",
        description="Нормальная форма, ключи, минимальное покрытие и декомпозиция отношения",
    )
    parser.add_argument("--name", help="имя отношения (по умолчанию RELNORM_RELATION_NAME или R)")
    parser.add_argument("--attributes", "-a", help='атрибуты через запятую, например "A, B, C"')
    parser.add_argument("--fd", action="append", default=[], metavar="X->Y",
                        help="функциональная зависимость (можно указывать несколько раз)")
    parser.add_argument("--fds", default="", help='ФЗ через ";", например "A->B; B->C"')
    parser.add_argument("--target", "-t", choices=[form.value for form in NormalForm],
                        help="требуемая нормальная форма (по умолчанию BCNF)")
    parser.add_argument("--allow-illegal", action="store_true",
                        help="допускать декомпозиции, теряющие ФЗ")
    parser.add_argument("--allow-lossy", action="store_true",
                        help="допускать декомпозиции с потерями")
    parser.add_argument("--report", action="store_true", help="вывести подробный анализ отношения")
    parser.add_argument("--plot", metavar="PATH", help="сохранить дерево декомпозиции в файл изображения")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="журнал (-v INFO, -vv DEBUG)")
    return parser


def _read_relation(args: argparse.Namespace, name: str, stdin: IO[str]) -> Relation:
    if args.attributes is None:
        # Интерактивный ввод: строка атрибутов, затем ФЗ до пустой строки
        attributes = parse_descriptor(stdin.readline())
        fds = parse_dependency_lines(line.rstrip("\n") for line in stdin)
    else:
        attributes = parse_descriptor(args.attributes)
        fds = parse_dependencies(args.fds).union(parse_dependency(text) for text in args.fd)
    return Relation(name, attributes, FunctionalDependencySet(fds))


def format_relation(relation: Relation) -> str:
    keys = " | ".join(f"{{{key}}}" for key in relation.candidate_keys)
    return f"{relation}  [{relation.normal_form.value}]  ключи: {keys}"


def run(args: argparse.Namespace, stdin: IO[str], stdout: IO[str]) -> int:
    settings = NormalizationSettings.from_env()
    overrides = {}
    if args.name:
        overrides["relation_name"] = args.name
    if args.target:
        overrides["target_form"] = NormalForm.from_name(args.target)
    if args.allow_illegal:
        overrides["require_legal"] = False
    if args.allow_lossy:
        overrides["require_lossless"] = False
    settings = dataclasses.replace(settings, **overrides)

    relation = _read_relation(args, settings.relation_name, stdin)
    if args.report:
        stdout.write(NormalFormAnalyzer(relation).get_analysis_report() + "\n")

    tree = RecursiveDecomposition.from_settings(relation, settings)
    if args.report:
        for step in tree.steps():
            stdout.write(step.summary() + "\n")
        for rejected in tree.rejected():
            stdout.write(f"[WARNING] {rejected.summary()} - отклонена\n")

    for final in tree.final_relations():
        stdout.write(format_relation(final) + "\n")

    if args.plot:
        from relnorm.visualization import save_decomposition_tree
        path = save_decomposition_tree(tree, args.plot)
        logger.info("Дерево декомпозиции сохранено в %s", path)
    return 0


def main(argv: Optional[Sequence[str]] = None, stdin: Optional[IO[str]] = None,
         stdout: Optional[IO[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose or None)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    try:
        return run(args, stdin, stdout)
    except NormalizationError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
