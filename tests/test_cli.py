import io

import pytest

from relnorm.cli import build_parser, format_relation, main
from tests.factories import fd, relation

TRANSITIVE_ARGS = ["--attributes", "A, B, C", "--fd", "A -> B", "--fd", "B -> C"]


def run_cli(argv, stdin_text=""):
    stdout = io.StringIO()
    code = main(argv, stdin=io.StringIO(stdin_text), stdout=stdout)
    return code, stdout.getvalue()


def test_decomposes_to_bcnf_by_default():
    code, output = run_cli(TRANSITIVE_ARGS)
    assert code == 0
    assert output.splitlines() == [
        "R.1({B, C}, {{B} → {C}})  [BCNF]  ключи: {B}",
        "R.2({A, B}, {{A} → {B}})  [BCNF]  ключи: {A}",
    ]


def test_dependencies_as_single_option():
    code, output = run_cli(["-a", "A,B,C", "--fds", "A->B; B->C"])
    assert code == 0
    assert len(output.splitlines()) == 2


def test_reads_relation_from_stdin():
    code, output = run_cli([], "A, B, C\nA -> B\nB -> C\n\nignored\n")
    assert code == 0
    assert output.startswith("R.1({B, C}")


def test_target_form():
    code, output = run_cli(TRANSITIVE_ARGS + ["--target", "2NF"])
    assert code == 0
    assert output.splitlines() == ["R({A, B, C}, {{A} → {B}; {B} → {C}})  [2NF]  ключи: {A}"]


def test_relation_name(monkeypatch):
    monkeypatch.setenv("RELNORM_RELATION_NAME", "Emp")
    _, output = run_cli(TRANSITIVE_ARGS)
    assert output.startswith("Emp.1(")

    _, output = run_cli(TRANSITIVE_ARGS + ["--name", "Dept"])
    assert output.startswith("Dept.1(")


def test_report():
    _, output = run_cli(TRANSITIVE_ARGS + ["--report"])
    assert "Анализ отношения: R" in output
    assert "Текущая нормальная форма: 2NF" in output
    assert "Декомпозиция R на R.1, R.2 (легальная, без потерь)" in output


def test_illegal_decomposition_rejected_by_default():
    code, output = run_cli(["-a", "A, B, C", "--fds", "A, B -> C; C -> B", "--report"])
    assert code == 0
    assert "[WARNING] Декомпозиция R на R.1, R.2 (без потерь) - отклонена" in output
    assert output.splitlines()[-1].endswith("[3NF]  ключи: {A, B} | {A, C}")


def test_allow_illegal():
    _, output = run_cli(["-a", "A, B, C", "--fds", "A, B -> C; C -> B", "--allow-illegal"])
    assert output.splitlines() == [
        "R.1({B, C}, {{C} → {B}})  [BCNF]  ключи: {C}",
        "R.2({A, C}, {})  [BCNF]  ключи: {A, C}",
    ]


def test_require_legal_from_environment(monkeypatch):
    monkeypatch.setenv("RELNORM_REQUIRE_LEGAL", "false")
    _, output = run_cli(["-a", "A, B, C", "--fds", "A, B -> C; C -> B"])
    assert len(output.splitlines()) == 2


def test_plot(tmp_path):
    path = tmp_path / "tree.png"
    code, _ = run_cli(TRANSITIVE_ARGS + ["--plot", str(path)])
    assert code == 0
    assert path.exists()
    assert path.stat().st_size > 0


def test_schema_error_exit_code(capsys):
    code, output = run_cli(["-a", "A, B", "--fd", "A -> C"])
    assert code == 2
    assert output == ""
    assert capsys.readouterr().err.startswith("[ERROR] ")


def test_parse_error_exit_code(capsys):
    code, _ = run_cli(["-a", "A, B", "--fd", "A => B"])
    assert code == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_invalid_target_choice():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--target", "4NF"])


def test_format_relation():
    r = relation("R", "AB", fd("A", "B"), fd("B", "A"))
    assert format_relation(r) == "R({A, B}, {{A} → {B}; {B} → {A}})  [BCNF]  ключи: {A} | {B}"
