"""
End-to-end tests for python -m hilbertproof.
"""

import pytest

from hilbertproof.__main__ import main


IDENTITY_INPUT = "\n".join([
    "|-A->A",
    "A->(A->A)->A",
    "(A->(A->A)->A)->(A->A->A)->(A->A)",
    "(A->A->A)->(A->A)",
    "A->A->A",
    "A->A",
]) + "\n"


def run(tmp_path, text, *extra):
    source = tmp_path / "task2.in"
    target = tmp_path / "task2.out"
    source.write_text(text, encoding="utf-8")
    main([str(source), str(target), *extra])
    return target.read_text(encoding="utf-8").split("\n")


class TestCheckMode:
    def test_annotates_every_line(self, tmp_path):
        rows = run(tmp_path, IDENTITY_INPUT, "--quiet")
        assert rows == [
            "|-A->A",
            "(1) A->(A->A)->A (Ax. sch. 1)",
            "(2) (A->(A->A)->A)->(A->A->A)->(A->A) (Ax. sch. 2)",
            "(3) (A->A->A)->(A->A) (M.P. 1, 2)",
            "(4) A->A->A (Ax. sch. 1)",
            "(5) A->A (M.P. 4, 3)",
        ]

    def test_bad_line_continues(self, tmp_path, capsys):
        rows = run(tmp_path, "P|-Q\nQ\nP\n", "check")
        assert rows[1] == "(1) Q (Not proved)"
        assert rows[2] == "(2) P (Hypothesis 1)"
        err = capsys.readouterr().err
        assert "formula #1" in err
        assert "Proved formula does not match the goal" in err

    def test_quiet(self, tmp_path, capsys):
        run(tmp_path, "P|-Q\nQ\n", "check", "--quiet")
        assert capsys.readouterr().err == ""


class TestElaborateMode:
    def test_discharges_last_hypothesis(self, tmp_path):
        rows = run(tmp_path, "P->Q,P|-Q\nP\nP->Q\nQ\n", "elaborate", "--quiet")
        assert rows[0] == "P->Q|-(P)->(Q)"
        assert rows[-1] == "(P)->(Q)"
        assert len(rows) == 12

    def test_failure_is_single_line(self, tmp_path):
        rows = run(tmp_path, "P(x)|-R->@x(Q(x)->R)\nR->Q(x)->R\nR->@x(Q(x)->R)\n",
                   "elaborate", "--quiet")
        assert len(rows) == 1
        assert rows[0].startswith("Proof is incorrect starting from formula #2: ")
        assert "free in assumption" in rows[0]

    def test_parse_error_is_single_line(self, tmp_path):
        rows = run(tmp_path, "P|-P\nP->\n", "elaborate", "--quiet")
        assert len(rows) == 1
        assert rows[0].startswith("Proof is incorrect starting from formula #1: ")

    def test_nothing_to_discharge(self, tmp_path):
        rows = run(tmp_path, "|-A->A\nA->A->A\n", "elaborate", "--quiet")
        assert rows == ["Proof is incorrect: no hypothesis to discharge"]


def test_unknown_mode(tmp_path):
    with pytest.raises(SystemExit):
        run(tmp_path, IDENTITY_INPUT, "prove")
