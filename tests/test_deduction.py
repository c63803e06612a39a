"""
Tests for the deduction theorem.

The core claims:
    - The elaborated proof ends in H->E, where E is the last line
    - Every elaborated proof checks, line by line, from the remaining
      hypotheses (the templates are sound for every rule)
    - A quantifier rule over a variable free in H is refused
    - The first bad line aborts the elaboration, with its position
"""

import pytest

from hilbertproof.core.parser import ParseError, parse_formula
from hilbertproof.core.verifier import FreeVariableViolation, Unproved, check_proof
from hilbertproof.deduction import (
    DeductionError, DeductionTemplates, deduce, default_templates,
)


# ── Helpers ──────────────────────────────────────────────────────────────────

def recheck(deduction, hypotheses):
    """Check an elaborated proof from the hypotheses that remain."""
    return check_proof(
        hypotheses,
        deduction.goal.text,
        [f.text for f in deduction.formulas],
        verbose=False,
    )


# ── Templates ────────────────────────────────────────────────────────────────

class TestTemplates:
    def test_loaded(self):
        templates = default_templates()
        assert len(templates.identity) == 5
        assert len(templates.axiom) == 3
        assert len(templates.modus_ponens) == 3
        assert templates.identity[-1] == parse_formula("H->H")
        assert templates.forall[-1] == parse_formula("H->A->@xB")
        assert templates.exists[-1] == parse_formula("H->?xA->B")

    def test_load_from_directory(self, tmp_path):
        for name in ("identity", "axiom", "modus_ponens", "forall", "exists"):
            (tmp_path / f"{name}.proof").write_text("H->H\n\n", encoding="utf-8")
        templates = DeductionTemplates.load(str(tmp_path))
        assert templates.axiom == (parse_formula("H->H"),)


# ── Elaboration ──────────────────────────────────────────────────────────────

class TestDeduce:
    def test_hypothesis_itself(self):
        deduction = deduce(["A"], "A", ["A"])
        assert deduction.formulas[-1] == parse_formula("A->A")
        assert len(deduction.formulas) == 5
        assert deduction.header == "|-(A)->(A)"

    def test_axiom_line(self):
        deduction = deduce(["H"], "P->Q->P", ["P->Q->P"])
        assert deduction.formulas == [
            parse_formula("P->Q->P"),
            parse_formula("(P->Q->P)->H->(P->Q->P)"),
            parse_formula("H->P->Q->P"),
        ]

    def test_modus_ponens(self):
        deduction = deduce(["P->Q", "P"], "Q", ["P", "P->Q", "Q"])
        assert deduction.header == "P->Q|-(P)->(Q)"
        assert deduction.formulas[-1] == parse_formula("P->Q")
        report = recheck(deduction, ["P->Q"])
        assert report.failures == 0
        assert report.proves_goal

    def test_identity_proof_rechecks(self):
        lines = [
            "A->(A->A)->A",
            "(A->(A->A)->A)->(A->A->A)->(A->A)",
            "(A->A->A)->(A->A)",
            "A->A->A",
            "A->A",
        ]
        deduction = deduce(["B"], "A->A", lines)
        assert deduction.formulas[-1] == parse_formula("B->A->A")
        assert recheck(deduction, []).failures == 0

    def test_forall_rule(self):
        deduction = deduce(["P"], "R->@x(Q(x)->R)",
                           ["R->Q(x)->R", "R->@x(Q(x)->R)"])
        assert deduction.formulas[-1] == parse_formula("P->R->@x(Q(x)->R)")
        report = recheck(deduction, [])
        assert report.failures == 0
        assert report.proves_goal

    def test_exists_rule(self):
        deduction = deduce(["P"], "?x(Q(x)&R)->R",
                           ["Q(x)&R->R", "?x(Q(x)&R)->R"])
        assert deduction.formulas[-1] == parse_formula("P->?x(Q(x)&R)->R")
        report = recheck(deduction, [])
        assert report.failures == 0
        assert report.proves_goal

    def test_rule_from_hypothesis(self):
        deduction = deduce(["R->Q(x)", "P"], "R->@xQ(x)", ["R->@xQ(x)"])
        assert deduction.formulas[-1] == parse_formula("P->R->@xQ(x)")
        assert recheck(deduction, ["R->Q(x)"]).failures == 0


class TestDeduceErrors:
    def test_no_hypotheses(self):
        with pytest.raises(DeductionError):
            deduce([], "A->A", ["A->A->A"])

    def test_free_in_discharged_hypothesis(self):
        with pytest.raises(FreeVariableViolation) as info:
            deduce(["P(x)"], "R->@x(Q(x)->R)",
                   ["R->Q(x)->R", "R->@x(Q(x)->R)"])
        assert info.value.line == 1

    def test_unproved_line(self):
        with pytest.raises(Unproved) as info:
            deduce(["P"], "Q", ["P", "Q"])
        assert info.value.line == 1

    def test_parse_error_line(self):
        with pytest.raises(ParseError) as info:
            deduce(["P"], "P", ["P", "P->"])
        assert info.value.line == 1
