"""
The step verifier.

One forward pass over the proof. Each line must be justified by lines
before it, by an axiom, or by a hypothesis. The rules are tried in a fixed
order, which decides the label printed when several apply:

    1. quantifier rule     ?xB->A from B->A,  A->@xB from A->B
                           (x not free in A, nor in the tracked hypothesis)
    2. quantifier axioms   @xA->A[x:=t],  A[x:=t]->?xA  (t free for x)
    3. induction           A[x:=0]&@x(A->A[x:=x'])->A  (x free in A)
    4. modus ponens        B from A and A->B
    5. logic axioms        1..10
    6. arithmetic axioms   A1..A8
    7. hypotheses

A rule that recognises the line's shape but rejects it (a free variable,
a captured term, a malformed induction) remembers why. If no later rule
justifies the line, that reason is what the failure reports.
"""

import sys
from dataclasses import dataclass, field
from typing import Optional

from ..axioms import EXISTS_AXIOM, FORALL_AXIOM, INDUCTION_AXIOM, default_axioms
from .formula import (
    Conjunction, Exists, Forall, Implication, Node, Successor, Variable, Zero,
)
from .matching import has_free, match, match_substitution, substitute
from .parser import ParseError, parse_formula
from .session import ProofSession


LOGIC_AXIOM = "logic axiom"
QUANTIFIER_AXIOM = "quantifier axiom"
ARITHMETIC_AXIOM = "arithmetic axiom"
INDUCTION = "induction"
MODUS_PONENS = "modus ponens"
HYPOTHESIS = "hypothesis"
FORALL_RULE = "forall rule"
EXISTS_RULE = "exists rule"

AXIOM_RULES = (LOGIC_AXIOM, QUANTIFIER_AXIOM, ARITHMETIC_AXIOM, INDUCTION)


# ── Failures ─────────────────────────────────────────────────────────────────

class VerificationFailure(Exception):
    """A line no rule justifies. `line` is its 0-based position, once known."""

    def __init__(self, reason: str, line: Optional[int] = None):
        super().__init__(reason)
        self.reason = reason
        self.line = line


class Unproved(VerificationFailure):
    """No rule applies at all."""
    pass


class FreeVariableViolation(VerificationFailure):
    """A quantifier rule over a variable that occurs free where it must not."""
    pass


class SubstitutionNotFree(VerificationFailure):
    """A quantifier axiom whose term would be captured."""
    pass


class InductionMismatch(VerificationFailure):
    """Shaped like the induction schema, but the parts disagree."""
    pass


# ── Justifications ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Justification:
    """
    Why a line holds.

    index:    position in the axiom table or hypothesis list (0-based)
    premises: earlier line positions the rule used (0-based)
    variable: the quantified variable, for quantifier rules and axioms
    from_hypothesis: quantifier rule whose premise is hypothesis `index`
    """
    rule: str
    index: Optional[int] = None
    premises: tuple = ()
    variable: str = ""
    from_hypothesis: bool = False

    @property
    def label(self) -> str:
        if self.rule in (LOGIC_AXIOM, QUANTIFIER_AXIOM):
            return f"Ax. sch. {self.index + 1}"
        if self.rule in (ARITHMETIC_AXIOM, INDUCTION):
            return f"Ax. A{self.index + 1}"
        if self.rule == MODUS_PONENS:
            return "M.P. " + ", ".join(str(p + 1) for p in self.premises)
        if self.rule == HYPOTHESIS:
            return f"Hypothesis {self.index + 1}"
        symbol = "@" if self.rule == FORALL_RULE else "?"
        if self.from_hypothesis:
            return f"Rule {symbol} from hypothesis {self.index + 1}"
        return f"Rule {symbol} from {self.premises[0] + 1}"


# ── Rules ────────────────────────────────────────────────────────────────────

def _quantifier_rule(session: ProofSession, formula: Implication):
    left, right = formula.left, formula.right
    candidates = []
    if isinstance(left, Exists):
        candidates.append((EXISTS_RULE, left.variable.name,
                           Implication(left.body, right), right))
    if isinstance(right, Forall):
        candidates.append((FORALL_RULE, right.variable.name,
                           Implication(left, right.body), left))

    failure = None
    for rule, variable, premise, other in candidates:
        line = session.line_of(premise)
        hypothesis = session.hypothesis_of(premise) if line is None else None
        if line is None and hypothesis is None:
            continue
        if has_free(other, variable):
            source = (f"hypothesis {hypothesis + 1}" if line is None
                      else f"formula {line + 1}")
            failure = failure or FreeVariableViolation(
                f"variable {variable} occurs free in {source}")
            continue
        if session.tracked is not None and has_free(session.tracked, variable):
            failure = failure or FreeVariableViolation(
                f"rule uses quantifier over variable {variable}, "
                f"free in assumption {session.tracked.text}")
            continue
        if line is None:
            return Justification(rule, index=hypothesis, variable=variable,
                                 from_hypothesis=True)
        return Justification(rule, premises=(line,), variable=variable)
    if failure is not None:
        raise failure
    return None


def _quantifier_axiom(session: ProofSession, formula: Implication):
    left, right = formula.left, formula.right
    candidates = []
    if isinstance(left, Forall):
        candidates.append((FORALL_AXIOM, left.variable.name, left.body, right))
    if isinstance(right, Exists):
        candidates.append((EXISTS_AXIOM, right.variable.name, right.body, left))

    failure = None
    for number, variable, body, instance in candidates:
        context = match_substitution(body, variable, instance)
        if context is None:
            continue
        if context.captured:
            _, term, _ = context.captured[0]
            failure = failure or SubstitutionNotFree(
                f"term {term.text} is not free for substitution into "
                f"formula {body.text} in place of variable {variable}")
            continue
        return Justification(QUANTIFIER_AXIOM, index=number, variable=variable)
    if failure is not None:
        raise failure
    return None


def _induction(session: ProofSession, formula: Implication):
    premise, conclusion = formula.left, formula.right
    if not (isinstance(premise, Conjunction)
            and isinstance(premise.right, Forall)
            and isinstance(premise.right.body, Implication)):
        return None
    step = premise.right
    variable = step.variable.name

    if step.body.left != conclusion:
        raise InductionMismatch(
            f"induction step does not assume {conclusion.text}")
    if premise.left != substitute(conclusion, variable, Zero()):
        raise InductionMismatch(
            f"induction base is not {conclusion.text} with {variable} := 0")
    successor = Successor(Variable(variable))
    if step.body.right != substitute(conclusion, variable, successor):
        raise InductionMismatch(
            f"induction step does not conclude {conclusion.text} "
            f"with {variable} := {successor.text}")
    if not has_free(conclusion, variable):
        raise InductionMismatch(
            f"variable {variable} is not free in {conclusion.text}")
    return Justification(INDUCTION, index=INDUCTION_AXIOM, variable=variable)


def _modus_ponens(session: ProofSession, formula: Node):
    best = None
    for antecedent, implication in session.modus_ponens.get(formula.text, ()):
        line = session.expression_index.get(antecedent)
        if line is None:
            continue
        if best is None or (line, implication) < best:
            best = (line, implication)
    if best is None:
        return None
    return Justification(MODUS_PONENS, premises=best)


def _logic_axiom(session: ProofSession, formula: Node):
    for i, schema in enumerate(session.axioms.logic):
        if match(schema, formula) is not None:
            return Justification(LOGIC_AXIOM, index=i)
    return None


def _arithmetic_axiom(session: ProofSession, formula: Node):
    for i, schema in enumerate(session.axioms.arithmetic):
        if match(schema, formula) is not None:
            return Justification(ARITHMETIC_AXIOM, index=i)
    return None


def _hypothesis(session: ProofSession, formula: Node):
    index = session.hypothesis_of(formula)
    if index is None:
        return None
    return Justification(HYPOTHESIS, index=index)


IMPLICATION_RULES = (_quantifier_rule, _quantifier_axiom, _induction)
GENERAL_RULES = (_modus_ponens, _logic_axiom, _arithmetic_axiom, _hypothesis)


def verify_step(session: ProofSession, formula: Node) -> Justification:
    """
    Justify formula as the next line of the session, without logging it.

    Raises a VerificationFailure subclass if no rule applies.
    """
    failures = []
    if isinstance(formula, Implication):
        for rule in IMPLICATION_RULES:
            try:
                justification = rule(session, formula)
            except VerificationFailure as failure:
                failures.append(failure)
                continue
            if justification is not None:
                return justification

    for rule in GENERAL_RULES:
        justification = rule(session, formula)
        if justification is not None:
            return justification

    if failures:
        raise failures[0]
    raise Unproved("not proved")


def check_step(session: ProofSession, formula: Node) -> Justification:
    """Verify formula as the next line and log it. Failed lines are skipped."""
    try:
        justification = verify_step(session, formula)
    except VerificationFailure as failure:
        failure.line = session.skip(formula)
        raise
    session.log(formula, justification)
    return justification


# ── Check mode ───────────────────────────────────────────────────────────────

NOT_PROVED = "Not proved"


def incorrect_from(line: int, reason: str) -> str:
    """The diagnostic for a proof that breaks at 0-based `line`."""
    return f"Proof is incorrect starting from formula #{line + 1}: {reason}"


@dataclass
class CheckedLine:
    number: int
    text: str
    formula: Optional[Node] = None
    justification: Optional[Justification] = None
    error: str = ""

    @property
    def verdict(self) -> str:
        return self.justification.label if self.justification else NOT_PROVED


@dataclass
class CheckReport:
    header: str
    goal: Node
    lines: list = field(default_factory=list)

    @property
    def failures(self) -> int:
        return sum(1 for line in self.lines if line.justification is None)

    @property
    def proves_goal(self) -> bool:
        """Was the last line verified, and is it the declared goal?"""
        if not self.lines:
            return False
        last = self.lines[-1]
        return last.justification is not None and last.formula == self.goal


def check_proof(
    hypotheses: list,
    goal: str,
    lines: list,
    axioms=None,
    verbose: bool = True,
) -> CheckReport:
    """
    Check every line of a proof. Failures are counted, not fatal.

    Args:
        hypotheses: hypothesis formulas (text)
        goal:       the formula the proof claims to prove (text)
        lines:      proof lines (text), in order
        axioms:     AxiomTables; default: the fixed tables
        verbose:    report failures on stderr

    A hypothesis or goal that does not parse raises ParseError: without
    them no line can be judged.
    """
    session = ProofSession(
        axioms=axioms or default_axioms(),
        hypotheses=[parse_formula(h) for h in hypotheses],
    )
    report = CheckReport(
        header=",".join(hypotheses) + "|-" + goal,
        goal=parse_formula(goal),
    )

    for number, text in enumerate(lines, start=1):
        try:
            formula = parse_formula(text)
        except ParseError as error:
            session.skip()
            report.lines.append(CheckedLine(number, text, error=str(error)))
        else:
            try:
                justification = check_step(session, formula)
            except VerificationFailure as failure:
                report.lines.append(
                    CheckedLine(number, text, formula, error=failure.reason))
            else:
                report.lines.append(
                    CheckedLine(number, text, formula, justification))
                continue

        if verbose:
            print(incorrect_from(number - 1, report.lines[-1].error), file=sys.stderr)

    if verbose and not report.proves_goal:
        print("Proved formula does not match the goal", file=sys.stderr)
    return report
