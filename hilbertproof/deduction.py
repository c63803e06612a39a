"""
Deduction theorem: turn a proof of E from Γ, H into a proof of H->E from Γ.

Each line of the original proof is first verified (with H tracked, so the
quantifier rules refuse variables free in H), then replaced by a short
derivation of H->line built from one of five fixed templates:

    identity.proof      the line is H itself          -> H->H
    axiom.proof         an axiom or a hypothesis of Γ  -> A, A->H->A, H->A
    modus_ponens.proof  B from A and A->B              (uses H->A, H->(A->B))
    forall.proof        A->@xB from A->B               (uses H->(A->B))
    exists.proof        ?xA->B from A->B               (uses H->(A->B))

Templates are formulas over the slots H, A, B (formula slots, written as
nullary predicates) and x (the quantified variable). They are filled in by
tree substitution; nothing is searched for.

Unlike check mode, the first bad line aborts the whole elaboration: every
later block relies on the H->... lines produced for the earlier ones.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from .axioms import default_axioms
from .core.formula import Implication, Node, Variable
from .core.matching import apply_bindings
from .core.parser import ParseError, parse_formula
from .core.session import ProofSession
from .core.verifier import (
    AXIOM_RULES, EXISTS_RULE, FORALL_RULE, HYPOTHESIS, MODUS_PONENS,
    Justification, check_step,
)


TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

TEMPLATE_FILES = {
    "identity": "identity.proof",
    "axiom": "axiom.proof",
    "modus_ponens": "modus_ponens.proof",
    "forall": "forall.proof",
    "exists": "exists.proof",
}


class DeductionError(Exception):
    """The proof cannot be elaborated at all (e.g. there is no hypothesis)."""
    pass


@dataclass(frozen=True)
class DeductionTemplates:
    identity: tuple
    axiom: tuple
    modus_ponens: tuple
    forall: tuple
    exists: tuple

    @classmethod
    def load(cls, directory: str = TEMPLATE_DIR) -> "DeductionTemplates":
        """Read and parse the five template files."""
        templates = {}
        for name, filename in TEMPLATE_FILES.items():
            with open(os.path.join(directory, filename), encoding="utf-8") as f:
                templates[name] = tuple(
                    parse_formula(line) for line in f if line.strip())
        return cls(**templates)


@lru_cache(maxsize=None)
def default_templates() -> DeductionTemplates:
    return DeductionTemplates.load()


def _fill(template: tuple, hypothesis: Node, **slots) -> list:
    bindings = {"H": hypothesis}
    for name, node in slots.items():
        bindings[name] = Variable(node) if name == "x" else node
    return [apply_bindings(line, bindings) for line in template]


def _lift(formula: Node, hypothesis: Node, templates: DeductionTemplates) -> list:
    """Derive H->formula when formula holds without H (or is H)."""
    if formula == hypothesis:
        return _fill(templates.identity, hypothesis)
    return _fill(templates.axiom, hypothesis, A=formula)


def elaborate_step(
    session: ProofSession,
    formula: Node,
    justification: Justification,
    templates: DeductionTemplates,
) -> list:
    """
    Formulas deriving H->formula, where H is session.tracked.

    Assumes the derivations for all earlier lines are already in the output.
    """
    hypothesis = session.tracked
    rule = justification.rule

    if formula == hypothesis or rule in AXIOM_RULES or rule == HYPOTHESIS:
        return _lift(formula, hypothesis, templates)

    if rule == MODUS_PONENS:
        antecedent = session.formulas[justification.premises[0]]
        return _fill(templates.modus_ponens, hypothesis, A=antecedent, B=formula)

    if rule == FORALL_RULE:
        template = templates.forall
        left, right = formula.left, formula.right.body
    elif rule == EXISTS_RULE:
        template = templates.exists
        left, right = formula.left.body, formula.right
    else:
        raise DeductionError(f"no template for rule {rule!r}")

    prefix = []
    if justification.from_hypothesis:
        # The premise was never a line, so H->premise is not in the output yet.
        prefix = _lift(Implication(left, right), hypothesis, templates)
    return prefix + _fill(template, hypothesis, A=left, B=right,
                          x=justification.variable)


@dataclass
class Deduction:
    """The elaborated proof: Γ |- H->goal, and its lines."""
    hypotheses: list
    goal: Node
    formulas: list

    @property
    def header(self) -> str:
        return ",".join(self.hypotheses[:-1]) + "|-" + self.goal.text


def deduce(
    hypotheses: list,
    goal: str,
    lines: list,
    templates=None,
    axioms=None,
) -> Deduction:
    """
    Elaborate a proof of goal from hypotheses into one of H->goal, where H
    is the last hypothesis.

    Raises ParseError or VerificationFailure (with `line` set) on the first
    bad line, and DeductionError if there is no hypothesis to discharge.
    """
    if not hypotheses:
        raise DeductionError("no hypothesis to discharge")
    templates = templates or default_templates()
    parsed = [parse_formula(h) for h in hypotheses]
    session = ProofSession(
        axioms=axioms or default_axioms(),
        hypotheses=parsed,
        tracked=parsed[-1],
    )

    formulas = []
    for text in lines:
        try:
            formula = parse_formula(text)
        except ParseError as error:
            error.line = session.skip()
            raise
        justification = check_step(session, formula)
        formulas.extend(elaborate_step(session, formula, justification, templates))

    return Deduction(
        hypotheses=list(hypotheses),
        goal=Implication(parsed[-1], parse_formula(goal)),
        formulas=formulas,
    )
