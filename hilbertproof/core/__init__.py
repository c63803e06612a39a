from .formula import (
    Node, Implication, Disjunction, Conjunction, Negation, Forall, Exists,
    Equality, Addition, Multiplication, Successor, Zero, Variable, Application,
)
from .parser import ParseError, parse_formula
from .matching import (
    MatchContext, match, match_schema, match_substitution,
    free_variables, has_free, substitute, apply_bindings,
)
from .session import ProofSession
from .verifier import (
    Justification, VerificationFailure, Unproved, FreeVariableViolation,
    SubstitutionNotFree, InductionMismatch,
    verify_step, check_step, check_proof, CheckReport, CheckedLine,
)
from .proof import ProofText, read_proof, load_proof, render_check, render_deduction

__all__ = [
    "Node", "Implication", "Disjunction", "Conjunction", "Negation",
    "Forall", "Exists", "Equality", "Addition", "Multiplication",
    "Successor", "Zero", "Variable", "Application",
    "ParseError", "parse_formula",
    "MatchContext", "match", "match_schema", "match_substitution",
    "free_variables", "has_free", "substitute", "apply_bindings",
    "ProofSession",
    "Justification", "VerificationFailure", "Unproved",
    "FreeVariableViolation", "SubstitutionNotFree", "InductionMismatch",
    "verify_step", "check_step", "check_proof", "CheckReport", "CheckedLine",
    "ProofText", "read_proof", "load_proof", "render_check", "render_deduction",
]
