"""
hilbertproof: checker for Hilbert-style proofs in first-order Peano arithmetic.

Each proof line must be an axiom (ten propositional schemas, the two
quantifier schemas, the eight Peano axioms and induction), a hypothesis,
or follow from earlier lines by modus ponens or a quantifier rule.
A proof from Γ, H can also be rewritten into a proof of H->E from Γ
(the deduction theorem).

Usage:
    python -m hilbertproof task2.in task2.out              # check
    python -m hilbertproof task2.in task2.out elaborate    # deduction theorem
"""

from .core.formula import Node
from .core.parser import ParseError, parse_formula
from .core.verifier import (
    Justification, VerificationFailure, check_proof, check_step, verify_step,
)
from .core.session import ProofSession
from .core.proof import read_proof, load_proof, render_check, render_deduction
from .axioms import AxiomTables, default_axioms, load_axioms
from .deduction import (
    Deduction, DeductionError, DeductionTemplates, deduce, default_templates,
)

__all__ = [
    "Node", "ParseError", "parse_formula",
    "Justification", "VerificationFailure", "check_proof", "check_step", "verify_step",
    "ProofSession",
    "read_proof", "load_proof", "render_check", "render_deduction",
    "AxiomTables", "default_axioms", "load_axioms",
    "Deduction", "DeductionError", "DeductionTemplates", "deduce", "default_templates",
]
