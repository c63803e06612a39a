"""
The fixed axiom tables.

Propositional schemas use uppercase pattern letters that stand for whole
formulas; arithmetic schemas use lowercase letters that stand for terms.
Both are ordinary parsed formulas, matched with core.matching.match.

    1.  A->B->A
    2.  (A->B->C)->(A->B)->(A->C)
    3.  A->B->A&B
    4.  A&B->A
    5.  A&B->B
    6.  A->A|B
    7.  B->A|B
    8.  (A->C)->(B->C)->(A|B->C)
    9.  (A->B)->(A->!B)->!A
    10. !!A->A

    11. @xA->A[x:=t]        12. A[x:=t]->?xA
        (t free for x in A; checked structurally by the verifier)

    A1. a=b->a'=b'          A5. a+b'=(a+b)'
    A2. (a=b)->(a=c)->(b=c) A6. a+0=a
    A3. a'=b'->a=b          A7. a*0=0
    A4. !a'=0               A8. a*b'=a*b+a

    A9. A[x:=0]&@x(A->A[x:=x'])->A   (x free in A; checked structurally)

The tables are parsed once and shared read-only.
"""

from dataclasses import dataclass
from functools import lru_cache

from .core.parser import parse_formula


LOGIC_AXIOMS = [
    "A->B->A",
    "(A->B->C)->(A->B)->(A->C)",
    "A->B->A&B",
    "A&B->A",
    "A&B->B",
    "A->A|B",
    "B->A|B",
    "(A->C)->(B->C)->(A|B->C)",
    "(A->B)->(A->!B)->!A",
    "!!A->A",
]

ARITHMETIC_AXIOMS = [
    "a=b->a'=b'",
    "(a=b)->(a=c)->(b=c)",
    "a'=b'->a=b",
    "!a'=0",
    "a+b'=(a+b)'",
    "a+0=a",
    "a*0=0",
    "a*b'=a*b+a",
]

# Positions given to the structurally checked schemas, continuing the
# tables above: they print as 11, 12 and A9.
FORALL_AXIOM = len(LOGIC_AXIOMS)
EXISTS_AXIOM = len(LOGIC_AXIOMS) + 1
INDUCTION_AXIOM = len(ARITHMETIC_AXIOMS)


@dataclass(frozen=True)
class AxiomTables:
    logic: tuple
    arithmetic: tuple


def load_axioms() -> AxiomTables:
    """Parse the schema tables."""
    return AxiomTables(
        logic=tuple(parse_formula(s) for s in LOGIC_AXIOMS),
        arithmetic=tuple(parse_formula(s) for s in ARITHMETIC_AXIOMS),
    )


@lru_cache(maxsize=None)
def default_axioms() -> AxiomTables:
    """The fixed tables, parsed on first use and shared afterwards."""
    return load_axioms()
