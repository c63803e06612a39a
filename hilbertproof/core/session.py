"""
Proof session state.

One ProofSession belongs to one run over one proof. It holds the
hypotheses, the lines attempted so far and the two indices the verifier
searches:

    expression_index   canonical text -> first verified line asserting it
    modus_ponens       consequent text -> [(antecedent text, line), ...]
                       one entry per verified implication, in line order

Everything is append-only. A line enters the indices only after it has
been verified, so no line can be justified by itself or by a later one.
Lines that failed keep their position (for numbering) but are never
indexed.
"""

from dataclasses import dataclass, field
from typing import Optional

from .formula import Implication, Node


@dataclass
class ProofSession:
    axioms: object
    hypotheses: list = field(default_factory=list)
    tracked: Optional[Node] = None
    formulas: list = field(default_factory=list)
    justifications: list = field(default_factory=list)
    hypothesis_index: dict = field(default_factory=dict)
    expression_index: dict = field(default_factory=dict)
    modus_ponens: dict = field(default_factory=dict)

    def __post_init__(self):
        for i, hypothesis in enumerate(self.hypotheses):
            self.hypothesis_index.setdefault(hypothesis.text, i)

    @property
    def next_line(self) -> int:
        return len(self.formulas)

    def line_of(self, formula: Node) -> Optional[int]:
        return self.expression_index.get(formula.text)

    def hypothesis_of(self, formula: Node) -> Optional[int]:
        return self.hypothesis_index.get(formula.text)

    def log(self, formula: Node, justification) -> int:
        """Record a verified line and index it. Returns its line number."""
        index = self.next_line
        self.formulas.append(formula)
        self.justifications.append(justification)
        if formula.text in self.expression_index:
            return index
        self.expression_index[formula.text] = index
        if isinstance(formula, Implication):
            self.modus_ponens.setdefault(formula.right.text, []).append(
                (formula.left.text, index))
        return index

    def skip(self, formula: Optional[Node] = None) -> int:
        """Record a line that failed. It keeps its number but is not indexed."""
        index = self.next_line
        self.formulas.append(formula)
        self.justifications.append(None)
        return index
