"""
Proof files: reading the input format and writing results.

Input:
    first line     hypotheses separated by commas, "|-", the goal
    other lines    one formula per line
Whitespace inside lines is dropped and blank lines are ignored. Commas
nested in parentheses (predicate arguments) do not split hypotheses.
"""

from dataclasses import dataclass, field

from .verifier import CheckReport


SEPARATOR = "|-"


@dataclass
class ProofText:
    hypotheses: list = field(default_factory=list)
    goal: str = ""
    lines: list = field(default_factory=list)


def split_top_level(text: str, separator: str = ",") -> list:
    """Split on separator, ignoring occurrences inside parentheses."""
    parts = []
    buffer = ""
    depth = 0
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if depth == 0 and char == separator:
            parts.append(buffer)
            buffer = ""
        else:
            buffer += char
    parts.append(buffer)
    return [part for part in parts if part]


def read_proof(text: str) -> ProofText:
    """Parse the contents of a proof file (formulas stay as text)."""
    rows = ["".join(row.split()) for row in text.splitlines()]
    rows = [row for row in rows if row]
    if not rows or SEPARATOR not in rows[0]:
        raise ValueError(f"first line must contain {SEPARATOR!r}")
    hypotheses, goal = rows[0].split(SEPARATOR, 1)
    return ProofText(
        hypotheses=split_top_level(hypotheses),
        goal=goal,
        lines=rows[1:],
    )


def load_proof(path: str) -> ProofText:
    with open(path, encoding="utf-8") as f:
        return read_proof(f.read())


def render_check(report: CheckReport) -> str:
    """Header, then "(i) formula (justification)" per line."""
    rows = [report.header]
    for line in report.lines:
        rows.append(f"({line.number}) {line.text} ({line.verdict})")
    return "\n".join(rows)


def render_deduction(deduction) -> str:
    """Header, then the elaborated formulas, one per line."""
    return "\n".join([deduction.header] + [f.text for f in deduction.formulas])

