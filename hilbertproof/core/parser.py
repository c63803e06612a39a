"""
Formula parser.

A PEG grammar (parsimonious) plus a visitor that builds formula.py nodes.

Precedence, lowest first: "->" (right associative), "|", "&", then the
unary forms, then arithmetic terms ("+", "*", successor primes, atoms).

A parenthesised group is ambiguous: "(a+b)=c" opens a term, "(A->B)&C"
opens a formula. Ordered choice settles it: `unary` tries `equality`
before `group`, so the group is read as a term only when the matching
")" is followed by the rest of an equation, and is re-read as a formula
otherwise. Equality is tried after `predicate`, so an uppercase name is
never taken for the left side of "=".
"""

from parsimonious.grammar import Grammar
from parsimonious.nodes import NodeVisitor
from parsimonious import exceptions

from .formula import (
    Addition, Application, Conjunction, Disjunction, Equality, Exists,
    Forall, Implication, Multiplication, Negation, Successor, Variable, Zero,
)


formula_grammar = Grammar(
    r"""
    implication   = disjunction implies_tail?
    implies_tail  = "->" implication
    disjunction   = conjunction or_tail*
    or_tail       = "|" conjunction
    conjunction   = unary and_tail*
    and_tail      = "&" unary
    unary         = negation / universal / existential / predicate / equality / group
    negation      = "!" unary
    universal     = "@" variable unary
    existential   = "?" variable unary
    group         = "(" implication ")"
    predicate     = pred_name arguments?
    equality      = term "=" term
    arguments     = "(" term argument_tail* ")"
    argument_tail = "," term
    term          = product plus_tail*
    plus_tail     = "+" product
    product       = successor times_tail*
    times_tail    = "*" successor
    successor     = atom primes
    atom          = application / variable / term_group / zero
    application   = fn_name arguments
    term_group    = "(" term ")"
    zero          = "0"
    pred_name     = ~"[A-Z][0-9]*"
    fn_name       = ~"[a-z][0-9]*"
    variable      = ~"[a-z][0-9]*"
    primes        = ~"['’]*"
    """
)

# Rule name -> what the user was expected to write there.
EXPECTED = {
    "implication": "formula",
    "implies_tail": "'->'",
    "disjunction": "formula",
    "conjunction": "formula",
    "unary": "formula",
    "negation": "'!'",
    "universal": "'@'",
    "existential": "'?'",
    "group": "'('",
    "predicate": "predicate",
    "pred_name": "predicate name",
    "equality": "'='",
    "arguments": "'('",
    "argument_tail": "',' or ')'",
    "term": "term",
    "plus_tail": "'+'",
    "product": "term",
    "times_tail": "'*'",
    "successor": "term",
    "atom": "term",
    "application": "function application",
    "term_group": "'('",
    "zero": "'0'",
    "fn_name": "function name",
    "variable": "variable",
}


class ParseError(ValueError):
    """A formula that does not follow the grammar."""

    def __init__(self, text: str, position: int, expected: str = ""):
        self.text = text
        self.position = position
        self.expected = expected
        self.line = None
        if expected:
            message = f"expected {expected} at position {position} in {text!r}"
        elif position < len(text):
            message = f"unexpected {text[position]!r} at position {position} in {text!r}"
        else:
            message = f"unexpected end of formula in {text!r}"
        super().__init__(message)


def _many(children):
    """Children of a `*` or `?` rule: parsimonious hands back the bare node when empty."""
    return children if isinstance(children, list) else []


def _fold(head, tails, node_class):
    result = head
    for operand in _many(tails):
        result = node_class(result, operand)
    return result


class FormulaVisitor(NodeVisitor):
    def visit_implication(self, node, visited_children):
        left, tail = visited_children
        tail = _many(tail)
        return Implication(left, tail[0]) if tail else left

    def visit_implies_tail(self, node, visited_children):
        return visited_children[1]

    def visit_disjunction(self, node, visited_children):
        return _fold(visited_children[0], visited_children[1], Disjunction)

    def visit_or_tail(self, node, visited_children):
        return visited_children[1]

    def visit_conjunction(self, node, visited_children):
        return _fold(visited_children[0], visited_children[1], Conjunction)

    def visit_and_tail(self, node, visited_children):
        return visited_children[1]

    def visit_unary(self, node, visited_children):
        return visited_children[0]

    def visit_negation(self, node, visited_children):
        return Negation(visited_children[1])

    def visit_universal(self, node, visited_children):
        return Forall(visited_children[1], visited_children[2])

    def visit_existential(self, node, visited_children):
        return Exists(visited_children[1], visited_children[2])

    def visit_group(self, node, visited_children):
        return visited_children[1]

    def visit_predicate(self, node, visited_children):
        name, args = visited_children
        args = _many(args)
        return Application(name, args[0] if args else ())

    def visit_equality(self, node, visited_children):
        return Equality(visited_children[0], visited_children[2])

    def visit_arguments(self, node, visited_children):
        return [visited_children[1]] + _many(visited_children[2])

    def visit_argument_tail(self, node, visited_children):
        return visited_children[1]

    def visit_term(self, node, visited_children):
        return _fold(visited_children[0], visited_children[1], Addition)

    def visit_plus_tail(self, node, visited_children):
        return visited_children[1]

    def visit_product(self, node, visited_children):
        return _fold(visited_children[0], visited_children[1], Multiplication)

    def visit_times_tail(self, node, visited_children):
        return visited_children[1]

    def visit_successor(self, node, visited_children):
        base, count = visited_children
        return Successor(base, count) if count else base

    def visit_primes(self, node, visited_children):
        return len(node.text)

    def visit_atom(self, node, visited_children):
        return visited_children[0]

    def visit_application(self, node, visited_children):
        return Application(visited_children[0], visited_children[1])

    def visit_term_group(self, node, visited_children):
        return visited_children[1]

    def visit_zero(self, node, visited_children):
        return Zero()

    def visit_pred_name(self, node, visited_children):
        return node.text

    def visit_fn_name(self, node, visited_children):
        return node.text

    def visit_variable(self, node, visited_children):
        return Variable(node.text)

    def generic_visit(self, node, visited_children):
        return visited_children or node


def parse_formula(text: str):
    """Parse one formula. Whitespace is ignored. Raises ParseError."""
    text = "".join(text.split())
    try:
        tree = formula_grammar.parse(text)
    except exceptions.IncompleteParseError as inst:
        raise ParseError(text, inst.pos) from None
    except exceptions.ParseError as inst:
        name = getattr(inst.expr, "name", "")
        raise ParseError(text, inst.pos, EXPECTED.get(name, "formula")) from None
    return FormulaVisitor().visit(tree)
