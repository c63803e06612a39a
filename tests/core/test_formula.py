"""
Unit tests for the formula model.

The core claims:
    - Identity is the canonical text: equal texts, equal nodes, equal hashes
    - Nodes are immutable
    - Successor chains collapse into one node with a count
    - Children that are binary nodes are parenthesised after a prefix
      operator and before primes
"""

import pytest

from hilbertproof.core.formula import (
    Addition, Application, Conjunction, Equality, Exists, Forall,
    Implication, Negation, Successor, Variable, Zero, leaf_name,
)


P = Application("P")
Q = Application("Q")
x = Variable("x")
y = Variable("y")


class TestCanonicalText:
    def test_binary_children_are_parenthesised(self):
        assert Implication(P, Q).text == "(P)->(Q)"

    def test_nested_implication(self):
        assert Implication(P, Implication(Q, P)).text == "(P)->((Q)->(P))"

    def test_predicate_with_arguments(self):
        assert Application("P", (x, Zero())).text == "P(x,0)"

    def test_negation_of_atom(self):
        assert Negation(P).text == "!P"

    def test_negation_of_binary(self):
        assert Negation(Conjunction(P, Q)).text == "!((P)&(Q))"

    def test_quantifier(self):
        assert Forall(x, Application("P", (x,))).text == "@xP(x)"
        assert Exists(x, Equality(x, y)).text == "?x((x)=(y))"

    def test_successor_of_sum(self):
        assert Successor(Addition(x, y)).text == "((x)+(y))'"


class TestIdentity:
    def test_equal_by_text(self):
        assert Implication(P, Q) == Implication(Application("P"), Application("Q"))

    def test_hash_follows_text(self):
        assert hash(Conjunction(P, Q)) == hash(Conjunction(P, Q))
        assert len({Conjunction(P, Q), Conjunction(P, Q)}) == 1

    def test_bound_variables_not_renamed(self):
        px = Application("P", (x,))
        py = Application("P", (y,))
        assert Forall(x, px) != Forall(y, py)

    def test_not_equal_to_strings(self):
        assert P != "P"

    def test_immutable(self):
        with pytest.raises(AttributeError):
            P.name = "Q"


class TestSuccessor:
    def test_chain_collapses(self):
        node = Successor(Successor(x), 2)
        assert node.count == 3
        assert node.base == x
        assert node.text == "x'''"

    def test_zero_count_rejected(self):
        with pytest.raises(ValueError):
            Successor(x, 0)

    def test_key_includes_count(self):
        assert Successor(x).key != Successor(x, 2).key

    def test_with_args_keeps_count(self):
        assert Successor(x, 2).with_args((Zero(),)) == Successor(Zero(), 2)


class TestLeaves:
    def test_leaf_name(self):
        assert leaf_name(x) == "x"
        assert leaf_name(P) == "P"
        assert leaf_name(Application("f", (x,))) is None
        assert leaf_name(Zero()) is None

    def test_predicate_case(self):
        assert P.is_predicate
        assert not Application("f", (x,)).is_predicate
