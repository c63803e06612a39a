"""
Tests for the axiom tables.
"""

from hilbertproof.axioms import (
    ARITHMETIC_AXIOMS, EXISTS_AXIOM, FORALL_AXIOM, INDUCTION_AXIOM,
    LOGIC_AXIOMS, default_axioms, load_axioms,
)
from hilbertproof.core.matching import match_schema
from hilbertproof.core.parser import parse_formula


class TestTables:
    def test_sizes(self):
        axioms = default_axioms()
        assert len(axioms.logic) == 10
        assert len(axioms.arithmetic) == 8

    def test_structural_positions_follow_tables(self):
        assert FORALL_AXIOM + 1 == 11
        assert EXISTS_AXIOM + 1 == 12
        assert INDUCTION_AXIOM + 1 == 9

    def test_shared(self):
        assert default_axioms() is default_axioms()

    def test_load_is_fresh_but_equal(self):
        assert load_axioms() == default_axioms()
        assert load_axioms() is not default_axioms()

    def test_every_schema_matches_itself(self):
        for text in LOGIC_AXIOMS + ARITHMETIC_AXIOMS:
            schema = parse_formula(text)
            assert match_schema(schema, schema) is not None, text

    def test_no_schema_matches_another(self):
        schemas = [parse_formula(t) for t in LOGIC_AXIOMS]
        for i, schema in enumerate(schemas):
            for j, other in enumerate(schemas):
                if i < j:
                    assert match_schema(schema, other) is None or \
                        match_schema(other, schema) is None
