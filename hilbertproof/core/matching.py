"""
Schema matching, free variables and substitution.

A schema is an ordinary formula whose leaves act as pattern variables:
"A->B->A" matches "(P&Q)->(R|S)->(P&Q)" with {A: P&Q, B: R|S}. Repeated
pattern variables must bind to the same subtree everywhere.

Matching is one-way (only the schema has pattern variables), so unlike
full unification there is no occurs check and no chasing of bindings.

The context threaded through the recursion is an immutable value:
    bindings   pattern name -> bound subtree
    bound      schema binder name -> candidate binder name, for the
               quantifiers on the path from the root to the current node
    captured   (pattern name, subtree, captured names) triples recorded
               in substitution-freedom mode
Every step returns an updated copy, or None when the match fails.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from .formula import (
    Node, Quantifier, Successor, Variable, Zero, leaf_name,
)


@dataclass(frozen=True)
class MatchContext:
    bindings: dict = field(default_factory=dict)
    bound: dict = field(default_factory=dict)
    captured: tuple = ()

    def bind(self, name: str, node: Node) -> "MatchContext":
        return replace(self, bindings={**self.bindings, name: node})

    def enter(self, schema_name: str, candidate_name: str) -> "MatchContext":
        return replace(self, bound={**self.bound, schema_name: candidate_name})


# ── Free variables and substitution ─────────────────────────────────────────

def free_variables(node: Node) -> frozenset:
    """Names of the variables occurring free in node."""
    if isinstance(node, Variable):
        return frozenset({node.name})
    if isinstance(node, Quantifier):
        return free_variables(node.body) - {node.variable.name}
    result = frozenset()
    for arg in node.args:
        result |= free_variables(arg)
    return result


def has_free(node: Node, name: str) -> bool:
    """Does variable `name` occur free anywhere in node?"""
    if isinstance(node, Variable):
        return node.name == name
    if isinstance(node, Quantifier):
        return node.variable.name != name and has_free(node.body, name)
    return any(has_free(arg, name) for arg in node.args)


def substitute(node: Node, name: str, term: Node) -> Node:
    """
    node[name := term]: replace every free occurrence of variable `name`.

    No renaming is done. Only used with terms that cannot be captured
    (0, x'), or after match_substitution has ruled capture out.
    """
    if isinstance(node, Variable):
        return term if node.name == name else node
    if isinstance(node, Quantifier):
        if node.variable.name == name:
            return node
        return node.with_args((node.variable, substitute(node.body, name, term)))
    if node.is_leaf():
        return node
    return node.with_args([substitute(arg, name, term) for arg in node.args])


def apply_bindings(node: Node, bindings: dict) -> Node:
    """
    Replace, simultaneously, every named leaf whose name is in bindings.

    Quantifier binders are renamed too (the replacement must then be a
    Variable). This is how templates are filled in; it is not
    capture-avoiding and is not meant to be.
    """
    name = leaf_name(node)
    if name is not None:
        return bindings.get(name, node)
    if node.is_leaf():
        return node
    if isinstance(node, Quantifier):
        variable = bindings.get(node.variable.name, node.variable)
        if not isinstance(variable, Variable):
            raise ValueError(f"binder {node.variable.name} bound to non-variable {variable}")
        return node.with_args((variable, apply_bindings(node.body, bindings)))
    return node.with_args([apply_bindings(arg, bindings) for arg in node.args])


# ── Matching ─────────────────────────────────────────────────────────────────

def match(schema: Node, candidate: Node, context: Optional[MatchContext] = None,
          pattern_vars=None, check_freedom: bool = False) -> Optional[MatchContext]:
    """
    Match schema against candidate.

    Args:
        schema:        tree whose named leaves are pattern variables
        candidate:     tree to match
        context:       bindings so far (default: empty)
        pattern_vars:  if given, only these leaf names are pattern
                       variables; every other leaf must match literally
        check_freedom: record in `captured` every pattern leaf whose
                       subtree has a free variable bound on the path

    Returns the extended context, or None if the trees do not match.
    """
    if context is None:
        context = MatchContext()

    if schema.is_leaf():
        return _match_leaf(schema, candidate, context, pattern_vars, check_freedom)

    # a' against x''': peel the difference off the candidate.
    if (isinstance(schema, Successor) and isinstance(candidate, Successor)
            and schema.count < candidate.count):
        peeled = Successor(candidate.base, candidate.count - schema.count)
        return match(schema.base, peeled, context, pattern_vars, check_freedom)

    if schema.key != candidate.key or len(schema.args) != len(candidate.args):
        return None

    if isinstance(schema, Quantifier):
        binder, target = schema.variable.name, candidate.variable.name
        if pattern_vars is not None and binder != target:
            return None
        inner = match(schema.body, candidate.body,
                      context.enter(binder, target), pattern_vars, check_freedom)
        if inner is None:
            return None
        return replace(inner, bound=context.bound)

    for s_arg, c_arg in zip(schema.args, candidate.args):
        context = match(s_arg, c_arg, context, pattern_vars, check_freedom)
        if context is None:
            return None
    return context


def _match_leaf(schema, candidate, context, pattern_vars, check_freedom):
    if isinstance(schema, Zero):
        return context if isinstance(candidate, Zero) else None

    name = leaf_name(schema)
    if name in context.bound:
        # Bound by a quantifier on the path: not a pattern variable here.
        if isinstance(candidate, Variable) and candidate.name == context.bound[name]:
            return context
        return None

    if pattern_vars is not None and name not in pattern_vars:
        return context if schema.text == candidate.text else None

    if check_freedom:
        captured = free_variables(candidate) & set(context.bound.values())
        if captured:
            context = replace(
                context,
                captured=context.captured + ((name, candidate, frozenset(captured)),),
            )

    if name in context.bindings:
        if context.bindings[name].text != candidate.text:
            return None  # inconsistent binding
        return context
    return context.bind(name, candidate)


def match_schema(schema: Node, candidate: Node) -> Optional[dict]:
    """Plain schema match. Returns the bindings, or None."""
    context = match(schema, candidate)
    return None if context is None else context.bindings


def match_substitution(body: Node, name: str, candidate: Node) -> Optional[MatchContext]:
    """
    Is candidate equal to body[name := t] for some term t?

    Only the free occurrences of `name` in body act as a pattern variable;
    everything else, binders included, must agree literally. On success
    the context holds t under `name` (absent when `name` is not free in
    body) and lists in `captured` every occurrence where t would be
    captured, i.e. where t is not free for `name`.
    """
    return match(body, candidate, pattern_vars={name}, check_freedom=True)
