"""
Formula and term trees.

Every formula or term is an immutable node. The node's canonical text is
computed once, in the constructor, and it is the only notion of identity:
two nodes are equal iff their texts are equal. Bound variables are never
renamed, so "@xP(x)" and "@yP(y)" are different formulas.

Formulas:
    Implication, Disjunction, Conjunction   binary connectives
    Negation                                "!"
    Forall, Exists                          "@x", "?x" (binder, body)
    Equality                                term "=" term
    Application                             predicate "P", "P(a,b)"

Terms:
    Addition, Multiplication                "+", "*"
    Successor                               base followed by primes
    Zero                                    "0"
    Variable                                "x", "x1"
    Application                             function "f(x)"

Predicates and functions share one class; uppercase names are predicates.
"""


class Node:
    """Common base. Subclasses set `args` and then call Node.__init__."""
    __slots__ = ("args", "text")
    symbol = ""

    def __init__(self, args=()):
        object.__setattr__(self, "args", tuple(args))
        object.__setattr__(self, "text", self.render())

    def render(self) -> str:
        raise NotImplementedError

    @property
    def key(self):
        """What must agree, besides arity, for two nodes to have the same shape."""
        return (type(self), self.symbol)

    def is_leaf(self) -> bool:
        return not self.args

    def with_args(self, args):
        """Same tag, new children."""
        return type(self)(*args)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        return isinstance(other, Node) and self.text == other.text

    def __hash__(self):
        return hash(self.text)

    def __str__(self):
        return self.text

    def __repr__(self):
        return f"{type(self).__name__}({self.text!r})"


def _wrapped(node: Node) -> str:
    """Text of a child that sits after a prefix operator or before primes."""
    if isinstance(node, BinaryNode):
        return "(" + node.text + ")"
    return node.text


# ── Binary nodes ─────────────────────────────────────────────────────────────

class BinaryNode(Node):
    __slots__ = ()

    def __init__(self, left: Node, right: Node):
        super().__init__((left, right))

    @property
    def left(self) -> Node:
        return self.args[0]

    @property
    def right(self) -> Node:
        return self.args[1]

    def render(self) -> str:
        return f"({self.left.text}){self.symbol}({self.right.text})"


class Implication(BinaryNode):
    __slots__ = ()
    symbol = "->"


class Disjunction(BinaryNode):
    __slots__ = ()
    symbol = "|"


class Conjunction(BinaryNode):
    __slots__ = ()
    symbol = "&"


class Equality(BinaryNode):
    __slots__ = ()
    symbol = "="


class Addition(BinaryNode):
    __slots__ = ()
    symbol = "+"


class Multiplication(BinaryNode):
    __slots__ = ()
    symbol = "*"


# ── Prefix nodes ─────────────────────────────────────────────────────────────

class Negation(Node):
    __slots__ = ()
    symbol = "!"

    def __init__(self, operand: Node):
        super().__init__((operand,))

    @property
    def operand(self) -> Node:
        return self.args[0]

    def render(self) -> str:
        return self.symbol + _wrapped(self.operand)


class Quantifier(Node):
    """A binder variable and the body it scopes over."""
    __slots__ = ()

    def __init__(self, variable: "Variable", body: Node):
        super().__init__((variable, body))

    @property
    def variable(self) -> "Variable":
        return self.args[0]

    @property
    def body(self) -> Node:
        return self.args[1]

    def render(self) -> str:
        return self.symbol + self.variable.text + _wrapped(self.body)


class Forall(Quantifier):
    __slots__ = ()
    symbol = "@"


class Exists(Quantifier):
    __slots__ = ()
    symbol = "?"


# ── Terms and atoms ──────────────────────────────────────────────────────────

class Successor(Node):
    """`count` applications of the successor to `base`. Chains are collapsed."""
    __slots__ = ("count",)
    symbol = "'"

    def __init__(self, base: Node, count: int = 1):
        if count < 1:
            raise ValueError(f"successor count must be positive, got {count}")
        if isinstance(base, Successor):
            count += base.count
            base = base.base
        object.__setattr__(self, "count", count)
        super().__init__((base,))

    @property
    def base(self) -> Node:
        return self.args[0]

    @property
    def key(self):
        return (Successor, self.count)

    def with_args(self, args):
        return Successor(args[0], self.count)

    def render(self) -> str:
        return _wrapped(self.base) + self.symbol * self.count


class Zero(Node):
    __slots__ = ()
    symbol = "0"

    def __init__(self):
        super().__init__(())

    def with_args(self, args):
        return self

    def render(self) -> str:
        return self.symbol


class Variable(Node):
    """Lowercase leaf: an object variable, or a pattern letter in a schema."""
    __slots__ = ("name",)

    def __init__(self, name: str):
        object.__setattr__(self, "name", name)
        super().__init__(())

    @property
    def key(self):
        return (Variable, self.name)

    def with_args(self, args):
        return self

    def render(self) -> str:
        return self.name


class Application(Node):
    """
    Named application. Uppercase names are predicates (possibly nullary,
    which is how propositional letters are written); lowercase names are
    functions and always carry arguments.
    """
    __slots__ = ("name",)

    def __init__(self, name: str, args=()):
        object.__setattr__(self, "name", name)
        super().__init__(args)

    @property
    def key(self):
        return (Application, self.name)

    @property
    def is_predicate(self) -> bool:
        return self.name[:1].isupper()

    def with_args(self, args):
        return Application(self.name, args)

    def render(self) -> str:
        if not self.args:
            return self.name
        return self.name + "(" + ",".join(arg.text for arg in self.args) + ")"


def leaf_name(node: Node):
    """Name of a named leaf (variable or nullary predicate), else None."""
    if isinstance(node, (Variable, Application)) and node.is_leaf():
        return node.name
    return None
