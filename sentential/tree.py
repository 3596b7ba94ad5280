"""ExpressionTree: a parsed sentential-logic expression plus its variables."""

import logging
import typing as t

from pyrsistent import PMap, pmap

from . import enumeration, nodes
from .connectives import Operator
from .enumeration import Assignment
from .errors import InvalidExpression
from .nodes import Constant, Node, OperatorNode, Variable
from .notation import DEFAULT_NOTATION, OperatorNotation
from .parser import parse

logger = logging.getLogger(__name__)

Variables: t.TypeAlias = PMap[str, bool | None]


def _is_variable_name(name: str) -> bool:
    return name[:1].isupper() and all(c.isdigit() for c in name[1:])


class ExpressionTree:
    """Expression tree for logical expressions in SL.

    Owns its root node outright; nothing outside the tree holds a reference
    into it. Composing trees (``and_``, ``or_``, ...) copies the operands.

    ``evaluate()`` memoizes its result. Every method that changes the
    structure or the variable values drops the memo, so a tree is not safe to
    evaluate from several threads at once; use ``copy()`` per thread.
    """

    def __init__(self, root: Node, variables: t.Mapping[str, bool | None] | None = None) -> None:
        self._root = root
        if variables is None:
            self._vars: Variables = pmap({n: None for n in nodes.variable_names(root)})
        else:
            self._vars = pmap(variables)
        self._cache: bool | None = None

    # --- construction ---

    @classmethod
    def from_string(
        cls, expression: str, notation: OperatorNotation | None = None
    ) -> "ExpressionTree":
        """Parse an infix expression.

        Without a notation every default alias is accepted (``&``, ``*``,
        ``∧``, ``^``, ``⋅`` for conjunction and so on); with one, only its
        symbols are.
        """
        return cls(parse(expression, notation))

    @classmethod
    def from_node(cls, node: Node) -> "ExpressionTree":
        """Build a tree from a copy of ``node``; the caller keeps the original."""
        return cls(nodes.clone(node))

    @classmethod
    def constant(cls, value: bool) -> "ExpressionTree":
        return cls(Constant(value))

    @classmethod
    def true(cls) -> "ExpressionTree":
        return cls.constant(True)

    @classmethod
    def false(cls) -> "ExpressionTree":
        return cls.constant(False)

    @classmethod
    def variable(cls, name: str) -> "ExpressionTree":
        name = name.strip()
        if not _is_variable_name(name):
            raise InvalidExpression(f"not a variable name: {name!r}")
        return cls(Variable(name))

    def copy(self) -> "ExpressionTree":
        other = ExpressionTree(nodes.clone(self._root), self._vars)
        other._cache = self._cache
        return other

    # --- accessors ---

    @property
    def root(self) -> Node:
        """The tree's own root node. Read it, don't mutate it: changes made
        through it bypass the memo. Use ``copy()`` or ``nodes.clone`` first."""
        return self._root

    @property
    def variables(self) -> Variables:
        return self._vars

    def main_connective(self) -> Operator | None:
        """NOT for a denied root, otherwise the root's operator (None for a leaf)."""
        if self._root.negation.is_denied():
            return Operator.NOT
        if isinstance(self._root, OperatorNode):
            return self._root.operator
        return None

    def main_conn_non_tilde(self) -> Operator | None:
        if isinstance(self._root, OperatorNode) and not self._root.negation.is_denied():
            return self._root.operator
        return None

    # --- variables ---

    def _invalidate(self) -> None:
        self._cache = None

    def set_variable(self, name: str, value: bool) -> None:
        """Give a value to a variable of the tree. Unknown names are ignored."""
        if name in self._vars and self._vars[name] != value:
            self._vars = self._vars.set(name, value)
            self._invalidate()

    def set_variables(self, values: t.Mapping[str, bool]) -> None:
        known = {n: v for n, v in values.items() if n in self._vars}
        if known:
            self._vars = self._vars.update(known)
            self._invalidate()

    def _adopt_variables(self, other: "ExpressionTree") -> None:
        # names we already have keep their values
        self._vars = other._vars.update(self._vars)

    def replace_variable(self, name: str, expression: "ExpressionTree") -> "ExpressionTree":
        """Substitute a copy of ``expression`` for every occurrence of ``name``."""
        return self.replace_variables({name: expression})

    def replace_variables(
        self, replacements: t.Mapping[str, "ExpressionTree"]
    ) -> "ExpressionTree":
        present = {n: e for n, e in replacements.items() if n in self._vars}
        if not present:
            return self
        # drop every replaced name before adopting the new ones
        for n in present:
            self._vars = self._vars.discard(n)
        for expression in present.values():
            self._adopt_variables(expression)
        self._root = nodes.substitute(self._root, {n: e._root for n, e in present.items()})
        self._invalidate()
        return self

    def replace_expression(self, old: "ExpressionTree", new: "ExpressionTree") -> "ExpressionTree":
        """Replace every occurrence of ``old`` (negated or not) with ``new``."""
        self._root = nodes.replace_matching(self._root, old._root, new._root)
        variables = {}
        for n in nodes.variable_names(self._root):
            value = self._vars.get(n)
            variables[n] = value if value is not None else new._vars.get(n)
        self._vars = pmap(variables)
        self._invalidate()
        return self

    # --- evaluation ---

    def evaluate(self) -> bool:
        """Evaluate with the tree's own variable values.

        Raises UninitializedVariable if one of them has not been set.
        """
        if self._cache is None:
            self._cache = nodes.evaluate(self._root, self._vars)
        return self._cache

    def evaluate_with_vars(self, assignment: t.Mapping[str, bool]) -> bool:
        """Evaluate against an outside assignment. Never touches the memo."""
        return nodes.evaluate(self._root, assignment)

    # --- printing ---

    def prefix(self, notation: OperatorNotation | None = None) -> str:
        return nodes.prefix(self._root, notation or DEFAULT_NOTATION)

    def infix(self, notation: OperatorNotation | None = None) -> str:
        return nodes.infix(self._root, notation or DEFAULT_NOTATION)

    def __str__(self) -> str:
        return self.infix()

    def __repr__(self) -> str:
        return f"ExpressionTree({self.infix()!r})"

    # --- composition ---

    def _compose(self, operator: Operator, other: "ExpressionTree") -> "ExpressionTree":
        root = OperatorNode(operator, nodes.clone(self._root), nodes.clone(other._root))
        return ExpressionTree(root, other._vars.update(self._vars))

    def and_(self, other: "ExpressionTree") -> "ExpressionTree":
        return self._compose(Operator.AND, other)

    def or_(self, other: "ExpressionTree") -> "ExpressionTree":
        return self._compose(Operator.OR, other)

    def con(self, consequent: "ExpressionTree") -> "ExpressionTree":
        return self._compose(Operator.CON, consequent)

    def bicon(self, other: "ExpressionTree") -> "ExpressionTree":
        return self._compose(Operator.BICON, other)

    def not_(self) -> "ExpressionTree":
        denied = ExpressionTree(nodes.clone(self._root), self._vars)
        return denied.deny()

    # --- negation ---

    def deny(self) -> "ExpressionTree":
        self._root.negation.deny()
        self._invalidate()
        return self

    def double_deny(self) -> "ExpressionTree":
        self._root.negation.double_deny()
        self._invalidate()
        return self

    def reduce_negation(self) -> "ExpressionTree":
        self._root.negation.reduce()
        self._invalidate()
        return self

    # --- rewrite rules ---

    def _apply(self, rule: t.Callable[[Node], bool]) -> "ExpressionTree | None":
        if not rule(self._root):
            return None
        self._invalidate()
        return self

    def demorgans(self) -> "ExpressionTree | None":
        """De Morgan's law on a main conjunction or disjunction, else None."""
        return self._apply(nodes.demorgans)

    def implication(self) -> "ExpressionTree | None":
        """A->B to ~AvB and back, on a main conditional or disjunction, else None."""
        return self._apply(nodes.implication)

    def ncon(self) -> "ExpressionTree | None":
        """Negated conditional on a main conditional or conjunction, else None."""
        return self._apply(nodes.ncon)

    def transposition(self) -> "ExpressionTree | None":
        return self._apply(nodes.transposition)

    def mat_eq(self) -> "ExpressionTree | None":
        """Material equivalence on a main biconditional, or on a conjunction
        of two mirrored conditionals; else None."""
        return self._apply(nodes.mat_eq)

    def mat_eq_mono(self) -> "ExpressionTree | None":
        return self._apply(nodes.mat_eq_mono)

    def monotonize(self) -> "ExpressionTree":
        """Rewrite into undenied conjunctions and disjunctions over (possibly denied) leaves."""
        nodes.monotonize(self._root)
        logger.debug("monotonized to %s", self.infix())
        self._invalidate()
        return self

    # --- satisfiability ---

    def is_satisfiable(self) -> bool:
        return enumeration.is_satisfiable(self._root, self._vars)

    def satisfy_one(self) -> Assignment | None:
        return enumeration.satisfy_one(self._root, self._vars)

    def satisfy_all(self) -> list[Assignment]:
        return enumeration.satisfy_all(self._root, self._vars)

    def satisfy_count(self) -> int:
        return enumeration.satisfy_count(self._root, self._vars)

    def is_tautology(self) -> bool:
        return enumeration.is_tautology(self._root, self._vars)

    def is_inconsistency(self) -> bool:
        return enumeration.is_inconsistency(self._root, self._vars)

    def is_contingency(self) -> bool:
        return enumeration.is_contingency(self._root, self._vars)

    def is_satisfiable_with(self, aux: "ExpressionTree") -> bool:
        return self.and_(aux).is_satisfiable()

    def satisfy_one_with(self, aux: "ExpressionTree") -> Assignment | None:
        return self.and_(aux).satisfy_one()

    def satisfy_all_with(self, aux: "ExpressionTree") -> list[Assignment]:
        return self.and_(aux).satisfy_all()

    def satisfy_count_with(self, aux: "ExpressionTree") -> int:
        return self.and_(aux).satisfy_count()

    def is_tautology_with(self, aux: "ExpressionTree") -> bool:
        return self.and_(aux).is_tautology()

    def is_inconsistency_with(self, aux: "ExpressionTree") -> bool:
        return self.and_(aux).is_inconsistency()

    def is_contingency_with(self, aux: "ExpressionTree") -> bool:
        return self.and_(aux).is_contingency()

    # --- equivalence ---

    def lit_eq(self, other: "ExpressionTree") -> bool:
        """Same tree, counting double negations as none."""
        return nodes.literally_equal(self._root, other._root)

    def log_eq(self, other: "ExpressionTree") -> bool:
        """Same truth value under every assignment."""
        return not self.bicon(other).deny().is_satisfiable()

    def syn_eq(self, other: "ExpressionTree") -> bool:
        """Same variables and logically equivalent."""
        return set(self._vars) == set(other._vars) and self.log_eq(other)
