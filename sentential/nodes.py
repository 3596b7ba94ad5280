"""Expression tree nodes and the truth-preserving rewrites defined on them.

A tree is built from three node kinds. There is no node for negation: every
node carries a ``Negation`` counter instead, so ``~~A`` is a single variable
node with a count of 2.

Rewrite rules mutate the node they are given and return whether they applied.
A rule that does not apply to the node's operator leaves it untouched.
"""

import dataclasses
import typing as t

from .connectives import Operator
from .errors import UninitializedVariable
from .negation import Negation
from .notation import DEFAULT_NOTATION, OperatorNotation


@dataclasses.dataclass
class OperatorNode:
    operator: Operator
    left: "Node"
    right: "Node"
    negation: Negation = dataclasses.field(default_factory=Negation)


@dataclasses.dataclass
class Variable:
    name: str
    negation: Negation = dataclasses.field(default_factory=Negation)


@dataclasses.dataclass
class Constant:
    value: bool
    negation: Negation = dataclasses.field(default_factory=Negation)


Node: t.TypeAlias = OperatorNode | Variable | Constant


def clone(node: Node) -> Node:
    match node:
        case OperatorNode(operator=op, left=l, right=r, negation=negation):
            return OperatorNode(op, clone(l), clone(r), Negation(negation.count))
        case Variable(name=n, negation=negation):
            return Variable(n, Negation(negation.count))
        case Constant(value=value, negation=negation):
            return Constant(value, Negation(negation.count))
        case _:
            t.assert_never(node)


def deny(node: Node) -> Node:
    node.negation.deny()
    return node


def variable_names(node: Node) -> t.Iterator[str]:
    """Depth-first, left to right. Repeated names are yielded again."""
    match node:
        case OperatorNode(left=l, right=r):
            yield from variable_names(l)
            yield from variable_names(r)
        case Variable(name=n):
            yield n
        case Constant():
            return
        case _:
            t.assert_never(node)


# --- evaluation ---


def evaluate(node: Node, assignment: t.Mapping[str, bool | None]) -> bool:
    match node:
        case Constant(value=value, negation=negation):
            return value != negation.is_denied()
        case Variable(name=n, negation=negation):
            value = assignment.get(n)
            if value is None:
                raise UninitializedVariable(n)
            return value != negation.is_denied()
        case OperatorNode(operator=op, left=l, right=r, negation=negation):
            left_value = evaluate(l, assignment)
            right_value = evaluate(r, assignment)
            return op.execute(left_value, right_value) != negation.is_denied()
        case _:
            t.assert_never(node)


# --- printing ---


def token(node: Node, notation: OperatorNotation = DEFAULT_NOTATION) -> str:
    """The node's own symbol, preceded by one negation symbol per denial."""
    tildes = notation.neg * node.negation.count
    match node:
        case OperatorNode(operator=op):
            return tildes + notation.get(op)
        case Variable(name=n):
            return tildes + n
        case Constant(value=value):
            return tildes + ("TRUE" if value else "FALSE")
        case _:
            t.assert_never(node)


def prefix(node: Node, notation: OperatorNotation = DEFAULT_NOTATION) -> str:
    match node:
        case OperatorNode(left=l, right=r):
            return token(node, notation) + prefix(l, notation) + prefix(r, notation)
        case _:
            return token(node, notation)


def infix(
    node: Node, notation: OperatorNotation = DEFAULT_NOTATION, outermost: bool = True
) -> str:
    match node:
        case OperatorNode(operator=op, left=l, right=r, negation=negation):
            inner = (
                infix(l, notation, outermost=False)
                + notation.get(op)
                + infix(r, notation, outermost=False)
            )
            if outermost and negation.count == 0:
                return inner
            return f"{notation.neg * negation.count}({inner})"
        case _:
            return token(node, notation)


# --- comparison ---


def sort_key(node: Node) -> tuple:
    """Deterministic total order: kind, operator, negation count, name or value, children."""
    match node:
        case OperatorNode(operator=op, left=l, right=r, negation=negation):
            return (0, op.value, negation.count, sort_key(l), sort_key(r))
        case Variable(name=n, negation=negation):
            return (1, 0, negation.count, n)
        case Constant(value=value, negation=negation):
            return (2, 0, negation.count, value)
        case _:
            t.assert_never(node)


def literally_equal(a: Node, b: Node) -> bool:
    """Structural equality where negations only need to agree in parity."""
    if a.negation.is_denied() != b.negation.is_denied():
        return False
    return matches_ignoring_negation(a, b)


def matches_ignoring_negation(a: Node, b: Node) -> bool:
    match a, b:
        case OperatorNode(), OperatorNode():
            return (
                a.operator is b.operator
                and literally_equal(a.left, b.left)
                and literally_equal(a.right, b.right)
            )
        case Variable(), Variable():
            return a.name == b.name
        case Constant(), Constant():
            return a.value == b.value
        case _:
            return False


# --- rewrite rules ---


def demorgans(node: Node) -> bool:
    match node:
        case OperatorNode(operator=Operator.AND | Operator.OR as op):
            node.operator = Operator.OR if op is Operator.AND else Operator.AND
            deny(node)
            deny(node.left)
            deny(node.right)
            return True
    return False


def implication(node: Node) -> bool:
    match node:
        case OperatorNode(operator=Operator.CON | Operator.OR as op):
            node.operator = Operator.OR if op is Operator.CON else Operator.CON
            deny(node.left)
            return True
    return False


def ncon(node: Node) -> bool:
    """Negated conditional: ~(A->B) is A&~B."""
    match node:
        case OperatorNode(operator=Operator.CON | Operator.AND as op):
            node.operator = Operator.AND if op is Operator.CON else Operator.CON
            deny(node)
            deny(node.right)
            return True
    return False


def transposition(node: Node) -> bool:
    match node:
        case OperatorNode(operator=Operator.CON, left=l, right=r):
            node.left = deny(r)
            node.right = deny(l)
            return True
    return False


def _is_plain_conditional(node: Node) -> t.TypeGuard[OperatorNode]:
    return (
        isinstance(node, OperatorNode)
        and node.operator is Operator.CON
        and not node.negation.is_denied()
    )


def mat_eq(node: Node) -> bool:
    """Material equivalence, in whichever direction the node's shape allows.

    A<->B becomes (A->B)&(B->A); a conjunction of two mirrored conditionals
    collapses back into a biconditional.
    """
    match node:
        case OperatorNode(operator=Operator.BICON, left=l, right=r):
            node.operator = Operator.AND
            node.left = OperatorNode(Operator.CON, l, r)
            node.right = OperatorNode(Operator.CON, clone(r), clone(l))
            return True
        case OperatorNode(operator=Operator.AND, left=l, right=r):
            if not (_is_plain_conditional(l) and _is_plain_conditional(r)):
                return False
            if l.left != r.right or l.right != r.left:
                return False
            node.operator = Operator.BICON
            node.left = l.left
            node.right = l.right
            return True
    return False


def mat_eq_mono(node: Node) -> bool:
    """A<->B becomes (A&B)v(~A&~B).

    A denied biconditional hands one denial to the smaller of its operands
    (per ``sort_key``) instead of leaving it on the disjunction.
    """
    match node:
        case OperatorNode(operator=Operator.BICON, left=l, right=r):
            if node.negation.is_denied():
                node.negation = Negation(node.negation.count - 1)
                deny(l if sort_key(l) < sort_key(r) else r)
            node.operator = Operator.OR
            node.left = OperatorNode(Operator.AND, l, r)
            node.right = OperatorNode(Operator.AND, deny(clone(l)), deny(clone(r)))
            return True
    return False


def monotonize(node: Node) -> None:
    """Rewrite top-down until only undenied conjunctions and disjunctions remain."""
    match node:
        case OperatorNode(operator=Operator.AND | Operator.OR, negation=negation):
            if negation.is_denied():
                demorgans(node)
        case OperatorNode(operator=Operator.CON, negation=negation):
            if negation.is_denied():
                ncon(node)
            else:
                implication(node)
        case OperatorNode(operator=Operator.BICON):
            mat_eq_mono(node)
        case _:
            return

    monotonize(node.left)
    monotonize(node.right)


# --- substitution ---


def substitute(node: Node, replacements: t.Mapping[str, Node]) -> Node:
    """Replace variables by copies of the given subtrees.

    The replaced variable's denials are carried over onto the copy. Returns
    the (possibly new) subtree root.
    """
    match node:
        case Variable(name=n, negation=negation) if n in replacements:
            replacement = clone(replacements[n])
            replacement.negation = Negation(replacement.negation.count + negation.count)
            return replacement
        case OperatorNode(left=l, right=r):
            node.left = substitute(l, replacements)
            node.right = substitute(r, replacements)
            return node
        case _:
            return node


def replace_matching(node: Node, old: Node, new: Node) -> Node:
    """Replace every subtree matching ``old`` (up to its own negation) by ``new``.

    When the matched subtree and ``old`` disagree in negation parity the copy
    of ``new`` gets an extra denial.
    """
    if matches_ignoring_negation(node, old):
        replacement = clone(new)
        if node.negation.is_denied() != old.negation.is_denied():
            deny(replacement)
        return replacement
    match node:
        case OperatorNode(left=l, right=r):
            node.left = replace_matching(l, old, new)
            node.right = replace_matching(r, old, new)
    return node
