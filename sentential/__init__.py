from .connectives import Operator
from .errors import (
    AmbiguousExpression,
    ExpressionTreeError,
    InvalidExpression,
    InvalidParentheses,
    LowercaseVariables,
    NotEnoughOperators,
    TooManyOperators,
    UninitializedVariable,
    UnknownSymbol,
)
from .negation import Negation
from .nodes import Constant, Node, OperatorNode, Variable
from .notation import OperatorNotation
from .tree import ExpressionTree

__all__ = [
    "AmbiguousExpression",
    "Constant",
    "ExpressionTree",
    "ExpressionTreeError",
    "InvalidExpression",
    "InvalidParentheses",
    "LowercaseVariables",
    "Negation",
    "Node",
    "NotEnoughOperators",
    "Operator",
    "OperatorNode",
    "OperatorNotation",
    "TooManyOperators",
    "UninitializedVariable",
    "UnknownSymbol",
    "Variable",
]
