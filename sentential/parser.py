import dataclasses
import logging
import re
import sys
import typing as t

from .connectives import BINARY_OPERATORS, Operator
from .errors import (
    AmbiguousExpression,
    InvalidExpression,
    InvalidParentheses,
    LowercaseVariables,
    NotEnoughOperators,
    TooManyOperators,
    UnknownSymbol,
)
from .negation import Negation
from .nodes import Constant, Node, OperatorNode, Variable
from .notation import OperatorNotation

logger = logging.getLogger(__name__)

RECURSION_LIMIT = 2000

# allow deeper parsing
sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

# accepted all at once when no notation is given
DEFAULT_NEGATION_PATTERN = r"[~!¬]"
DEFAULT_OPERATOR_PATTERNS = {
    Operator.AND: r"[&*∧^⋅]",
    Operator.OR: r"[v|+∨]",
    Operator.CON: r"-+>|➞",
    Operator.BICON: r"<-+>|⟷",
}

KEYWORDS = {"TRUE": True, "FALSE": False}


@dataclasses.dataclass
class OperatorToken:
    operator: Operator
    negation: Negation = dataclasses.field(default_factory=Negation)


@dataclasses.dataclass
class VariableToken:
    name: str
    negation: Negation = dataclasses.field(default_factory=Negation)


@dataclasses.dataclass
class ConstantToken:
    value: bool
    negation: Negation = dataclasses.field(default_factory=Negation)


@dataclasses.dataclass
class ParenMarker:
    # output size when the group was opened, to spot "()"
    output_length: int


@dataclasses.dataclass
class NegationMarker:
    negation: Negation


Token: t.TypeAlias = OperatorToken | VariableToken | ConstantToken | ParenMarker | NegationMarker


def _symbol_patterns(
    notation: OperatorNotation | None,
) -> tuple[re.Pattern[str], dict[Operator, re.Pattern[str]]]:
    if notation is None:
        negation = DEFAULT_NEGATION_PATTERN
        operators = DEFAULT_OPERATOR_PATTERNS
    else:
        negation = re.escape(notation.neg)
        operators = {op: re.escape(notation.get(op)) for op in BINARY_OPERATORS}
    return re.compile(negation), {op: re.compile(p) for op, p in operators.items()}


class _ShuntingYard:
    """Turns an infix statement into postfix tokens."""

    def __init__(self, statement: str, notation: OperatorNotation | None = None) -> None:
        self.statement = statement
        self._negation_re, self._operator_res = _symbol_patterns(notation)
        self._pos = 0
        self._stack: list[Token] = []
        self.output: list[Token] = []

        self._run()

    def _done(self) -> bool:
        return self._pos >= len(self.statement)

    @property
    def _current_char(self) -> str:
        return self.statement[self._pos]

    def _skip_whitespace(self) -> None:
        while not self._done() and self._current_char.isspace():
            self._pos += 1

    def _run(self) -> None:
        self._skip_whitespace()
        if self._done():
            raise InvalidExpression("empty expression")

        while not self._done():
            negation = self._consume_negations()
            if self._done():
                raise InvalidExpression("negation with nothing to negate")

            value = self._consume_keyword()
            if value is not None:
                self.output.append(ConstantToken(value, negation))
                self._skip_whitespace()
                continue

            if negation.count:
                self._stack.append(NegationMarker(negation))

            char = self._current_char
            if char.isupper():
                self._variable(pending=bool(negation.count))
            elif (matched := self._match_operator()) is not None:
                self._operator(*matched)
            elif char == "(":
                self._stack.append(ParenMarker(len(self.output)))
                self._pos += 1
            elif char == ")":
                self._close_paren()
            elif char.islower():
                raise LowercaseVariables(char)
            else:
                raise UnknownSymbol(f"unknown symbol {char!r}")
            self._skip_whitespace()

        while self._stack:
            self.output.append(self._stack.pop())

    def _consume_negations(self) -> Negation:
        negation = Negation()
        while (m := self._negation_re.match(self.statement, self._pos)) is not None:
            negation.deny()
            self._pos = m.end()
            self._skip_whitespace()
        return negation

    def _consume_keyword(self) -> bool | None:
        for keyword, value in KEYWORDS.items():
            if self.statement.startswith(keyword, self._pos):
                self._pos += len(keyword)
                return value
        return None

    def _match_operator(self) -> tuple[Operator, int] | None:
        best: tuple[Operator, int] | None = None
        for op, pattern in self._operator_res.items():
            m = pattern.match(self.statement, self._pos)
            if m is not None and (best is None or m.end() > best[1]):
                best = (op, m.end())
        return best

    def _variable(self, pending: bool) -> None:
        start = self._pos
        self._pos += 1
        while not self._done() and self._current_char.isdigit():
            self._pos += 1
        negation = Negation()
        if pending:
            match self._stack.pop():
                case NegationMarker(negation=negation):
                    pass
                case _:
                    raise InvalidExpression("negation with nothing to negate")
        self.output.append(VariableToken(self.statement[start : self._pos], negation))

    def _operator(self, op: Operator, end: int) -> None:
        self._pos = end
        while self._stack and isinstance(top := self._stack[-1], OperatorToken):
            if top.operator.precedence < op.precedence:
                break
            if top.operator.precedence == op.precedence:
                raise AmbiguousExpression(
                    f"{top.operator.name} and {op.name} need parentheses between them"
                )
            self.output.append(self._stack.pop())

        negation = Negation()
        if self._stack and isinstance(self._stack[-1], NegationMarker):
            negation = self._stack.pop().negation
        self._stack.append(OperatorToken(op, negation))

    def _close_paren(self) -> None:
        self._pos += 1
        while self._stack and not isinstance(self._stack[-1], ParenMarker):
            self.output.append(self._stack.pop())
        if not self._stack:
            raise InvalidParentheses("')' without a matching '('")
        match self._stack.pop():
            case ParenMarker(output_length=length):
                if len(self.output) == length:
                    raise InvalidExpression("empty parentheses")
            case _:
                raise InvalidParentheses("')' without a matching '('")

        if self._stack and isinstance(self._stack[-1], NegationMarker):
            marker = self._stack.pop()
            completed = self.output[-1]
            if not isinstance(completed, (OperatorToken, VariableToken, ConstantToken)):
                raise InvalidExpression("negation with nothing to negate")
            completed.negation = Negation(completed.negation.count + marker.negation.count)


def to_postfix(statement: str, notation: OperatorNotation | None = None) -> list[Token]:
    return _ShuntingYard(statement, notation).output


def build_tree(tokens: list[Token]) -> Node:
    """Pops tokens off the end of a postfix list and builds the subtree they describe."""
    if not tokens:
        raise TooManyOperators()
    match tokens.pop():
        case OperatorToken(operator=op, negation=negation):
            right = build_tree(tokens)
            left = build_tree(tokens)
            return OperatorNode(op, left, right, negation)
        case VariableToken(name=n, negation=negation):
            return Variable(n, negation)
        case ConstantToken(value=value, negation=negation):
            return Constant(value, negation)
        case ParenMarker():
            raise InvalidParentheses("'(' without a matching ')'")
        case NegationMarker():
            raise InvalidExpression("negation with nothing to negate")
        case other:
            t.assert_never(other)


def parse(statement: str, notation: OperatorNotation | None = None) -> Node:
    tokens = to_postfix(statement, notation)
    logger.debug("postfix for %r: %s", statement, tokens)
    root = build_tree(tokens)
    if tokens:
        raise NotEnoughOperators()
    return root
