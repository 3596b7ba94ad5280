class ExpressionTreeError(ValueError):
    """Anything that can go wrong building or evaluating an ExpressionTree."""


class UninitializedVariable(ExpressionTreeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"variable {name!r} has no value")
        self.name = name


class InvalidExpression(ExpressionTreeError):
    def __init__(self, message: str = "invalid expression") -> None:
        super().__init__(message)


class UnknownSymbol(ExpressionTreeError):
    def __init__(self, message: str = "unknown symbol") -> None:
        super().__init__(message)


class InvalidParentheses(ExpressionTreeError):
    def __init__(self, message: str = "unbalanced parentheses") -> None:
        super().__init__(message)


class TooManyOperators(ExpressionTreeError):
    def __init__(self, message: str = "operator is missing an operand") -> None:
        super().__init__(message)


class NotEnoughOperators(ExpressionTreeError):
    def __init__(self, message: str = "operands left over without an operator") -> None:
        super().__init__(message)


class LowercaseVariables(ExpressionTreeError):
    def __init__(self, char: str) -> None:
        super().__init__(f"variables must be uppercase, got {char!r}")
        self.char = char


class AmbiguousExpression(ExpressionTreeError):
    def __init__(
        self, message: str = "operators of equal precedence need parentheses"
    ) -> None:
        super().__init__(message)
