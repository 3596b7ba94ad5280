import enum


class Operator(enum.Enum):
    AND = enum.auto()
    OR = enum.auto()
    CON = enum.auto()
    BICON = enum.auto()
    # only used as a notation role and by main_connective(), never in a node
    NOT = enum.auto()

    @property
    def precedence(self) -> int:
        """Higher binds tighter. AND and OR share a level."""
        match self:
            case Operator.AND | Operator.OR:
                return 3
            case Operator.CON:
                return 2
            case Operator.BICON:
                return 1
            case Operator.NOT:
                return 0

    def execute(self, left: bool, right: bool) -> bool:
        match self:
            case Operator.AND:
                return left and right
            case Operator.OR:
                return left or right
            case Operator.CON:
                return not left or right
            case Operator.BICON:
                return left == right
            case _:
                raise NotImplementedError("unreachable: NOT is not a binary operator")


BINARY_OPERATORS = (Operator.AND, Operator.OR, Operator.CON, Operator.BICON)
