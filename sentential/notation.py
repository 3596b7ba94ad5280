"""Symbol tables used to print and (optionally) parse expressions."""

import typing as t

from .connectives import Operator

ROLES = (Operator.NOT, Operator.AND, Operator.OR, Operator.CON, Operator.BICON)


class OperatorNotation:
    """Maps each of the five operator roles to the symbol used for it.

    No role's symbol may be a prefix of another role's symbol; otherwise the
    parser could not tell them apart.
    """

    def __init__(self, neg: str, and_: str, or_: str, con: str, bicon: str) -> None:
        self._symbols: dict[Operator, str] = {}
        for role, symbol in zip(ROLES, (neg, and_, or_, con, bicon)):
            self.set(role, symbol)

    # --- presets ---

    @classmethod
    def ascii(cls) -> "OperatorNotation":
        return cls("~", "&", "v", "->", "<->")

    @classmethod
    def unicode(cls) -> "OperatorNotation":
        return cls("¬", "&", "∨", "➞", "⟷")

    @classmethod
    def mathematical(cls) -> "OperatorNotation":
        return cls("¬", "^", "∨", "➞", "⟷")

    @classmethod
    def mathematical_ascii(cls) -> "OperatorNotation":
        return cls("~", "^", "v", "->", "<->")

    @classmethod
    def bits(cls) -> "OperatorNotation":
        return cls("¬", "⋅", "+", "➞", "⟷")

    @classmethod
    def bits_ascii(cls) -> "OperatorNotation":
        return cls("~", "*", "+", "->", "<->")

    @classmethod
    def boolean(cls) -> "OperatorNotation":
        return cls("!", "&", "|", "➞", "⟷")

    @classmethod
    def boolean_ascii(cls) -> "OperatorNotation":
        return cls("!", "&", "|", "->", "<->")

    # --- access ---

    def get(self, role: Operator) -> str:
        return self._symbols[role]

    def set(self, role: Operator, symbol: str) -> None:
        if role not in ROLES:
            raise ValueError(f"not an operator role: {role}")
        if not symbol:
            raise ValueError(f"empty symbol for {role.name}")
        for other_role, other in self._symbols.items():
            if other_role is role:
                continue
            if symbol.startswith(other) or other.startswith(symbol):
                raise ValueError(
                    f"symbol {symbol!r} for {role.name} is ambiguous with "
                    f"{other!r} for {other_role.name}"
                )
        self._symbols[role] = symbol

    def items(self) -> t.Iterator[tuple[Operator, str]]:
        for role in ROLES:
            yield role, self._symbols[role]

    @property
    def neg(self) -> str:
        return self.get(Operator.NOT)

    @neg.setter
    def neg(self, symbol: str) -> None:
        self.set(Operator.NOT, symbol)

    @property
    def and_(self) -> str:
        return self.get(Operator.AND)

    @and_.setter
    def and_(self, symbol: str) -> None:
        self.set(Operator.AND, symbol)

    @property
    def or_(self) -> str:
        return self.get(Operator.OR)

    @or_.setter
    def or_(self, symbol: str) -> None:
        self.set(Operator.OR, symbol)

    @property
    def con(self) -> str:
        return self.get(Operator.CON)

    @con.setter
    def con(self, symbol: str) -> None:
        self.set(Operator.CON, symbol)

    @property
    def bicon(self) -> str:
        return self.get(Operator.BICON)

    @bicon.setter
    def bicon(self, symbol: str) -> None:
        self.set(Operator.BICON, symbol)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OperatorNotation):
            return NotImplemented
        return self._symbols == other._symbols

    def __repr__(self) -> str:
        symbols = ", ".join(f"{role.name}={symbol!r}" for role, symbol in self.items())
        return f"OperatorNotation({symbols})"


# printing default when no notation is given
DEFAULT_NOTATION = OperatorNotation.ascii()
