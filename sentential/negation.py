import dataclasses


@dataclasses.dataclass(order=True)
class Negation:
    """Number of tildes attached to a node.

    Only the parity matters for truth values, but the exact count is kept so
    that printing reproduces what was written (or what rewrites accumulated).
    """

    count: int = 0

    def is_denied(self) -> bool:
        return self.count % 2 == 1

    def tval(self) -> bool:
        """Truth contribution: True when the count is even."""
        return self.count % 2 == 0

    def deny(self) -> None:
        self.count += 1

    def double_deny(self) -> None:
        self.count += 2

    def reduce(self) -> None:
        # keep parity, drop redundant pairs
        self.count %= 2
