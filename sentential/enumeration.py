"""Brute-force satisfiability over every assignment of a tree's variables.

This is a reference engine, not a SAT solver: each question costs up to 2**n
evaluations for n variables. There is no cap on n and no way to cancel a run
other than consuming ``assignments()`` yourself and stopping early.
"""

import logging
import typing as t

from pyrsistent import PMap, pmap

from .nodes import Node, evaluate

logger = logging.getLogger(__name__)

Assignment: t.TypeAlias = PMap[str, bool]


def assignments(names: t.Iterable[str]) -> t.Iterator[Assignment]:
    """Every assignment of ``names``, counting up in binary from all-false.

    Names are taken in sorted order, the first one being the lowest bit.
    """
    order = sorted(set(names))
    values = [False] * len(order)
    logger.debug("enumerating %d assignments of %d variables", 2 ** len(order), len(order))
    while True:
        yield pmap(zip(order, values))
        for i, value in enumerate(values):
            values[i] = not value
            if not value:
                break
        else:
            # carried out past the last variable: back to all-false
            return


def _truth_table(root: Node, names: t.Iterable[str]) -> t.Iterator[tuple[Assignment, bool]]:
    for assignment in assignments(names):
        yield assignment, evaluate(root, assignment)


def is_satisfiable(root: Node, names: t.Iterable[str]) -> bool:
    return any(value for _, value in _truth_table(root, names))


def satisfy_one(root: Node, names: t.Iterable[str]) -> Assignment | None:
    return next((a for a, value in _truth_table(root, names) if value), None)


def satisfy_all(root: Node, names: t.Iterable[str]) -> list[Assignment]:
    return [a for a, value in _truth_table(root, names) if value]


def satisfy_count(root: Node, names: t.Iterable[str]) -> int:
    return sum(1 for _, value in _truth_table(root, names) if value)


def is_tautology(root: Node, names: t.Iterable[str]) -> bool:
    return all(value for _, value in _truth_table(root, names))


def is_inconsistency(root: Node, names: t.Iterable[str]) -> bool:
    return not is_satisfiable(root, names)


def is_contingency(root: Node, names: t.Iterable[str]) -> bool:
    seen_true = seen_false = False
    for _, value in _truth_table(root, names):
        if value:
            seen_true = True
        else:
            seen_false = True
        if seen_true and seen_false:
            return True
    return False
