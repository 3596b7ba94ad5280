import logging
import sys
import time

from .errors import ExpressionTreeError
from .tree import ExpressionTree

USAGE = "usage: python -m sentential [-v] STATEMENT  (use - to read stdin)"


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    verbose = "-v" in args
    if verbose:
        args.remove("-v")
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 2
    statement = args[0].strip()
    if statement == "-":
        statement = sys.stdin.read().strip()

    before = time.time()
    try:
        tree = ExpressionTree.from_string(statement)
    except ExpressionTreeError as e:
        print(f"could not parse statement: {e}", file=sys.stderr)
        return 1
    satisfiable = tree.is_satisfiable()
    tautology = tree.is_tautology()
    count = tree.satisfy_count()
    after = time.time()

    display_statement = statement if len(statement) < 1000 else f"{statement[:1000]}..."
    print()
    print(f"statement: {display_statement}")
    print()
    print("    is it satisfiable?")
    print(f"    ... {'yes' if satisfiable else 'no'}")
    print("    is it a tautology?")
    print(f"    ... {'yes' if tautology else 'no'}")
    print(f"    ... {count} of {2 ** len(tree.variables)} assignments satisfy it")
    print(f"    ... solved in {after - before}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
