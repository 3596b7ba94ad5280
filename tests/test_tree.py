import pytest

from sentential import (
    AmbiguousExpression,
    ExpressionTree,
    InvalidExpression,
    LowercaseVariables,
    Operator,
    OperatorNotation,
    UninitializedVariable,
    Variable,
)
from sentential import nodes


def tree(expression):
    return ExpressionTree.from_string(expression)


def test_discovers_variables():
    assert dict(tree("(A&B1)v~(C->A)").variables) == {"A": None, "B1": None, "C": None}
    assert dict(tree("TRUE&~FALSE").variables) == {}


def test_set_variable():
    t = tree("A&B")
    with pytest.raises(UninitializedVariable):
        t.evaluate()
    t.set_variable("A", True)
    with pytest.raises(UninitializedVariable) as excinfo:
        t.evaluate()
    assert excinfo.value.name == "B"
    t.set_variable("B", True)
    assert t.evaluate()
    t.set_variable("B", False)
    assert not t.evaluate()


def test_set_variable_ignores_unknown_names():
    t = tree("A")
    t.set_variable("Z", True)
    assert "Z" not in t.variables


@pytest.mark.parametrize(
    "values, expected",
    [
        ({"A": True, "B": True, "C": True}, True),
        ({"A": True, "B": False, "C": True}, False),
        ({"A": False, "B": True, "C": True}, False),
        ({"A": True, "B": True, "C": True, "Z": False}, True),
    ],
)
def test_set_variables(values, expected):
    t = tree("(A&B)&C")
    t.set_variables(values)
    assert t.evaluate() is expected
    assert "Z" not in t.variables


@pytest.mark.parametrize(
    "assignment, expected",
    [
        ({"A": True, "B": False, "C": False}, False),
        ({"A": True, "B": False, "C": True}, True),
        ({"A": True, "B": True, "C": False}, True),
        ({"A": False, "B": False, "C": False}, False),
    ],
)
def test_evaluate_with_vars(assignment, expected):
    t = tree("~(A&B)->C")
    assert t.evaluate_with_vars(assignment) is expected
    # own variables are untouched
    assert t.variables["A"] is None


def test_evaluate_with_vars_evaluates_both_operands():
    t = tree("~(A&B)->C")
    with pytest.raises(UninitializedVariable) as excinfo:
        t.evaluate_with_vars({"A": True, "B": True})
    assert excinfo.value.name == "C"


def test_evaluate_is_memoized(monkeypatch):
    calls = []
    real = nodes.evaluate

    def counting(node, assignment):
        calls.append(node)
        return real(node, assignment)

    monkeypatch.setattr(nodes, "evaluate", counting)

    t = tree("A&B")
    t.set_variables({"A": True, "B": True})
    assert t.evaluate()
    seen = len(calls)
    assert seen > 0
    assert t.evaluate()
    assert len(calls) == seen

    # an outside assignment neither uses nor replaces the memo
    assert not t.evaluate_with_vars({"A": False, "B": True})
    seen = len(calls)
    assert t.evaluate()
    assert len(calls) == seen

    t.set_variable("B", False)
    assert not t.evaluate()
    assert len(calls) > seen


@pytest.mark.parametrize(
    "mutate",
    [
        lambda t: t.deny(),
        lambda t: t.set_variable("A", False),
        lambda t: t.set_variables({"B": False}),
        lambda t: t.replace_variable("B", tree("~A")),
        lambda t: t.replace_expression(tree("B"), tree("~A")),
    ],
)
def test_mutations_drop_the_memo(mutate):
    t = tree("A&B")
    t.set_variables({"A": True, "B": True})
    assert t.evaluate()
    mutate(t)
    assert not t.evaluate()


EXPR = "(A1&~B)v~C3->~(D<->E)"


@pytest.mark.parametrize(
    "notation, prefix, infix",
    [
        (
            OperatorNotation.ascii(),
            "->v&A1~B~C3~<->DE",
            "((A1&~B)v~C3)->~(D<->E)",
        ),
        (
            OperatorNotation.unicode(),
            "➞∨&A1¬B¬C3¬⟷DE",
            "((A1&¬B)∨¬C3)➞¬(D⟷E)",
        ),
    ],
)
def test_printing(notation, prefix, infix):
    t = tree(EXPR)
    assert t.prefix(notation) == prefix
    assert t.infix(notation) == infix


def test_printing_defaults_to_ascii():
    t = tree("¬(A∧B)∨C")
    assert t.infix() == "~(A&B)vC"
    assert t.prefix() == "v~&ABC"
    assert str(t) == "~(A&B)vC"
    assert repr(t) == "ExpressionTree('~(A&B)vC')"


def test_counted_negations_are_printed():
    assert tree("~~~(A&B)").infix() == "~~~(A&B)"
    assert tree("~~A").prefix() == "~~A"


def test_notation_printing():
    t = tree("(A1&~B)v~C->(D<->E)")
    assert t.infix(OperatorNotation.bits_ascii()) == "((A1*~B)+~C)->(D<->E)"

    notation = OperatorNotation.ascii()
    notation.and_ = "&&"
    notation.neg = "?"
    notation.or_ = "||"
    notation.con = "0-0"
    notation.bicon = ":p"
    assert t.infix(notation) == "((A1&&?B)||?C)0-0(D:pE)"


@pytest.mark.parametrize(
    "notation, expression",
    [
        (OperatorNotation.boolean_ascii(), "!(A|B)->C"),
        (OperatorNotation.unicode(), "¬(A∨B)➞C"),
        (OperatorNotation.bits_ascii(), "~(A+B)->C"),
    ],
)
def test_new_with_notation(notation, expression):
    t = ExpressionTree.from_string(expression, notation)
    assert t.infix(notation) == expression
    assert t.infix() == "~(AvB)->C"


@pytest.mark.parametrize(
    "expression, infix",
    [
        ("A&B", "A&B"),
        ("~(A&B)", "~~(~Av~B)"),
        ("A->B", "~AvB"),
        ("~(A->B)", "~~(A&~B)"),
        ("A<->B", "(A&B)v(~A&~B)"),
        ("~(A&~B)v~C->~(D<->E)", "~~(~~(A&~B)&~~C)v((~D&E)v(~~D&~E))"),
    ],
)
def test_monotonize(expression, infix):
    assert tree(expression).monotonize().infix() == infix


def test_monotonize_result_up_to_double_negation():
    t = tree("~(A&~B)v~C->~(D<->E)").monotonize()
    assert t.lit_eq(tree("((A&~B)&C)v((~D&E)v(D&~E))"))


@pytest.mark.parametrize(
    "a, b, lit, log, syn",
    [
        ("A&B", "B&A", False, True, True),
        ("A&B", "~~(A&B)", True, True, True),
        ("A->B", "~AvB", False, True, True),
        ("A", "Av(B&~B)", False, True, False),
        ("A", "~A", False, False, False),
        ("A&B", "A", False, False, False),
        ("TRUE", "Av~A", False, True, False),
        ("A<->B", "(A->B)&(B->A)", False, True, True),
    ],
)
def test_equivalence(a, b, lit, log, syn):
    ta, tb = tree(a), tree(b)
    assert ta.lit_eq(tb) is lit
    assert ta.log_eq(tb) is log
    assert ta.syn_eq(tb) is syn


def test_chaining():
    t = tree("~(A<->B)")
    t.deny().mat_eq().demorgans()
    assert t.infix() == "~~~(~(A->B)v~(B->A))"
    assert t.lit_eq(tree("~(~(A->B)v~(B->A))"))


@pytest.mark.parametrize(
    "rule, expression, expected",
    [
        ("demorgans", "~(AvB)", "~~(~A&~B)"),
        ("implication", "~AvB", "~~A->B"),
        ("ncon", "A->B", "~(A&~B)"),
        ("transposition", "A->B", "~B->~A"),
        ("mat_eq", "A<->B", "(A->B)&(B->A)"),
        ("mat_eq", "(A->B)&(B->A)", "A<->B"),
        ("mat_eq_mono", "A<->B", "(A&B)v(~A&~B)"),
    ],
)
def test_rules(rule, expression, expected):
    t = tree(expression)
    assert getattr(t, rule)() is t
    assert t.infix() == expected


@pytest.mark.parametrize(
    "rule, expression",
    [
        ("demorgans", "A->B"),
        ("implication", "A&B"),
        ("ncon", "AvB"),
        ("transposition", "A&B"),
        ("mat_eq", "(A->B)&(A->B)"),
        ("mat_eq_mono", "A"),
    ],
)
def test_rules_not_applicable(rule, expression):
    t = tree(expression)
    assert getattr(t, rule)() is None
    assert t.infix() == tree(expression).infix()


def test_negation_functions():
    t = tree("A")
    assert t.deny().infix() == "~A"
    assert t.double_deny().infix() == "~~~A"
    assert t.reduce_negation().infix() == "~A"
    assert t.deny().reduce_negation().infix() == "A"


@pytest.mark.parametrize(
    "expression, main, non_tilde",
    [
        ("A&B", Operator.AND, Operator.AND),
        ("~(A&B)", Operator.NOT, None),
        ("~~(A&B)", Operator.AND, Operator.AND),
        ("A<->B", Operator.BICON, Operator.BICON),
        ("A", None, None),
        ("~A", Operator.NOT, None),
        ("TRUE", None, None),
    ],
)
def test_main_connective(expression, main, non_tilde):
    t = tree(expression)
    assert t.main_connective() is main
    assert t.main_conn_non_tilde() is non_tilde


def test_replace_variable():
    t = tree("A&B").replace_variable("A", tree("C->D"))
    assert t.infix() == "(C->D)&B"
    assert set(t.variables) == {"B", "C", "D"}


def test_replace_unknown_variable_is_a_no_op():
    t = tree("A&B")
    assert t.replace_variable("Z", tree("C")) is t
    assert t.infix() == "A&B"
    assert set(t.variables) == {"A", "B"}


def test_replace_variables_is_simultaneous():
    t = tree("~A&B->Cv~D")
    t.replace_variables({"A": tree("BvD"), "B": tree("E->F"), "E": tree("H")})
    assert t.infix() == "(~(BvD)&(E->F))->(Cv~D)"
    assert t.lit_eq(tree("~(BvD)&(E->F)->Cv~D"))
    assert set(t.variables) == {"B", "C", "D", "E", "F"}


def test_replace_variables_keeps_known_values():
    t = tree("A&B")
    t.set_variable("B", True)
    replacement = tree("BvC")
    replacement.set_variables({"B": False, "C": True})
    t.replace_variable("A", replacement)
    assert dict(t.variables) == {"B": True, "C": True}


def test_replacement_is_copied():
    replacement = tree("C")
    t = tree("A&A").replace_variable("A", replacement)
    replacement.deny()
    assert t.infix() == "C&C"


@pytest.mark.parametrize(
    "expression, old, new, expected",
    [
        ("(A&B)v~(A&B)", "A&B", "C", "Cv~C"),
        ("~~A->B", "A", "~C", "~C->B"),
        ("~A->B", "A", "C", "~C->B"),
        ("A->B", "~A", "C", "~C->B"),
        ("A->B", "C", "D", "A->B"),
    ],
)
def test_replace_expression(expression, old, new, expected):
    t = tree(expression).replace_expression(tree(old), tree(new))
    assert t.infix() == expected


def test_replace_expression_variables():
    t = tree("A&B")
    t.set_variable("A", True)
    new = tree("C")
    new.set_variable("C", False)
    t.replace_expression(tree("B"), new)
    assert dict(t.variables) == {"A": True, "C": False}


def test_constants():
    assert ExpressionTree.true().evaluate()
    assert not ExpressionTree.false().evaluate()
    assert ExpressionTree.constant(True).infix() == "TRUE"
    assert not tree("~TRUE").evaluate()
    assert tree("TRUE&A").satisfy_count() == 1
    assert tree("FALSE").is_inconsistency()
    assert tree("TRUEv~TRUE").is_tautology()


def test_variable_constructor():
    assert ExpressionTree.variable("B12").infix() == "B12"
    assert dict(ExpressionTree.variable(" C ").variables) == {"C": None}
    for name in ["b", "", "AB", "1A"]:
        with pytest.raises(InvalidExpression):
            ExpressionTree.variable(name)


def test_composition_copies_operands():
    a, b = tree("A"), tree("B")
    c = a.and_(b)
    assert c.infix() == "A&B"
    assert c.root.left is not a.root
    assert c.root.right is not b.root
    assert a.or_(b).infix() == "AvB"
    assert a.con(b).infix() == "A->B"
    assert a.bicon(b).infix() == "A<->B"


def test_composition_prefers_left_values():
    a = tree("A")
    a.set_variable("A", True)
    other = tree("AvB")
    other.set_variables({"A": False, "B": False})
    assert dict(a.or_(other).variables) == {"A": True, "B": False}


def test_not_returns_a_denied_copy():
    t = tree("A&B")
    assert t.not_().infix() == "~(A&B)"
    assert t.infix() == "A&B"


def test_copy_is_independent():
    t = tree("A")
    t.set_variable("A", True)
    assert t.evaluate()
    other = t.copy()
    other.deny()
    assert not other.evaluate()
    assert t.evaluate()


@pytest.mark.parametrize(
    "expression, aux, satisfiable, count",
    [
        ("A->B", "A&~B", False, 0),
        ("A->B", "A", True, 1),
        ("AvB", "~A", True, 1),
        ("AvB", "C", True, 3),
    ],
)
def test_with_aux(expression, aux, satisfiable, count):
    t, a = tree(expression), tree(aux)
    assert t.is_satisfiable_with(a) is satisfiable
    assert t.satisfy_count_with(a) == count
    assert t.is_inconsistency_with(a) is not satisfiable
    assert (t.satisfy_one_with(a) is not None) is satisfiable
    assert len(t.satisfy_all_with(a)) == count
    # the operands are left alone
    assert t.infix() == tree(expression).infix()


def test_with_aux_tautology_and_contingency():
    t = tree("Av~A")
    assert t.is_tautology_with(tree("B->B"))
    assert not t.is_contingency_with(tree("B->B"))
    assert t.is_contingency_with(tree("C"))
    assert dict(tree("A->B").satisfy_one_with(tree("A"))) == {"A": True, "B": True}


# the worked examples from the project's documentation


def test_lowercase_variable_is_rejected():
    with pytest.raises(LowercaseVariables) as excinfo:
        tree("A&b")
    assert excinfo.value.char == "b"


def test_same_precedence_must_be_parenthesized():
    with pytest.raises(AmbiguousExpression):
        tree("A&B&C")


def test_negated_conjunction():
    t = tree("~(A&B)")
    t.set_variables({"A": True, "B": False})
    assert t.evaluate() is True


def test_monotonized_conditional():
    assert tree("A->B").monotonize().infix() == "~AvB"


def test_classification():
    assert tree("Av~A").is_tautology()
    assert tree("A&~A").is_inconsistency()
    assert tree("A").satisfy_count() == 1


def test_commuted_conjunction():
    assert tree("A&B").log_eq(tree("B&A"))
    assert not tree("A&B").lit_eq(tree("B&A"))


def test_from_node_copies_the_node():
    node = Variable("A")
    t = ExpressionTree.from_node(node)
    t.set_variable("A", True)
    assert t.evaluate()
    node.negation.deny()
    assert t.infix() == "A"
    assert t.evaluate()


def nested(depth):
    return "(A&" * depth + "B" + ")" * depth


def test_deeply_nested_trees_can_be_copied_and_compared():
    t = tree(nested(1000))
    assert t.log_eq(t)
    assert t.copy().infix() == t.infix()
    assert t.and_(tree("B")).satisfy_count() == 1
    assert t.not_().is_inconsistency_with(t)
