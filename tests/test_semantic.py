from cminus_front.ast import DeclarationKind, ExpressionKind, Node, NodeKind
from cminus_front.semantic import SemanticAnalyzer
from cminus_front.symbols import build_symbol_table


def decl(line, type_name, name, subkind=DeclarationKind.VAR):
    node = Node(line, type_name, NodeKind.DECLARATION, subkind)
    node.add_child(Node(line, name, NodeKind.EXPRESSION, ExpressionKind.ID))
    return node


def call(line, name):
    return Node(line, name, NodeKind.EXPRESSION, ExpressionKind.ATIV)


def assign(line, target, value):
    node = Node(line, "=", NodeKind.EXPRESSION, ExpressionKind.ASSIGN)
    node.add_child(Node(line, target, NodeKind.EXPRESSION, ExpressionKind.ID))
    node.add_child(value)
    return node


def run(root):
    analyzer = SemanticAnalyzer(build_symbol_table(root))
    return analyzer, analyzer.analyze(root)


def test_void_variable_is_reported():
    _, errors = run(decl(3, "void", "v"))
    assert errors == [
        "Semantic Error: Variable 'v' declared with invalid type 'void' at line 3."
    ]


def test_multiple_declarations_reported_for_each():
    root = decl(1, "int", "x")
    root.add_sibling(decl(2, "int", "x"))
    _, errors = run(root)
    assert errors == [
        "Semantic Error: Multiple declarations of 'x' at line 1.",
        "Semantic Error: Multiple declarations of 'x' at line 2.",
    ]


def test_distinct_declarations_are_fine():
    root = decl(1, "int", "x")
    root.add_sibling(decl(2, "int", "y"))
    _, errors = run(root)
    assert errors == []


def test_undeclared_function_call():
    root = decl(1, "int", "x")
    root.add_sibling(call(5, "foo"))
    _, errors = run(root)
    assert errors == [
        "Semantic Error: Function 'foo' called without declaration at line 5."
    ]


def test_builtin_calls_are_not_reported():
    root = call(1, "input")
    root.add_sibling(call(2, "output"))
    _, errors = run(root)
    assert errors == []


def test_declared_function_call_is_fine():
    root = decl(1, "int", "foo", DeclarationKind.FUN)
    root.add_sibling(call(4, "foo"))
    _, errors = run(root)
    assert errors == []


def test_assignment_to_undeclared_variable():
    constant = Node(7, "1", NodeKind.EXPRESSION, ExpressionKind.CONSTANT)
    _, errors = run(assign(7, "z", constant))
    assert errors == ["Error: Variable 'z' assigned before declaration at line 7."]


def test_assignment_of_void_function_result():
    root = decl(1, "void", "f", DeclarationKind.FUN)
    root.add_sibling(decl(2, "int", "x"))
    root.add_sibling(assign(3, "x", call(3, "f")))
    _, errors = run(root)
    assert errors == [
        "Semantic Error: Cannot assign return value of void function 'f' at line 3."
    ]


def test_main_detection():
    root = Node(1, "main", NodeKind.DECLARATION, DeclarationKind.FUN)
    analyzer, _ = run(root)
    assert analyzer.main_declared is True
    assert analyzer.check_main_function() is True
    assert analyzer.errors == []


def test_missing_main_is_reported():
    analyzer, _ = run(decl(1, "int", "x"))
    assert analyzer.check_main_function() is False
    assert analyzer.errors == ["Semantic Error: No declaration of 'main' function."]


def test_errors_accumulate_across_calls():
    analyzer = SemanticAnalyzer(build_symbol_table(None))
    first = analyzer.analyze(call(1, "a"))
    second = analyzer.analyze(call(2, "b"))
    assert len(first) == 1 and len(second) == 1
    assert analyzer.errors == first + second


def test_analyze_none_returns_no_errors():
    analyzer = SemanticAnalyzer(build_symbol_table(None))
    assert analyzer.analyze(None) == []
    assert analyzer.main_declared is False