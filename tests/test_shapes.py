"""Tests for the shared shape predicates."""

from __future__ import annotations

from playground.languages import Language
from playground.shapes import (
    has_array_vocabulary,
    has_binary_search,
    has_memoization,
    has_recursive_fibonacci,
    has_swap,
    loop_count,
    loop_depth,
    mask_code,
    print_calls,
    recursive_functions,
)
from tests.snippets import (
    JAVA_FIBONACCI,
    JAVA_HELLO,
    JAVA_NESTED_LOOPS,
    PY_BINARY_SEARCH,
    PY_BUBBLE_SORT,
    PY_CLIMB_MEMO,
    PY_FIBONACCI,
    PY_NESTED_LOOPS,
    PY_SEQUENTIAL_LOOPS,
)

# ── Masking ──


class TestMaskCode:
    def test_preserves_length(self):
        code = 'x = "a { b" # trailing { comment\nprint(x)'
        assert len(mask_code(code, Language.PYTHON)) == len(code)

    def test_blanks_string_contents(self):
        masked = mask_code('printf("{ not a brace");', Language.C)
        assert "{" not in masked
        assert masked.startswith('printf("')

    def test_blanks_line_comments(self):
        masked = mask_code("int x = 1; // for (;;) {\n", Language.JAVA)
        assert "for" not in masked
        assert masked.endswith("\n")

    def test_blanks_block_comments(self):
        masked = mask_code("/* while (true) { */ int y;", Language.CPP)
        assert "while" not in masked
        assert "int y;" in masked

    def test_python_triple_quoted(self):
        masked = mask_code('"""\nfor i in range(3):\n"""\nx = 1', Language.PYTHON)
        assert "for" not in masked
        assert masked.count("\n") == 3

    def test_javascript_template_literal(self):
        masked = mask_code("const s = `for (;;) {`;", Language.JAVASCRIPT)
        assert "{" not in masked


# ── Loops ──


class TestLoopDepth:
    def test_python_nested(self):
        assert loop_depth(PY_NESTED_LOOPS, Language.PYTHON) == 2

    def test_python_sequential(self):
        assert loop_depth(PY_SEQUENTIAL_LOOPS, Language.PYTHON) == 1
        assert loop_count(PY_SEQUENTIAL_LOOPS, Language.PYTHON) == 2

    def test_python_comprehension_counts_as_nesting(self):
        code = "for row in grid:\n    total = sum(x for x in row)\n"
        assert loop_depth(code, Language.PYTHON) == 2

    def test_python_single_line_loop(self):
        assert loop_depth("for i in range(n): print(i)", Language.PYTHON) == 1

    def test_python_format_call_is_not_a_loop(self):
        assert loop_depth('format(x)\nformatted = 1\n', Language.PYTHON) == 0

    def test_python_loop_in_comment_ignored(self):
        assert loop_depth("# for i in range(10):\nx = 1\n", Language.PYTHON) == 0

    def test_brace_nested(self):
        assert loop_depth(JAVA_NESTED_LOOPS, Language.JAVA) == 2

    def test_brace_nested_without_braces(self):
        code = "for (int i = 0; i < n; i++)\n    for (int j = 0; j < n; j++)\n        count++;\n"
        assert loop_depth(code, Language.C) == 2

    def test_brace_sequential(self):
        code = (
            "for (int i = 0; i < n; i++) { a++; }\n"
            "for (int j = 0; j < n; j++) { b++; }\n"
        )
        assert loop_depth(code, Language.CPP) == 1
        assert loop_count(code, Language.CPP) == 2

    def test_do_while(self):
        code = "do {\n    for (let i = 0; i < 3; i++) { x++; }\n} while (x < 10);\n"
        assert loop_depth(code, Language.JAVASCRIPT) == 2

    def test_no_loops(self):
        assert loop_depth(JAVA_HELLO, Language.JAVA) == 0


# ── Recursion ──


class TestRecursion:
    def test_python_fibonacci(self):
        assert recursive_functions(PY_FIBONACCI, Language.PYTHON) == ["fibonacci"]

    def test_java_fibonacci(self):
        assert recursive_functions(JAVA_FIBONACCI, Language.JAVA) == ["fibonacci"]

    def test_helper_called_from_main_is_not_recursive(self):
        code = (
            "public class Main {\n"
            "    static int helper(int x) {\n"
            "        return x + 1;\n"
            "    }\n"
            "    public static void main(String[] args) {\n"
            "        System.out.println(helper(2));\n"
            "    }\n"
            "}\n"
        )
        assert recursive_functions(code, Language.JAVA) == []

    def test_javascript_arrow_function(self):
        code = "const walk = (n) => {\n  if (n > 0) walk(n - 1);\n};\n"
        assert recursive_functions(code, Language.JAVASCRIPT) == ["walk"]

    def test_recursive_fibonacci_shape(self):
        assert has_recursive_fibonacci(PY_FIBONACCI, Language.PYTHON)
        assert not has_recursive_fibonacci(PY_NESTED_LOOPS, Language.PYTHON)


# ── Print calls ──


class TestPrintCalls:
    def test_python_arguments(self):
        calls = print_calls('print("a", b)\nprint(c)', Language.PYTHON)
        assert [c.arguments for c in calls] == [('"a"', "b"), ("c",)]
        assert all(c.newline for c in calls)

    def test_nested_call_is_one_argument(self):
        calls = print_calls(PY_FIBONACCI, Language.PYTHON)
        assert calls[0].arguments == ("fibonacci(10)",)

    def test_print_inside_string_ignored(self):
        assert print_calls('x = "print(1)"', Language.PYTHON) == []

    def test_java_print_without_newline(self):
        code = 'System.out.print("a");\nSystem.out.println("b");'
        calls = print_calls(code, Language.JAVA)
        assert [c.name for c in calls] == ["System.out.print", "System.out.println"]
        assert [c.newline for c in calls] == [False, True]

    def test_cout_segments(self):
        calls = print_calls('std::cout << "Hi" << std::endl;', Language.CPP)
        assert len(calls) == 1
        assert calls[0].arguments == ('"Hi"',)
        assert calls[0].newline


# ── Vocabulary ──


class TestVocabulary:
    def test_entry_point_args_are_not_arrays(self):
        assert not has_array_vocabulary(JAVA_HELLO, Language.JAVA)

    def test_list_literal_is_array(self):
        assert has_array_vocabulary("values = [1, 2]", Language.PYTHON)

    def test_tuple_swap(self):
        assert has_swap(PY_BUBBLE_SORT, Language.PYTHON)

    def test_temp_swap(self):
        assert has_swap("int temp = a[i];", Language.C)

    def test_memoization(self):
        assert has_memoization(PY_CLIMB_MEMO, Language.PYTHON)
        assert has_memoization("dp = [0] * 10", Language.PYTHON)
        assert not has_memoization(PY_NESTED_LOOPS, Language.PYTHON)

    def test_binary_search(self):
        assert has_binary_search(PY_BINARY_SEARCH, Language.PYTHON)
        assert not has_binary_search(PY_NESTED_LOOPS, Language.PYTHON)

    def test_vocabulary_in_comments_ignored(self):
        assert not has_memoization("# memo table\nx = 1", Language.PYTHON)
