from __future__ import annotations

import pytest

from sketchlang.config import RuntimeConfig
from sketchlang.runtime import UNDEFINED, DrawCommand


class TestScopes:
    def test_loop_mutates_ancestor_variable(self, run_program) -> None:
        run = run_program(
            """
            x=0
            loop i=3 times:
                x=x+1
            """
        )

        assert run.get("x") == 3
        assert len(run.diagnostics) == 0

    def test_loop_variable_lives_in_loop_scope(self, run_program) -> None:
        run = run_program(
            """
            loop i=2 times:
                inner = i
            print(i)
            """
        )

        assert "i" not in run.driver.state.globals
        assert "inner" not in run.driver.state.globals
        assert run.messages == ['Variable "i" is not defined in the current scope.']

    def test_loop_scope_is_shared_across_iterations(self, run_program) -> None:
        run = run_program(
            """
            loop 3 times:
                if count:
                    count = count + 1
                else:
                    count = 1
                print(count)
            """
        )

        # the first read of count reports once, later iterations see the binding
        assert run.printed == ["1", "2", "3"]
        assert len(run.diagnostics) == 1

    def test_function_parameters_shadow_caller(self, run_program) -> None:
        run = run_program(
            """
            x = 1
            function show(x):
                print(x)
            show(5)
            print(x)
            """
        )

        assert run.printed == ["5", "1"]

    def test_function_writes_outer_variable(self, run_program) -> None:
        run = run_program(
            """
            total = 0
            function add(n):
                total = total + n
            add(2)
            add(3)
            """
        )

        assert run.get("total") == 5


class TestLoops:
    def test_print_loop_runs_each_index_once(self, run_program) -> None:
        run = run_program(
            """
            loop i=5 times:
                print(i)
            """
        )

        assert run.printed == ["0", "1", "2", "3", "4"]

    def test_count_is_evaluated_once(self, run_program) -> None:
        run = run_program(
            """
            n = 2
            loop i=n times:
                n = n + 10
            print(n)
            """
        )

        assert run.printed == ["22"]

    @pytest.mark.parametrize("count", ['"abc"', "[1, 2]", "ghost", "-3", "0"])
    def test_non_numeric_count_skips_loop(self, run_program, count: str) -> None:
        run = run_program(
            f"""
            loop i={count} times:
                print(i)
            """
        )

        assert run.printed == []

    def test_fractional_count_rounds_up_iterations(self, run_program) -> None:
        run = run_program("loop i=2.5 times:\n    print(i)\n")

        assert run.printed == ["0", "1", "2"]

    def test_while_loop(self, run_program) -> None:
        run = run_program(
            """
            n = 0
            loop while n < 3:
                n = n + 1
            print(n)
            """
        )

        assert run.printed == ["3"]


class TestConditionals:
    def test_if_else_branches(self, run_program) -> None:
        run = run_program(
            """
            x = 3
            if x > 2:
                print("big")
            else:
                print("small")
            if x > 5:
                print("huge")
            else:
                print("not huge")
            """
        )

        assert run.printed == ["big", "not huge"]

    def test_failed_condition_takes_else_branch(self, run_program) -> None:
        run = run_program("if ghost > 1:\n    print(1)\nelse:\n    print(2)\n")

        assert run.printed == ["2"]
        assert len(run.diagnostics) == 1


class TestAssignments:
    def test_indexed_assignment(self, run_program) -> None:
        run = run_program(
            """
            grid = [[0, 0], [0, 0]]
            grid[1][0] = 5
            """
        )

        assert run.get("grid") == [[0, 0], [5, 0]]

    def test_indexed_assignment_pads_list(self, run_program) -> None:
        run = run_program("xs = []\nxs[2] = 1\n")

        assert run.get("xs") == [UNDEFINED, UNDEFINED, 1]

    def test_indexed_assignment_on_missing_row_reports(self, run_program) -> None:
        run = run_program("grid = [[1]]\ngrid[3][0] = 2\nprint(grid)\n")

        assert run.messages[0] == "Cannot set property [3] on undefined object."
        assert run.printed == ["[[1]]"]

    def test_failed_value_leaves_variable_untouched(self, run_program) -> None:
        run = run_program("x = 1\nx = ghost + 1\nprint(x)\n")

        assert run.printed == ["1"]
        assert len(run.diagnostics) == 1


class TestFunctionsAndReturns:
    def test_return_value_used_in_expression(self, run_program) -> None:
        run = run_program(
            """
            function square(n):
                return n * n
            print(square(4) + 1)
            """
        )

        assert run.printed == ["17"]

    def test_first_direct_return_ends_function(self, run_program) -> None:
        run = run_program(
            """
            function f():
                print("before")
                return 1
                print("after")
            print(f())
            """
        )

        assert run.printed == ["before", "1"]

    def test_nested_return_is_ignored_by_default(self, run_program) -> None:
        run = run_program(
            """
            function pick(n):
                if n > 0:
                    return "positive"
                return "other"
            print(pick(1))
            """
        )

        assert run.printed == ["other"]

    def test_nested_return_propagates_when_enabled(self, run_program) -> None:
        run = run_program(
            """
            function pick(n):
                loop i=10 times:
                    if i == n:
                        return i
                return -1
            print(pick(3))
            """,
            config=RuntimeConfig(propagate_nested_return=True),
        )

        assert run.printed == ["3"]

    def test_missing_arguments_bind_undefined(self, run_program) -> None:
        run = run_program(
            """
            function show(a, b):
                print(a, b)
            show(1)
            """
        )

        assert run.printed == ["1 undefined"]

    def test_function_without_return_yields_undefined(self, run_program) -> None:
        run = run_program("function f():\n    x = 1\nprint(f())\n")

        assert run.printed == ["undefined"]

    def test_undefined_function_reports(self, run_program) -> None:
        run = run_program("nothing(1)\nprint(2)\n")

        assert run.messages[0] == 'Function "nothing" not defined.'
        assert run.printed == ["2"]

    def test_recursion_limit_reports_once(self, run_program) -> None:
        run = run_program(
            """
            function down(n):
                down(n + 1)
            down(0)
            print("after")
            """,
            config=RuntimeConfig(max_call_depth=20),
        )

        assert [d.code for d in run.diagnostics] == ["RECURSION_LIMIT"]
        assert run.printed == ["after"]

    def test_bounded_recursion_works(self, run_program) -> None:
        run = run_program(
            """
            function fact(n):
                if n <= 1:
                    result = 1
                else:
                    result = n * fact(n - 1)
                return result
            print(fact(5))
            """
        )

        assert run.printed == ["120"]


class TestDiagnostics:
    def test_overflowing_power_yields_infinity(self, run_program) -> None:
        run = run_program("x = 9 ** 9 ** 9\nprint(x, 1)\n")

        assert run.printed == ["Infinity 1"]
        assert len(run.diagnostics) == 0

    def test_deeply_nested_literal_is_reported_not_raised(self, run_program) -> None:
        run = run_program("xs = " + "[" * 2000 + "]" * 2000 + "\nprint(2)\n")

        assert run.printed == ["2"]
        assert [d.code for d in run.diagnostics] == ["EXPRESSION_FAILED"]
        assert "xs" not in run.driver.state.globals.vars

    def test_undefined_variable_reports_once_and_continues(self, run_program) -> None:
        run = run_program(
            """
            a = 1
            print(ghost)
            b = 2
            print(a + b)
            """
        )

        assert len(run.diagnostics) == 1
        assert run.diagnostics[0].line == 2
        assert run.diagnostics[0].code == "UNDEFINED_VARIABLE"
        assert run.printed == ["undefined", "3"]

    def test_unknown_statement_is_inert(self, run_program) -> None:
        run = run_program("this is not code\nprint(1)\n")

        assert run.printed == ["1"]
        assert len(run.diagnostics) == 0


class TestDrawing:
    def test_color_then_pop(self, run_program) -> None:
        run = run_program(
            """
            color(255,0,0)
            circle(1,1,1)
            popColor()
            circle(2,2,2)
            """
        )

        assert run.driver.state.commands == [
            DrawCommand("circle", (1, 1, 1), "rgb(255, 0, 0)"),
            DrawCommand("circle", (2, 2, 2), "rgb(0,0,0)"),
        ]

    def test_pop_color_on_empty_stack_keeps_default(self, run_program) -> None:
        run = run_program("popColor()\npopColor()\nrectangle(0, 0, 5, 5)\n")

        assert run.driver.state.commands == [DrawCommand("rectangle", (0, 0, 5, 5), "rgb(0,0,0)")]
        assert len(run.diagnostics) == 0

    def test_bad_draw_arguments_report_and_skip(self, run_program) -> None:
        run = run_program('circle(1, 2)\ncircle("a", 1, 1)\ncircle(1, 2, 3)\n')

        assert len(run.diagnostics) == 2
        assert len(run.driver.state.commands) == 1

    def test_canvas_size_is_stored_in_globals(self, run_program) -> None:
        run = run_program("CanvasSize=(400,300)\n")

        assert run.get("CanvasSize") == [400, 300]
        assert run.driver.canvas_size == (400, 300)
