import gc
import io

import polars as pl
import pytest

from lpbridge import BinaryVar, ContinuousVar, IntegerVar, Problem, SolutionFormatError
from lpbridge.exprs import Expr
from lpbridge.solvers import Solution, Status, read_solution_file


@pytest.fixture
def problem() -> Problem:
    x, n, b = ContinuousVar("x"), IntegerVar("n", lower_bound=0), BinaryVar("b")
    return Problem("p").maximize(2 * x + n - b).add_constr(x + n <= 4)


# --- Solution file parsing ---


def test_read_solution_file():
    solution = read_solution_file(io.StringIO("header\nx1 1.5\nx2 2.0\n"))

    assert solution.results == {"x1": 1.5, "x2": 2.0}
    assert solution.status is Status.OPTIMAL
    assert solution.problem is None


def test_read_solution_file_skips_comments():
    solution = read_solution_file(
        io.StringIO("# Solution for model p\n# Objective value = 3\nx1 1.5\n# comment\nx2 -2\n")
    )
    assert solution.results == {"x1": 1.5, "x2": -2.0}


def test_read_solution_file_header_is_ignored():
    solution = read_solution_file(io.StringIO("x0 10\nx1 1\n"))
    assert solution.results == {"x1": 1.0}


def test_read_solution_file_last_value_wins():
    solution = read_solution_file(io.StringIO("header\nx 1\nx 2\n"))
    assert solution.results == {"x": 2.0}


def test_read_solution_file_header_only():
    assert read_solution_file(io.StringIO("header\n")).results == {}


def test_read_solution_file_empty():
    with pytest.raises(SolutionFormatError, match="the file is empty"):
        read_solution_file(io.StringIO(""))


@pytest.mark.parametrize("line", ["x1 1.5 extra", "x1", ""])
def test_read_solution_file_wrong_token_count(line: str):
    with pytest.raises(SolutionFormatError, match="Incorrect solution format at line 3"):
        read_solution_file(io.StringIO(f"header\nx0 1\n{line}\nx2 2\n"))


def test_read_solution_file_invalid_number():
    with pytest.raises(SolutionFormatError, match="Invalid value 'notanumber' for variable 'x1'"):
        read_solution_file(io.StringIO("header\nx1 notanumber\n"))


def test_format_error_is_a_value_error():
    with pytest.raises(ValueError):
        read_solution_file(io.StringIO("header\nx1 1.5 extra\n"))


def test_read_solution_file_binds_problem(problem: Problem):
    solution = read_solution_file(io.StringIO("header\nx 1\n"), problem)
    assert solution.problem is problem


# --- Solution ---


def test_problem_is_weakly_referenced():
    problem = Problem("p")
    solution = Solution.from_results(Status.OPTIMAL, {"x": 1.0}, problem)
    assert solution.problem is problem

    del problem
    gc.collect()
    assert solution.problem is None
    assert solution.results == {"x": 1.0}


def test_with_status(problem: Problem):
    solution = Solution.from_results(Status.OPTIMAL, {"x": 1.0}, problem)
    infeasible = solution.with_status(Status.INFEASIBLE)

    assert infeasible.status is Status.INFEASIBLE
    assert infeasible.results is solution.results
    assert infeasible.problem is problem
    assert solution.status is Status.OPTIMAL


def test_get_variable_value():
    solution = Solution.from_results(Status.OPTIMAL, {"x": 1.5})
    assert solution.get_variable_value("x") == 1.5
    with pytest.raises(KeyError):
        solution.get_variable_value("y")


def test_eval():
    x, y = ContinuousVar("x"), ContinuousVar("y")
    solution = Solution.from_results(Status.OPTIMAL, {"x": 2.0, "y": 3.0})

    assert solution.eval(2 * x + y) == 7.0
    assert solution.eval(x - y * 2) == -4.0
    assert solution.eval(-x) == -2.0
    assert solution.eval(x + ContinuousVar("missing")) == 2.0
    assert solution.eval(4) == 4.0


def test_get_objective_value(problem: Problem):
    solution = Solution.from_results(Status.OPTIMAL, {"x": 1.5, "n": 2.0, "b": 1.0}, problem)
    assert solution.get_objective_value() == pytest.approx(4.0)


def test_get_objective_value_errors():
    with pytest.raises(Exception, match="not bound to a problem"):
        Solution.from_results(Status.OPTIMAL, {}).get_objective_value()

    problem = Problem("no_obj")
    with pytest.raises(Exception, match="has no objective"):
        Solution.from_results(Status.OPTIMAL, {}, problem).get_objective_value()


def test_to_frame(problem: Problem):
    solution = Solution.from_results(Status.OPTIMAL, {"x": 1.5, "n": 2.0, "other": 0.0}, problem)

    df = solution.to_frame()

    assert df.schema == pl.Schema({"name": pl.String, "vtype": pl.String, "value": pl.Float64})
    assert df.to_dicts() == [
        {"name": "x", "vtype": "CONTINUOUS", "value": 1.5},
        {"name": "n", "vtype": "INTEGER", "value": 2.0},
        {"name": "other", "vtype": None, "value": 0.0},
    ]


def test_to_frame_without_problem():
    df = Solution.from_results(Status.OPTIMAL, {"x": 1.5}).to_frame()
    assert df["vtype"].to_list() == [None]


@pytest.mark.parametrize(
    ("names", "dtype", "expected"),
    [
        (["x"], pl.Float64, [1.5]),
        (["n"], pl.Int32, [1]),
        (["b"], pl.Boolean, [True]),
        (["x", "n"], pl.Float64, [1.5, 0.9999999]),
    ],
)
def test_get_variable_values(problem: Problem, names: list[str], dtype, expected: list):
    solution = Solution.from_results(
        Status.OPTIMAL, {"x": 1.5, "n": 0.9999999, "b": 1.0}, problem
    )

    result = solution.get_variable_values(names)

    assert result.name == "value"
    assert result.dtype == dtype
    assert result.to_list() == expected


def test_get_variable_values_without_problem():
    solution = Solution.from_results(Status.OPTIMAL, {"n": 2.0})
    result = solution.get_variable_values(["n"], alias="n")
    assert result.name == "n"
    assert result.dtype == pl.Float64


def test_eval_long_builtin_sum():
    xs = [ContinuousVar(f"x{i}") for i in range(10_000)]
    solution = Solution.from_results(Status.OPTIMAL, {x.name: 1.0 for x in xs})

    assert solution.eval(sum(xs)) == 10_000.0
    assert solution.eval(sum(xs) - sum(2 * x for x in xs)) == -10_000.0


def test_eval_unknown_node_raises():
    class Unknown(Expr):
        pass

    solution = Solution.from_results(Status.OPTIMAL, {"x": 1.0})
    with pytest.raises(TypeError, match="Cannot evaluate Unknown"):
        solution.eval(ContinuousVar("x") + Unknown())


def test_solution_is_hashable():
    solution = Solution.from_results(Status.OPTIMAL, {"x": 1.0})
    other = Solution.from_results(Status.OPTIMAL, {"x": 1.0})

    assert hash(solution) == hash(solution)
    assert len({solution, other}) == 2
    assert solution.with_status(Status.INFEASIBLE) is not solution
