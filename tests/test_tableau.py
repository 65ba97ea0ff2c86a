from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from multigrains.errors import InvalidCoefficientCount, Unbounded
from multigrains.rational import Rational
from multigrains.tableau import SolvedSimplex, TableauBuilder


def Q(p, q=1):
    return Rational.from_ratio(p, q)


def two_products(b1=4, b2=6):
    # max 2x1 + 3x2  s.t.  x1 + x2 <= b1,  x1 + 2x2 <= b2
    return TableauBuilder([2, 3]).add_constraint([1, 1], b1).add_constraint([1, 2], b2)


def test_builder_negates_objective():
    builder = TableauBuilder([2, 3])
    assert builder.target_function.coefficients == [Q(-2), Q(-3)]
    assert builder.target_function.value == 0


def test_builder_rows_share_width():
    builder = TableauBuilder([1, 2, 3])
    for k, row in enumerate([[1, 0, 0], [0, 1, 0], [0, 0, 1], [1, 1, 1]]):
        builder.add_constraint(row, 10)
        widths = {c.width for c in builder.constraints} | {builder.target_function.width}
        assert widths == {3 + k + 1}


def test_builder_layout():
    tab = two_products().get_tableau()
    assert [c.coefficients for c in tab.constraints] == [
        [Q(1), Q(1), Q(1), Q(0), Q(0)],
        [Q(1), Q(2), Q(0), Q(1), Q(0)],
    ]
    assert [c.value for c in tab.constraints] == [Q(4), Q(6)]
    assert tab.target_function.coefficients == [Q(-2), Q(-3), Q(0), Q(0), Q(1)]
    assert tab.target_function.value == 0
    assert tab.var_names == ["x1", "x2", "s1", "s2", "Z"]


def test_builder_rejects_wrong_coefficient_count():
    with pytest.raises(InvalidCoefficientCount):
        TableauBuilder([1, 2]).add_constraint([1, 2, 3], 4)
    builder = TableauBuilder([1, 2]).add_constraint([1, 2], 4)
    with pytest.raises(InvalidCoefficientCount, match="expected 2, got 1"):
        builder.add_constraint([1], 4)
    with pytest.raises(ValueError):
        builder.add_constraint([1, 2, 3], 4)


def test_builder_is_single_use():
    builder = two_products()
    builder.get_tableau()
    with pytest.raises(RuntimeError):
        builder.get_tableau()
    with pytest.raises(RuntimeError):
        builder.add_constraint([1, 1], 1)


def test_pivot_column_lowest_index_wins_ties():
    tab = TableauBuilder([3, 5, 5]).add_constraint([1, 1, 1], 4).get_tableau()
    assert tab.pivot_column() == 1
    tab = TableauBuilder([0, 0]).add_constraint([1, 1], 4).get_tableau()
    assert tab.is_optimal()
    assert tab.pivot_column() is None


def test_pivot_row_minimum_ratio():
    tab = two_products().get_tableau()
    assert tab.pivot_row(1) == 1      # 6/2 < 4/1
    assert tab.pivot_row(0) == 0      # 4/1 < 6/1
    tab = two_products(0, 0).get_tableau()
    assert tab.pivot_row(1) == 0      # tie at zero, first row wins


def test_pivot_row_skips_negative_ratios():
    tab = TableauBuilder([1]).add_constraint([-1], 3).add_constraint([2], 8).get_tableau()
    assert tab.pivot_row(0) == 1
    solved = tab.solve()
    assert list(solved.coefficients) == [Q(4), Q(7), Q(0), Q(4)]


def test_pivot_leaves_unit_column():
    tab = two_products().get_tableau()
    tab.pivot(1, 1)
    column = [row.coefficients[1] for row in tab.rows()]
    assert column == [Q(0), Q(1), Q(0)]
    assert tab.constraints[1].coefficients == [Q(1, 2), Q(1), Q(0), Q(1, 2), Q(0)]
    assert tab.constraints[1].value == 3
    assert tab.target_function.value == 9


def test_pivot_invariant_every_iteration():
    tab = two_products().get_tableau()
    while not tab.is_optimal():
        col = tab.pivot_column()
        row = tab.pivot_row(col)
        tab.pivot(row, col)
        for i, r in enumerate(tab.rows()):
            assert r.coefficients[col] == (1 if i == row else 0)


def test_solve_two_products():
    solved = two_products().get_tableau().solve()
    assert list(solved.coefficients) == [Q(2), Q(2), Q(0), Q(0), Q(10)]
    assert solved.objective == 10
    assert solved.iterations == 2


def test_solve_single_constraint():
    solved = TableauBuilder([1]).add_constraint([1], 5).get_tableau().solve()
    assert solved.get(0) == 5.0
    assert solved.objective_value == 5.0
    assert list(solved.coefficients) == [Q(5), Q(0), Q(5)]


def test_solve_zero_resources():
    solved = two_products(0, 0).get_tableau().solve()
    assert all(c == 0 for c in solved.coefficients)


def test_solve_fractional_optimum():
    # max x1 + x2  s.t.  2x1 + x2 <= 4,  x1 + 3x2 <= 6  ->  x1 = 6/5, x2 = 8/5
    tab = TableauBuilder([1, 1]).add_constraint([2, 1], 4).add_constraint([1, 3], 6).get_tableau()
    solved = tab.solve()
    assert solved[0] == Q(6, 5)
    assert solved[1] == Q(8, 5)
    assert solved.objective == Q(14, 5)
    assert tab.is_optimal()


def test_unbounded():
    tab = TableauBuilder([1]).add_constraint([-1], 5).get_tableau()
    with pytest.raises(Unbounded):
        tab.solve()
    tab = TableauBuilder([1, 1]).add_constraint([1, 0], 5).get_tableau()
    with pytest.raises(Unbounded) as exc:
        tab.solve()
    assert exc.value.column == 1


def test_tableau_is_consumed_by_solve():
    tab = two_products().get_tableau()
    tab.solve()
    with pytest.raises(RuntimeError):
        tab.solve()


def test_verbose_prints_iterations(capsys):
    two_products().get_tableau().solve(verbose=True)
    out = capsys.readouterr().out
    assert "Initial tableau" in out
    assert "Iteration 1" in out
    assert "Final tableau (Iteration 2)" in out
    assert "⭕2" in out
    assert "RHS" in out


def test_solved_simplex_access():
    solved = SolvedSimplex(coefficients=(Q(1, 2), Q(0), Q(3)))
    assert len(solved) == 3
    assert solved.get(0) == 0.5
    assert solved.objective == 3
    with pytest.raises(IndexError):
        solved.get(3)
