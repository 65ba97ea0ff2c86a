from __future__ import annotations

"""
Simplex (Tableau) solver over exact Rationals.
- Maximization with <= constraints only; one slack column per constraint.
- Builder assembles the standard-form tableau row by row.
- Pivots with the most negative objective coefficient and the minimum-ratio
  test, lowest index winning ties on both.
- Optionally prints each tableau iteration.

Tableau layout per row: [x1..xn, s1..sm, Z] with the right-hand side kept in
Constraint.value. The objective row stores the negated prices.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .errors import InvalidCoefficientCount, Unbounded
from .rational import ONE, ZERO, Rational

Num = Union[int, Rational]


def R(x: Num) -> Rational:
    """Convert an int to a Rational; Rationals pass through."""
    if isinstance(x, Rational):
        return x
    return Rational(x)


@dataclass
class Constraint:
    coefficients: List[Rational]
    value: Rational

    @property
    def width(self) -> int:
        return len(self.coefficients)


@dataclass(frozen=True)
class SolvedSimplex:
    # one entry per tableau column, the last one is the objective value
    coefficients: Tuple[Rational, ...]
    iterations: int = 0

    def __len__(self) -> int:
        return len(self.coefficients)

    def __getitem__(self, index: int) -> Rational:
        return self.coefficients[index]

    def get(self, index: int) -> float:
        """Value of column `index` at the optimum, as a float for display."""
        return self.coefficients[index].to_float()

    @property
    def objective(self) -> Rational:
        return self.coefficients[-1]

    @property
    def objective_value(self) -> float:
        return self.objective.to_float()


class TableauBuilder:
    def __init__(self, target_function: Sequence[Num]):
        self.constraints: List[Constraint] = []
        self.target_function = Constraint(
            coefficients=[R(c).negate() for c in target_function],
            value=ZERO,
        )
        self._finished = False

    def add_constraint(self, coefficients: Sequence[Num], value: Num) -> "TableauBuilder":
        if self._finished:
            raise RuntimeError("builder already produced its tableau")
        width = len(coefficients) + len(self.constraints)

        if any(c.width != width for c in self.constraints) or self.target_function.width != width:
            expected = self.target_function.width - len(self.constraints)
            raise InvalidCoefficientCount(
                f"Invalid number of coefficients: expected {expected}, got {len(coefficients)}"
            )

        # pad with the slack columns of the constraints already added
        row = [R(c) for c in coefficients] + [ZERO] * len(self.constraints)
        self.constraints.append(Constraint(coefficients=row, value=R(value)))

        # new slack column, unit entry on its own row
        for c in self.constraints:
            c.coefficients.append(ZERO)
        self.constraints[-1].coefficients[-1] = ONE
        self.target_function.coefficients.append(ZERO)
        return self

    def get_tableau(self) -> "Tableau":
        if self._finished:
            raise RuntimeError("builder already produced its tableau")
        self._finished = True
        # objective-value column
        for c in self.constraints:
            c.coefficients.append(ZERO)
        self.target_function.coefficients.append(ONE)
        return Tableau(self.constraints, self.target_function)


class Tableau:
    def __init__(self, constraints: List[Constraint], target_function: Constraint):
        self.constraints = constraints
        self.target_function = target_function
        self.m = len(constraints)
        self.cols = target_function.width
        self.num_vars = self.cols - self.m - 1   # decision variables
        self.var_names = (
            [f"x{j+1}" for j in range(self.num_vars)]
            + [f"s{i+1}" for i in range(self.m)]
            + ["Z"]
        )
        self.iter = 0
        self._solved = False

    def rows(self) -> List[Constraint]:
        """Constraint rows followed by the objective row."""
        return self.constraints + [self.target_function]

    def print_tableau(self, header: str = "", enter_j: Optional[int] = None, leave_i: Optional[int] = None):
        title = header or f"Iteration {self.iter}"
        print(f"\n{title}")
        headers = ["Row"] + self.var_names + ["RHS", "Ratio"]

        labels = [f"R{i+1}" for i in range(self.m)] + ["Z"]
        table: List[List[str]] = []
        for i, row in enumerate(self.rows()):
            cells = [labels[i]]
            for j, coeff in enumerate(row.coefficients):
                cell = str(coeff)
                if i == leave_i and j == enter_j:
                    cell = f"⭕{cell}"
                cells.append(cell)
            cells.append(str(row.value))
            ratio_cell = ""
            if enter_j is not None and i < self.m:
                ratio = self._ratio(row, enter_j)
                if ratio is not None:
                    ratio_cell = str(ratio)
            cells.append(ratio_cell)
            table.append(cells)

        colw = max(6, max(len(s) for s in headers + [c for r in table for c in r]) + 2)
        print(" ".join(f"{h:>{colw}}" for h in headers))
        print("-" * (len(headers) * (colw + 1)))
        for cells in table:
            print(" ".join(f"{c:>{colw}}" for c in cells))

    def is_optimal(self) -> bool:
        return not any(c.is_negative() for c in self.target_function.coefficients)

    def pivot_column(self) -> Optional[int]:
        best_j = None
        best_val = ZERO
        for j, rc in enumerate(self.target_function.coefficients):
            if rc < best_val:
                best_val = rc
                best_j = j
        return best_j

    @staticmethod
    def _ratio(row: Constraint, col: int) -> Optional[Rational]:
        aij = row.coefficients[col]
        if aij.is_zero():
            return None
        ratio = row.value / aij
        if ratio.is_negative():
            return None
        return ratio

    def pivot_row(self, enter_j: int) -> int:
        best_i = None
        best_ratio: Optional[Rational] = None
        for i, row in enumerate(self.constraints):
            ratio = self._ratio(row, enter_j)
            if ratio is None:
                continue
            if best_ratio is None or ratio < best_ratio:
                best_ratio = ratio
                best_i = i
        if best_i is None:
            raise Unbounded(enter_j)
        return best_i

    def pivot(self, row: int, col: int):
        pivot_row = self.constraints[row]
        piv = pivot_row.coefficients[col]
        pivot_row.coefficients = [c / piv for c in pivot_row.coefficients]
        pivot_row.value = pivot_row.value / piv

        for other in self.rows():
            if other is pivot_row:
                continue
            coeff = other.coefficients[col]
            if coeff.is_zero():
                continue
            other.coefficients = [
                c - coeff * p for c, p in zip(other.coefficients, pivot_row.coefficients)
            ]
            other.value = other.value - coeff * pivot_row.value

    def solve(self, verbose: bool = False) -> SolvedSimplex:
        if self._solved:
            raise RuntimeError("tableau was already solved")
        self._solved = True
        if verbose:
            print("\nInitial tableau")
            self.print_tableau(header=f"Iteration {self.iter}")
        while True:
            enter_j = self.pivot_column()
            if enter_j is None:
                if verbose:
                    self.print_tableau(header=f"Final tableau (Iteration {self.iter})")
                return self.extract_solution()
            leave_i = self.pivot_row(enter_j)
            self.iter += 1
            if verbose:
                self.print_tableau(header=f"Iteration {self.iter}", enter_j=enter_j, leave_i=leave_i)
            self.pivot(leave_i, enter_j)

    def extract_solution(self) -> SolvedSimplex:
        rows = self.rows()
        values: List[Rational] = []
        for j in range(self.cols):
            unit_rows = [row for row in rows if row.coefficients[j].is_one()]
            nonzero = sum(1 for row in rows if not row.coefficients[j].is_zero())
            # a true identity column, not a stray 1 among other entries
            if len(unit_rows) == 1 and nonzero == 1:
                values.append(unit_rows[0].value)
            else:
                values.append(ZERO)
        return SolvedSimplex(coefficients=tuple(values), iterations=self.iter)
