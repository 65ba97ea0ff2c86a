from __future__ import annotations

"""
Fertilizer/grain production problem.

Four fertilizers (F1..F4) are consumed by five grains. Given the tons of each
fertilizer available and the unit price of each grain, find the production
plan with the highest total value.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import InvalidCoefficientCount
from .rational import Rational
from .tableau import Tableau, TableauBuilder

FERTILIZERS = ("F1", "F2", "F3", "F4")
GRAINS = ("Oat", "Wheat", "Corn", "Barley", "Soy")

# tons of fertilizer (rows) needed per unit of grain (columns)
CONSUMPTION: Tuple[Tuple[int, ...], ...] = (
    (1, 0, 1, 0, 2),
    (1, 2, 0, 1, 0),
    (2, 1, 0, 1, 0),
    (0, 0, 3, 1, 2),
)


@dataclass
class FarmPlan:
    resources: List[int]
    prices: List[int]
    quantities: List[Rational]
    total: Rational
    iterations: int


def build_tableau(resources: Sequence[int], prices: Sequence[int]) -> Tableau:
    if len(resources) != len(FERTILIZERS):
        raise InvalidCoefficientCount(
            f"expected {len(FERTILIZERS)} resource quantities, got {len(resources)}"
        )
    if len(prices) != len(GRAINS):
        raise InvalidCoefficientCount(f"expected {len(GRAINS)} prices, got {len(prices)}")

    builder = TableauBuilder(prices)
    for row, limit in zip(CONSUMPTION, resources):
        builder.add_constraint(row, limit)
    return builder.get_tableau()


def solve_farm(resources: Sequence[int], prices: Sequence[int], verbose: bool = False) -> FarmPlan:
    tab = build_tableau(resources, prices)
    solved = tab.solve(verbose=verbose)
    return FarmPlan(
        resources=list(resources),
        prices=list(prices),
        quantities=[solved[j] for j in range(len(GRAINS))],
        total=solved.objective,
        iterations=solved.iterations,
    )


def fmt_quantity(x: Rational) -> str:
    if x.is_zero():
        return "0"
    return f"{x.to_float():.2f}"


def format_report(plan: FarmPlan) -> str:
    resources = ", ".join(f"{n} {name}" for n, name in zip(plan.resources, FERTILIZERS))
    lines = [f"Resources: {resources}", ""]
    for name, qty, price in zip(GRAINS, plan.quantities, plan.prices):
        lines.append(f"{name}: {fmt_quantity(qty)} units at ${price}/unit")
    lines.append("")
    lines.append(f"Total production value: ${plan.total.to_float():.2f}")
    return "\n".join(lines)
