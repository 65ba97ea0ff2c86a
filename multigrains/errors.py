"""Fatal conditions raised by the exact simplex core."""


class SimplexError(Exception):
    pass


class InvalidCoefficientCount(SimplexError, ValueError):
    """A constraint row does not fit the columns already in the tableau."""


class DivisionByZero(SimplexError, ZeroDivisionError):
    pass


class Unbounded(SimplexError, RuntimeError):
    """No row passes the minimum-ratio test for the entering column."""

    def __init__(self, column: int):
        super().__init__(f"problem is unbounded: no pivot row for column {column}")
        self.column = column
