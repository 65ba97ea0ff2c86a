from .errors import DivisionByZero, InvalidCoefficientCount, SimplexError, Unbounded
from .rational import Rational
from .tableau import Constraint, SolvedSimplex, Tableau, TableauBuilder
