from __future__ import annotations

"""
Exact rational numbers for the simplex tableau.

A Rational keeps its magnitude as an unsigned numerator/denominator pair in
lowest terms and its sign separately. Zero is always 0/1 and positive.
Values are immutable: every operation returns a new Rational.
"""

from enum import Enum
from typing import Tuple, Union

from .errors import DivisionByZero


class Sign(Enum):
    POSITIVE = 1
    NEGATIVE = -1

    def flip(self) -> "Sign":
        return Sign.NEGATIVE if self is Sign.POSITIVE else Sign.POSITIVE

    def xor(self, other: "Sign") -> "Sign":
        return Sign.POSITIVE if self is other else Sign.NEGATIVE


def _trailing_zeros(x: int) -> int:
    return (x & -x).bit_length() - 1


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of two non-negative ints (Stein's algorithm)."""
    if a < 0 or b < 0:
        raise ValueError("gcd expects non-negative integers")
    if a == 0 or b == 0:
        return a | b

    # common factors of two
    shift = _trailing_zeros(a | b)
    a >>= _trailing_zeros(a)
    b >>= _trailing_zeros(b)

    while a != b:
        if a > b:
            a -= b
            a >>= _trailing_zeros(a)
        else:
            b -= a
            b >>= _trailing_zeros(b)
    return a << shift


def lcm(a: int, b: int) -> int:
    if a == 0 and b == 0:
        return 0
    return a * (b // gcd(a, b))


Operand = Union["Rational", int]


class Rational:
    __slots__ = ("_numerator", "_denominator", "_sign")

    def __init__(self, value: int = 0):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Rational expects an int, got {type(value).__name__}")
        self._numerator = abs(value)
        self._denominator = 1
        self._sign = Sign.NEGATIVE if value < 0 else Sign.POSITIVE

    @classmethod
    def _reduced(cls, numerator: int, denominator: int, sign: Sign) -> "Rational":
        # numerator >= 0, denominator > 0
        obj = cls.__new__(cls)
        if numerator == 0:
            obj._numerator, obj._denominator, obj._sign = 0, 1, Sign.POSITIVE
            return obj
        d = gcd(numerator, denominator)
        obj._numerator = numerator // d
        obj._denominator = denominator // d
        obj._sign = sign
        return obj

    @classmethod
    def from_ratio(cls, numerator: int, denominator: int) -> "Rational":
        """Build numerator/denominator from two ints; same as dividing them."""
        return cls(numerator).divide(cls(denominator))

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def sign(self) -> Sign:
        return self._sign

    def is_zero(self) -> bool:
        return self._numerator == 0

    def is_negative(self) -> bool:
        return self._sign is Sign.NEGATIVE

    def is_one(self) -> bool:
        return self._numerator == 1 and self._denominator == 1 and self._sign is Sign.POSITIVE

    # --- arithmetic ---

    def negate(self) -> "Rational":
        if self.is_zero():
            return self
        return Rational._reduced(self._numerator, self._denominator, self._sign.flip())

    def add(self, other: Operand) -> "Rational":
        other = _coerce(other)
        q = lcm(self._denominator, other._denominator)
        p1 = self._numerator * (q // self._denominator)
        p2 = other._numerator * (q // other._denominator)

        if self._sign is other._sign:
            return Rational._reduced(p1 + p2, q, self._sign)
        # opposite signs: larger magnitude wins the sign
        if p1 >= p2:
            return Rational._reduced(p1 - p2, q, self._sign)
        return Rational._reduced(p2 - p1, q, other._sign)

    def subtract(self, other: Operand) -> "Rational":
        return self.add(_coerce(other).negate())

    def multiply(self, other: Operand) -> "Rational":
        other = _coerce(other)
        return Rational._reduced(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
            self._sign.xor(other._sign),
        )

    def divide(self, other: Operand) -> "Rational":
        other = _coerce(other)
        if other.is_zero():
            raise DivisionByZero(f"cannot divide {self} by zero")
        if self.is_zero():
            return Rational()
        return Rational._reduced(
            self._numerator * other._denominator,
            self._denominator * other._numerator,
            self._sign.xor(other._sign),
        )

    def compare(self, other: Operand) -> int:
        """Return -1, 0 or 1 as self is less than, equal to or greater than other."""
        other = _coerce(other)
        if self._sign is not other._sign:
            return 1 if self._sign is Sign.POSITIVE else -1
        left = self._numerator * other._denominator
        right = other._numerator * self._denominator
        result = (left > right) - (left < right)
        if self._sign is Sign.NEGATIVE:
            result = -result
        return result

    # --- conversions ---

    def to_float(self) -> float:
        q = self._numerator / self._denominator
        return q if self._sign is Sign.POSITIVE else -q

    def as_tuple(self) -> Tuple[int, int]:
        """Signed (numerator, denominator) pair."""
        return (self._sign.value * self._numerator, self._denominator)

    # --- Python protocol ---

    def __add__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return _coerce(other).add(self)

    def __sub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return _coerce(other).subtract(self)

    def __mul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return _coerce(other).multiply(self)

    def __truediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return _coerce(other).divide(self)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.negate() if self.is_negative() else self

    def __eq__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self):
        # integral values hash like the equal int
        if self._denominator == 1:
            return hash(self._sign.value * self._numerator)
        return hash(self.as_tuple())

    def __bool__(self):
        return not self.is_zero()

    def __float__(self):
        return self.to_float()

    def __str__(self):
        sign = "-" if self.is_negative() else ""
        if self._denominator == 1:
            return f"{sign}{self._numerator}"
        return f"{sign}{self._numerator}/{self._denominator}"

    def __repr__(self):
        return f"Rational({self})"


def _is_operand(x) -> bool:
    return isinstance(x, Rational) or (isinstance(x, int) and not isinstance(x, bool))


def _coerce(x: Operand) -> Rational:
    if isinstance(x, Rational):
        return x
    return Rational(x)


ZERO = Rational(0)
ONE = Rational(1)
