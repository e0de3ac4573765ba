## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Exact arithmetic over `Fraction`, which is always kept reduced with a positive denominator.
#

from fractions import Fraction

from .errors import AjisaiDivisionByZero, AjisaiParseError


def make_fraction(numerator: int, denominator: int = 1) -> Fraction:
    if denominator == 0:
        raise AjisaiDivisionByZero(f"Fraction {numerator}/{denominator} has a zero denominator.")
    return Fraction(numerator, denominator)


def parse_decimal(sign: str, integer: str, places: str) -> Fraction:
    """Convert `int.int` text to an exact fraction, keeping the sign across both parts."""
    scale = 10 ** len(places)
    value = make_fraction(int(integer) * scale + int(places), scale)
    return -value if sign == '-' else value


def parse_fraction(numerator: str, denominator: str) -> Fraction:
    if int(denominator) == 0:
        raise AjisaiParseError(f"Fraction literal `{numerator}/{denominator}` has a zero denominator.",
                               token=f"{numerator}/{denominator}")
    return make_fraction(int(numerator), int(denominator))


def is_integer(value: Fraction) -> bool:
    return value.denominator == 1


def add(a: Fraction, b: Fraction) -> Fraction: return a + b
def sub(a: Fraction, b: Fraction) -> Fraction: return a - b
def mul(a: Fraction, b: Fraction) -> Fraction: return a * b

def div(a: Fraction, b: Fraction) -> Fraction:
    if b == 0:
        raise AjisaiDivisionByZero(f"Cannot divide {a} by zero.", word='/')
    return a / b

# Comparisons cross-multiply, so never round: a/b > c/d  ⇔  a·d > c·b  with b, d > 0.
def gt(a: Fraction, b: Fraction) -> bool: return a.numerator * b.denominator > b.numerator * a.denominator
def gte(a: Fraction, b: Fraction) -> bool: return a.numerator * b.denominator >= b.numerator * a.denominator
def eq(a: Fraction, b: Fraction) -> bool: return a.numerator * b.denominator == b.numerator * a.denominator
def lt(a: Fraction, b: Fraction) -> bool: return gt(b, a)
def lte(a: Fraction, b: Fraction) -> bool: return gte(b, a)


def format_fraction(value: Fraction) -> str:
    if value.denominator == 1:
        return str(value.numerator)
    return f"{value.numerator}/{value.denominator}"
