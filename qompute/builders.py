"""
Builders that turn iterables into linear objects.

Example:
    >>> to_ket(complex(k, 0) for k in range(3))
    Ket([0j, (1+0j), (2+0j)])
    >>> to_operator([[0, 1], [1, 0]]).shape
    Shape(rows=2, cols=2)
"""

from typing import Iterable

from .braket import Bra, Ket, Operator


def to_ket(values: Iterable, dtype=None) -> Ket:
    """Collect an iterable of scalars into a Ket"""
    return Ket(values, dtype=dtype)


def to_bra(values: Iterable, dtype=None) -> Bra:
    """Collect an iterable of scalars into a Bra"""
    return Bra(values, dtype=dtype)


def to_operator(rows: Iterable[Iterable], dtype=None) -> Operator:
    """Collect an iterable of rows (real or complex entries) into an Operator"""
    return Operator([list(row) for row in rows], dtype=dtype)
