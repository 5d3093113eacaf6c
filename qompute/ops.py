"""
Arithmetic overlay for Ket, Bra, Operator and Scalar.

Free functions over borrowed operands; each returns a new object and never
mutates its inputs. The ``+``, ``-``, ``*`` and ``@`` operators on the linear
objects delegate here.

==========  ==================  ===========================================
Function    Operands            Precondition
==========  ==================  ===========================================
add, sub    X, X (same kind)    shapes equal
dot         Bra, Ket            ``bra.cols == ket.rows``
outer       Ket, Bra            ``ket.cols == bra.rows`` (always 1)
matmul      Operator, Operator  ``lhs.cols == rhs.rows``
scale       X, number           none
==========  ==================  ===========================================

.. note::
    ``dot`` is the plain (bilinear) product ``sum(bra[i] * ket[i])``. It
    does not conjugate the bra. For the Hermitian inner product <a|b> pass
    ``a.dagger()`` as the bra.
"""

import numbers
from typing import Callable, Optional, Union

import numpy as np

from .braket import Bra, Ket, Operator, Scalar
from .errors import ShapeMismatchError
from .shape import Shape


def is_scalar(value) -> bool:
    return isinstance(value, (Scalar, numbers.Number))


def _require_same_kind(lhs, rhs, operation: str):
    if type(lhs) is not type(rhs):
        raise TypeError(
            f"{operation} requires operands of the same kind, "
            f"got {type(lhs).__name__} and {type(rhs).__name__}"
        )


def _require_same_shape(lhs, rhs, operation: str):
    if lhs.shape != rhs.shape:
        raise ShapeMismatchError(lhs.shape, rhs.shape, operation)


def _result_dtype(lhs, rhs):
    return np.result_type(lhs.dtype, rhs.dtype)


# ============================================================================
# ELEMENTWISE
# ============================================================================

def add(lhs, rhs):
    """Elementwise sum of two same-kind, same-shape objects"""
    _require_same_kind(lhs, rhs, "add")
    if isinstance(lhs, Scalar):
        return Scalar(lhs.value + rhs.value)
    _require_same_shape(lhs, rhs, "add")
    return lhs._like(lhs._data + rhs._data)


def sub(lhs, rhs):
    """Elementwise difference of two same-kind, same-shape objects"""
    _require_same_kind(lhs, rhs, "sub")
    if isinstance(lhs, Scalar):
        return Scalar(lhs.value - rhs.value)
    _require_same_shape(lhs, rhs, "sub")
    return lhs._like(lhs._data - rhs._data)


def scale(obj, factor: Union[numbers.Number, Scalar]):
    """Multiply every entry of ``obj`` by ``factor``"""
    factor = complex(factor)
    if isinstance(obj, Scalar):
        return Scalar(obj.value * factor)
    return obj._like((obj._data * factor).astype(obj.dtype, copy=False))


# ============================================================================
# PRODUCTS
# ============================================================================

def dot(bra: Bra, ket: Ket) -> Scalar:
    """
    Bra x Ket -> Scalar, ``sum(bra[i] * ket[i])``.

    The bra is used as given (no conjugation).

    Raises:
        ShapeMismatchError: if ``bra.cols != ket.rows``
    """
    if bra.cols != ket.rows:
        raise ShapeMismatchError(Shape(bra.cols, 1), ket.shape, "dot")
    lhs, rhs = bra._data.tolist(), ket._data.tolist()
    total = 0j
    for a, b in zip(lhs, rhs):
        total += a * b
    return Scalar(total)


def outer(ket: Ket, bra: Bra) -> Operator:
    """
    Ket x Bra -> rank-1 Operator of shape (len(ket), len(bra)).

    Entry ``(i, j) = ket[i] * bra[j]``.
    """
    if ket.cols != bra.rows:
        raise ShapeMismatchError(Shape(ket.cols, bra.cols), bra.shape, "outer")
    rows, cols = ket.rows, bra.cols
    out = Operator.with_shape((rows, cols), dtype=_result_dtype(ket, bra))
    lhs, rhs = ket._data.tolist(), bra._data.tolist()
    data = out._data
    for i in range(rows):
        for j in range(cols):
            data[i * cols + j] = lhs[i] * rhs[j]
    return out


def matmul(lhs: Operator, rhs: Operator) -> Operator:
    """
    Operator x Operator matrix product.

    Result shape is (lhs.rows, rhs.cols); entry ``(i, j)`` is
    ``sum_k lhs[i, k] * rhs[k, j]``.

    Raises:
        ShapeMismatchError: if ``lhs.cols != rhs.rows``
    """
    if lhs.cols != rhs.rows:
        raise ShapeMismatchError(Shape(lhs.cols, rhs.cols), rhs.shape, "matmul")
    rows, inner, cols = lhs.rows, lhs.cols, rhs.cols
    out = Operator.with_shape((rows, cols), dtype=_result_dtype(lhs, rhs))
    a, b = lhs._data.tolist(), rhs._data.tolist()
    data = out._data
    for i in range(rows):
        for j in range(cols):
            acc = 0j
            for k in range(inner):
                acc += a[i * inner + k] * b[k * cols + j]
            data[i * cols + j] = acc
    return out


_PRODUCTS = {
    (Bra, Ket): dot,
    (Ket, Bra): outer,
    (Operator, Operator): matmul,
}


def resolve(lhs, rhs) -> Optional[Callable]:
    """Function implementing ``lhs * rhs``, or None if the pair is unsupported"""
    if is_scalar(rhs) and isinstance(lhs, (Ket, Bra, Operator, Scalar)):
        return scale
    return _PRODUCTS.get((type(lhs), type(rhs)))


def multiply(lhs, rhs):
    """
    Dispatch ``lhs * rhs`` to dot, outer, matmul or scale.

    Raises:
        TypeError: for unsupported operand kinds
    """
    if is_scalar(lhs) and not is_scalar(rhs):
        lhs, rhs = rhs, lhs
    func = resolve(lhs, rhs)
    if func is None:
        raise TypeError(
            f"Cannot multiply {type(lhs).__name__} by {type(rhs).__name__}"
        )
    return func(lhs, rhs)
