"""
Kronecker products and block-matrix assembly.

For a left operand of shape (R0, C0) and a right operand of shape (R1, C1)
the Kronecker product has shape (R0 * R1, C0 * C1) with

    out[i0 * R1 + i1, j0 * C1 + j1] = lhs[i0, j0] * rhs[i1, j1]

Every product materialises the full dense result.
"""

import functools
import logging
from typing import Iterable, Sequence

import numpy as np

from .braket import Bra, Ket, Operator, Scalar
from .errors import EmptyInputError, NonMatchingSizesError
from .shape import Shape

log = logging.getLogger(__name__)


def _kron_vector(lhs, rhs):
    a, b = lhs._data.tolist(), rhs._data.tolist()
    n1 = len(b)
    out = type(lhs).zeros(len(a) * n1, dtype=np.result_type(lhs.dtype, rhs.dtype))
    data = out._data
    for i0, x in enumerate(a):
        offset = i0 * n1
        for i1, y in enumerate(b):
            data[offset + i1] = x * y
    return out


def _kron_operator(lhs: Operator, rhs: Operator) -> Operator:
    r0, c0 = lhs.shape
    r1, c1 = rhs.shape
    out_shape = Shape(r0 * r1, c0 * c1)
    out = Operator.with_shape(out_shape, dtype=np.result_type(lhs.dtype, rhs.dtype))
    a, b = lhs._data.tolist(), rhs._data.tolist()
    data = out._data
    out_cols = out_shape.cols
    for i0 in range(r0):
        i_off = i0 * r1
        for j0 in range(c0):
            j_off = j0 * c1
            x = a[i0 * c0 + j0]
            for i1 in range(r1):
                row = (i_off + i1) * out_cols + j_off
                for j1 in range(c1):
                    data[row + j1] = x * b[i1 * c1 + j1]
    return out


def kron(lhs, rhs):
    """
    Kronecker (tensor) product of two objects of the same kind.

    Ket x Ket -> Ket, Bra x Bra -> Bra, Operator x Operator -> Operator,
    Scalar x Scalar -> Scalar.

    Raises:
        TypeError: if the operands are of different kinds
    """
    if type(lhs) is not type(rhs):
        raise TypeError(
            f"Tensor product requires operands of the same kind, "
            f"got {type(lhs).__name__} and {type(rhs).__name__}"
        )
    if isinstance(lhs, Scalar):
        return Scalar(lhs.value * rhs.value)
    if isinstance(lhs, Operator):
        return _kron_operator(lhs, rhs)
    if isinstance(lhs, (Ket, Bra)):
        return _kron_vector(lhs, rhs)
    raise TypeError(f"Unsupported operand kind {type(lhs).__name__}")


def kron_all(objects: Iterable):
    """Left fold of ``kron`` over a non-empty sequence of same-kind objects"""
    objects = list(objects)
    if not objects:
        raise EmptyInputError("kron_all needs at least one operand")
    return functools.reduce(kron, objects)


def assemble_blocks(grid: Sequence[Sequence[Operator]]) -> Operator:
    """
    Place an M x N grid of equally-shaped operators as contiguous blocks.

    Block (i0, j0) of inner shape (Ri, Ci) lands in rows
    ``[i0 * Ri, (i0 + 1) * Ri)`` and columns ``[j0 * Ci, (j0 + 1) * Ci)`` of
    an (M * Ri, N * Ci) result. Entries are copied verbatim.

    Args:
        grid: Rows of blocks, e.g. ``[[A, B], [C, D]]``

    Raises:
        EmptyInputError: if M == 0 or N == 0
        NonMatchingSizesError: if the grid is ragged or two blocks differ in
            shape (checked pairwise in row-major order)
    """
    grid = [list(row) for row in grid]
    m = len(grid)
    n = len(grid[0]) if m else 0
    if m == 0 or n == 0:
        raise EmptyInputError(f"Block grid is empty ({m}x{n})")
    if any(len(row) != n for row in grid):
        raise NonMatchingSizesError("Block grid rows have differing lengths")

    blocks = [block for row in grid for block in row]
    for block in blocks:
        if not isinstance(block, Operator):
            raise TypeError(f"Blocks must be Operators, got {type(block).__name__}")
    for first, second in zip(blocks, blocks[1:]):
        if first.shape != second.shape:
            log.debug("Block shapes differ: %s vs %s", first.shape, second.shape)
            raise NonMatchingSizesError(
                f"Blocks must share one shape, found {first.shape} and {second.shape}"
            )

    inner = blocks[0].shape
    out_shape = Shape(m * inner.rows, n * inner.cols)
    out = Operator.with_shape(out_shape, dtype=np.result_type(*[b.dtype for b in blocks]))
    data = out._data
    for i0 in range(m):
        i_off = i0 * inner.rows
        for j0 in range(n):
            j_off = j0 * inner.cols
            src = grid[i0][j0]._data
            for i1 in range(inner.rows):
                row = (i_off + i1) * out_shape.cols + j_off
                for j1 in range(inner.cols):
                    data[row + j1] = src[i1 * inner.cols + j1]
    log.debug("Assembled %dx%d grid of %s blocks into %s", m, n, inner, out_shape)
    return out
