"""
qompute Bra/Ket/Operator object model

Dense complex linear objects for quantum-computing primitives:

- ``Ket``: column vector, shape (n, 1)
- ``Bra``: row vector, shape (1, n)
- ``Operator``: row-major matrix, shape (rows, cols)
- ``Scalar``: the degenerate 1x1 case

All four implement the ``ComplexObject`` capability interface (shape,
dagger, hermiticity, tensor product, indexed access). Arithmetic operators
never mutate their operands; every result is a freshly allocated object.

Example:
    >>> from qompute import Ket, Operator
    >>> psi = Ket([1, 1j])
    >>> psi.dagger() * psi
    Scalar((2+0j))
    >>> Operator([[0, 1], [1, 0]]).hermitian()
    True
"""

import abc
import numbers
import operator
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from .configuration import config
from .errors import (
    IndexOutOfBoundsError,
    NonMatchingSizesError,
    QomputeError,
    ReadOnlyError,
    ShapeMismatchError,
)
from .shape import Orientation, Shape


def _resolve_dtype(dtype):
    dtype = np.dtype(config.dtype if dtype is None else dtype)
    if dtype.kind != "c":
        raise QomputeError(f"Expected a complex dtype, got {dtype}")
    return dtype


def _flat_array(values, dtype) -> np.ndarray:
    """Copy ``values`` into a fresh one-dimensional array of ``dtype``"""
    try:
        if isinstance(values, np.ndarray):
            data = np.array(values, dtype=dtype)
        else:
            data = np.array(list(values), dtype=dtype)
    except ValueError as exc:
        raise NonMatchingSizesError(f"Expected a flat sequence of scalars: {exc}") from exc
    if data.ndim != 1:
        raise NonMatchingSizesError(
            f"Expected a flat sequence of scalars, got an array of shape {data.shape}"
        )
    return data


# ============================================================================
# CAPABILITY INTERFACE
# ============================================================================

class ComplexObject(abc.ABC):
    """
    Capability shared by every complex linear object.

    Subclasses provide ``shape``, ``dagger()``, ``hermitian()``,
    ``tensorprod()`` and indexed access; ``rows``, ``cols`` and ``size`` are
    derived from the shape.
    """

    ORIENTATION = Orientation.NON_ORIENTED

    @property
    @abc.abstractmethod
    def shape(self) -> Shape:
        """Dimensions of the object"""

    @property
    def rows(self) -> int:
        return self.shape.rows

    @property
    def cols(self) -> int:
        return self.shape.cols

    @property
    def size(self) -> int:
        return self.shape.size

    @abc.abstractmethod
    def dagger(self) -> 'ComplexObject':
        """Conjugate transpose"""

    @abc.abstractmethod
    def hermitian(self) -> bool:
        """Whether the object equals its own conjugate transpose"""

    @abc.abstractmethod
    def tensorprod(self, rhs: 'ComplexObject') -> 'ComplexObject':
        """Kronecker product with an object of the same kind"""

    @abc.abstractmethod
    def __getitem__(self, index) -> complex:
        pass

    @abc.abstractmethod
    def __setitem__(self, index, value):
        pass


# ============================================================================
# SCALAR
# ============================================================================

class Scalar(ComplexObject):
    """
    A single complex number viewed as a 1x1 linear object.

    Always hermitian; its dagger is the complex conjugate. Compares equal to
    plain Python numbers holding the same value.

    Args:
        value: Any number convertible with ``complex()``
    """

    __hash__ = None

    def __init__(self, value: Union[numbers.Number, 'Scalar'] = 0j):
        self.value = complex(value)

    def __repr__(self):
        return f"Scalar({self.value!r})"

    def __complex__(self):
        return self.value

    @property
    def shape(self) -> Shape:
        return Shape(1, 1)

    def dagger(self) -> 'Scalar':
        return Scalar(self.value.conjugate())

    def hermitian(self) -> bool:
        return True

    def tensorprod(self, rhs: 'Scalar') -> 'Scalar':
        return tensor.kron(self, rhs)

    def _check_index(self, index):
        if index != ():
            raise IndexOutOfBoundsError(index, self.shape)

    def __getitem__(self, index) -> complex:
        self._check_index(index)
        return self.value

    def __setitem__(self, index, value):
        self._check_index(index)
        self.value = complex(value)

    def copy(self) -> 'Scalar':
        return Scalar(self.value)

    def allclose(self, other, atol: Optional[float] = None, rtol: Optional[float] = None) -> bool:
        if not isinstance(other, (Scalar, numbers.Number)):
            return False
        return bool(np.isclose(
            self.value, complex(other),
            atol=config.atol if atol is None else atol,
            rtol=config.rtol if rtol is None else rtol,
        ))

    def __eq__(self, other):
        if isinstance(other, (Scalar, numbers.Number)):
            return self.value == complex(other)
        return NotImplemented

    def __neg__(self):
        return ops.scale(self, -1)

    def __add__(self, other):
        if isinstance(other, numbers.Number):
            other = Scalar(other)
        if not isinstance(other, Scalar):
            return NotImplemented
        return ops.add(self, other)

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, numbers.Number):
            other = Scalar(other)
        if not isinstance(other, Scalar):
            return NotImplemented
        return ops.sub(self, other)

    def __rsub__(self, other):
        if not isinstance(other, numbers.Number):
            return NotImplemented
        return ops.sub(Scalar(other), self)

    def __mul__(self, other):
        if not ops.is_scalar(other):
            return NotImplemented
        return ops.scale(self, other)

    __rmul__ = __mul__


# ============================================================================
# DENSE OBJECTS
# ============================================================================

class _DenseObject(ComplexObject):
    """Shared storage and arithmetic for Ket, Bra and Operator.

    Entries live in a one-dimensional row-major NumPy array whose length is
    always ``shape.size``.
    """

    __hash__ = None
    # Keep NumPy scalars from broadcasting over us; let __rmul__ handle them.
    __array_ufunc__ = None

    _data: np.ndarray

    @classmethod
    def _from_array(cls, data: np.ndarray, *args):
        obj = cls.__new__(cls)
        obj._init_storage(data, *args)
        return obj

    def _init_storage(self, data: np.ndarray):
        self._data = data

    def _like(self, data: np.ndarray):
        """New object of the same kind and shape around ``data``"""
        return type(self)._from_array(data)

    @abc.abstractmethod
    def _offset(self, index) -> int:
        """Bounds-checked linear offset of ``index``"""

    # ------------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------------

    def __getitem__(self, index) -> complex:
        return complex(self._data[self._offset(index)])

    def __setitem__(self, index, value):
        offset = self._offset(index)
        if self.frozen:
            raise ReadOnlyError(f"{type(self).__name__} is read-only; copy() it first")
        self._data[offset] = complex(value)

    def __len__(self):
        return self.size

    def __iter__(self):
        return (complex(v) for v in self._data)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def frozen(self) -> bool:
        return not self._data.flags.writeable

    def freeze(self):
        """Make the object read-only in place and return it"""
        self._data.flags.writeable = False
        return self

    def copy(self):
        """Independent, writable copy"""
        return self._like(self._data.copy())

    def astype(self, dtype):
        return self._like(self._data.astype(_resolve_dtype(dtype)))

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def __array__(self, dtype=None, copy=None):
        arr = self.to_numpy()
        return arr if dtype is None else arr.astype(dtype)

    # ------------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, _DenseObject):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.shape == other.shape
            and bool(np.array_equal(self._data, other._data))
        )

    def allclose(self, other, atol: Optional[float] = None, rtol: Optional[float] = None) -> bool:
        """Entrywise comparison within the configured tolerances"""
        if type(self) is not type(other) or self.shape != other.shape:
            return False
        return bool(np.allclose(
            self._data, other._data,
            atol=config.atol if atol is None else atol,
            rtol=config.rtol if rtol is None else rtol,
        ))

    # ------------------------------------------------------------------------
    # Arithmetic (see qompute.ops)
    # ------------------------------------------------------------------------

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return ops.add(self, other)

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return ops.sub(self, other)

    def __neg__(self):
        return ops.scale(self, -1)

    def __mul__(self, other):
        if ops.resolve(self, other) is None:
            return NotImplemented
        return ops.multiply(self, other)

    def __rmul__(self, other):
        if not ops.is_scalar(other):
            return NotImplemented
        return ops.scale(self, other)

    def __matmul__(self, other):
        if ops.is_scalar(other) or ops.resolve(self, other) is None:
            return NotImplemented
        return ops.multiply(self, other)

    def tensorprod(self, rhs):
        return tensor.kron(self, rhs)


class _Vector(_DenseObject):
    """Common base of Ket and Bra"""

    def __init__(self, values: Iterable = (), dtype=None):
        self._data = _flat_array(values, _resolve_dtype(dtype))

    @classmethod
    def zeros(cls, length: int, dtype=None):
        """Zero vector of ``length`` entries"""
        return cls._from_array(np.zeros(length, dtype=_resolve_dtype(dtype)))

    def __repr__(self):
        return f"{type(self).__name__}({self._data.tolist()!r})"

    def _offset(self, index) -> int:
        i = operator.index(index)
        if not 0 <= i < len(self._data):
            raise IndexOutOfBoundsError(index, self.shape)
        return i

    def hermitian(self) -> bool:
        # Never square in any meaningful sense
        return False


class Ket(_Vector):
    """
    Column vector |psi>.

    Shape is always (n, 1). Never resized after construction.

    Args:
        values: Flat sequence of real or complex numbers
        dtype: NumPy complex dtype (default from configuration)

    Example:
        >>> psi = Ket([1, 0])
        >>> psi.shape
        Shape(rows=2, cols=1)
        >>> psi.dagger().shape
        Shape(rows=1, cols=2)
    """

    ORIENTATION = Orientation.COLUMN

    @property
    def shape(self) -> Shape:
        return Shape(len(self._data), 1)

    def dagger(self) -> 'Bra':
        """Conjugate transpose: a Bra with conjugated entries in the same order"""
        return Bra._from_array(np.conj(self._data))


class Bra(_Vector):
    """
    Row vector <phi|.

    Shape is always (1, n). Never resized after construction.

    Args:
        values: Flat sequence of real or complex numbers
        dtype: NumPy complex dtype (default from configuration)
    """

    ORIENTATION = Orientation.ROW

    @property
    def shape(self) -> Shape:
        return Shape(1, len(self._data))

    def dagger(self) -> Ket:
        """Conjugate transpose: a Ket with conjugated entries in the same order"""
        return Ket._from_array(np.conj(self._data))


class Operator(_DenseObject):
    """
    Dense complex matrix in row-major order.

    Entry (i, j) is stored at linear offset ``i * cols + j``. Operators may be
    non-square; only square operators can be hermitian.

    Args:
        rows: Nested sequence of rows (real or complex entries), or a
            two-dimensional NumPy array
        dtype: NumPy complex dtype (default from configuration)

    Other constructors:
        ``Operator.from_flat(shape, values)``, ``Operator.from_diag(values)``,
        ``Operator.with_shape(shape)``, ``Operator.identity(n)``,
        ``Operator.from_blocks(grid)``

    Example:
        >>> op = Operator([[1, 1j], [-1j, 0]])
        >>> op[0, 1]
        1j
        >>> op.hermitian()
        True
    """

    def __init__(self, rows: Union[Sequence[Sequence], np.ndarray] = (), dtype=None):
        dtype = _resolve_dtype(dtype)
        if isinstance(rows, np.ndarray):
            if rows.ndim != 2:
                raise NonMatchingSizesError(
                    f"Expected a two-dimensional array, got shape {rows.shape}"
                )
            shape = Shape(*rows.shape)
            data = np.array(rows, dtype=dtype).ravel()
        else:
            rows = [list(row) for row in rows]
            n_cols = len(rows[0]) if rows else 0
            for row in rows:
                if len(row) != n_cols:
                    raise NonMatchingSizesError(
                        f"Rows have differing lengths ({n_cols} and {len(row)})"
                    )
            shape = Shape(len(rows), n_cols)
            data = _flat_array([v for row in rows for v in row], dtype)
        self._init_storage(data, shape)

    def _init_storage(self, data: np.ndarray, shape: Shape = None):
        self._shape = shape
        self._data = data

    def _like(self, data: np.ndarray):
        return Operator._from_array(data, self._shape)

    # ------------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------------

    @classmethod
    def from_flat(cls, shape: Union[Shape, Tuple[int, int]], values: Iterable, dtype=None) -> 'Operator':
        """Build from exactly ``rows * cols`` entries in row-major order"""
        shape = Shape.of(shape)
        data = _flat_array(values, _resolve_dtype(dtype))
        if len(data) != shape.size:
            raise ShapeMismatchError(shape.size, len(data), "from_flat entry count")
        return cls._from_array(data, shape)

    @classmethod
    def with_shape(cls, shape: Union[Shape, Tuple[int, int]], dtype=None) -> 'Operator':
        """
        Zero operator of ``shape`` with ones on the leading diagonal.

        ``(i, i) = 1`` for ``i < min(rows, cols)``: the identity on the
        overlapping square block, zero-padded elsewhere.
        """
        shape = Shape.of(shape)
        data = np.zeros(shape.size, dtype=_resolve_dtype(dtype))
        for i in range(min(shape.rows, shape.cols)):
            data[i * shape.cols + i] = 1
        return cls._from_array(data, shape)

    @classmethod
    def identity(cls, n: int, dtype=None) -> 'Operator':
        return cls.with_shape(Shape(n, n), dtype=dtype)

    @classmethod
    def from_diag(cls, values: Iterable, dtype=None) -> 'Operator':
        """Square operator with ``values`` on the diagonal and zeros elsewhere"""
        diag = _flat_array(values, _resolve_dtype(dtype))
        n = len(diag)
        data = np.zeros(n * n, dtype=diag.dtype)
        for i in range(n):
            data[i * n + i] = diag[i]
        return cls._from_array(data, Shape(n, n))

    @classmethod
    def from_blocks(cls, grid: Sequence[Sequence['Operator']]) -> 'Operator':
        """
        Assemble one operator from an M x N grid of equally-shaped blocks.

        Raises:
            EmptyInputError: if the grid has no rows or no columns
            NonMatchingSizesError: if the blocks differ in shape
        """
        return tensor.assemble_blocks(grid)

    # ------------------------------------------------------------------------
    # ComplexObject
    # ------------------------------------------------------------------------

    @property
    def shape(self) -> Shape:
        return self._shape

    def __repr__(self):
        return f"Operator({self.to_numpy().tolist()!r})"

    def _offset(self, index) -> int:
        try:
            i, j = index
        except (TypeError, ValueError):
            raise TypeError(f"Operator indices must be (row, col) pairs, got {index!r}") from None
        i, j = operator.index(i), operator.index(j)
        if not (0 <= i < self._shape.rows and 0 <= j < self._shape.cols):
            raise IndexOutOfBoundsError(index, self._shape)
        return i * self._shape.cols + j

    def dagger(self) -> 'Operator':
        """Conjugate transpose: entry (i, j) of the result is conj(self[j, i])"""
        rows, cols = self._shape
        data = np.conj(self._data.reshape(rows, cols).T).ravel()
        return Operator._from_array(data, self._shape.transpose())

    def hermitian(self) -> bool:
        if self._shape != self._shape.transpose():
            return False
        n = self._shape.rows
        data = self._data
        return all(
            data[i * n + j].conjugate() == data[j * n + i]
            for i in range(n)
            for j in range(n)
        )

    def to_numpy(self) -> np.ndarray:
        return self._data.reshape(self._shape.rows, self._shape.cols).copy()


LinearObject = Union[Ket, Bra, Operator, Scalar]

from . import ops, tensor  # noqa: E402  (both modules import the classes above)
