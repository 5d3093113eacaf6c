"""
Shape and orientation value types.

A ``Shape`` is the (rows, cols) pair of a linear object. ``Orientation``
records whether an object is a column vector, a row vector or neither; it is
descriptive metadata and is never used to gate an operation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class Orientation(Enum):
    """Row/column classification of a linear object"""
    NON_ORIENTED = "non-oriented"
    ROW = "row"
    COLUMN = "column"

    def __neg__(self) -> 'Orientation':
        if self is Orientation.ROW:
            return Orientation.COLUMN
        if self is Orientation.COLUMN:
            return Orientation.ROW
        return self


@dataclass(frozen=True)
class Shape:
    """
    Matrix dimensions.

    Args:
        rows: Number of rows (>= 0)
        cols: Number of columns (>= 0)

    Example:
        >>> Shape(2, 3).transpose()
        Shape(rows=3, cols=2)
    """
    rows: int
    cols: int

    def __post_init__(self):
        if self.rows < 0 or self.cols < 0:
            raise ValueError(f"Shape dimensions must be non-negative, got ({self.rows}, {self.cols})")

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def transpose(self) -> 'Shape':
        return Shape(self.cols, self.rows)

    def is_square(self) -> bool:
        return self.rows == self.cols

    @classmethod
    def of(cls, value) -> 'Shape':
        """Coerce a ``Shape`` or a ``(rows, cols)`` pair"""
        if isinstance(value, Shape):
            return value
        rows, cols = value
        return cls(int(rows), int(cols))

    def __iter__(self) -> Iterator[int]:
        yield self.rows
        yield self.cols

    def as_tuple(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def __str__(self):
        return f"{self.rows}x{self.cols}"
