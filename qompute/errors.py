"""
Exception types raised by qompute.

Every violated precondition is reported through a subclass of
``QomputeError`` so callers can catch the whole family at once.
"""


class QomputeError(Exception):
    """Base exception for linear-algebra errors"""
    pass


class EmptyInputError(QomputeError):
    """A zero-sized input was passed where a non-empty one is required"""

    def __init__(self, message: str = "Expected a non-empty input, got one of zero size"):
        super().__init__(message)


class NonMatchingSizesError(QomputeError):
    """Parts of a composite input do not share one shape"""

    def __init__(self, message: str = "Inputs do not share a common size"):
        super().__init__(message)


class ShapeMismatchError(QomputeError):
    """
    Operand shapes are incompatible for the requested operation.

    Attributes:
        expected: Shape the operation required
        actual: Shape it received
    """

    def __init__(self, expected, actual, operation: str = ""):
        self.expected = expected
        self.actual = actual
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}expected shape {expected}, got {actual}")


class IndexOutOfBoundsError(QomputeError, IndexError):
    """Element access outside the object's shape"""

    def __init__(self, index, shape):
        self.index = index
        self.shape = shape
        super().__init__(f"Index {index} out of bounds for shape {shape}")


class ReadOnlyError(QomputeError):
    """Assignment into a frozen object"""
    pass
