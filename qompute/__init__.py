"""
qompute
=======

Complex linear-algebra core for quantum-computing primitives.

Features:
- Kets (column vectors), Bras (row vectors) and Operators (dense matrices)
- Conjugate transpose, hermiticity test, Kronecker product
- Arithmetic overlay: +, -, inner/outer/matrix products, scaling
- Block-matrix assembly and diagonal construction
- Lazily-initialised standard gates (qompute.gates)

Quick Start:
    >>> from qompute import Ket, Operator, gates
    >>> psi = Ket([1, 0])
    >>> (gates.X * gates.X) == gates.I
    True
    >>> psi.tensorprod(psi).shape
    Shape(rows=4, cols=1)
"""

__version__ = "0.1.0"

from .shape import Shape, Orientation

from .errors import (
    QomputeError,
    EmptyInputError,
    NonMatchingSizesError,
    ShapeMismatchError,
    IndexOutOfBoundsError,
    ReadOnlyError,
)

from .configuration import Configuration, config, load_config

from .braket import (
    ComplexObject,
    Ket,
    Bra,
    Operator,
    Scalar,
)

from .ops import add, sub, dot, outer, matmul, scale, multiply
from .tensor import kron, kron_all, assemble_blocks
from .builders import to_ket, to_bra, to_operator
from . import gates

__all__ = [
    'Shape',
    'Orientation',
    'QomputeError',
    'EmptyInputError',
    'NonMatchingSizesError',
    'ShapeMismatchError',
    'IndexOutOfBoundsError',
    'ReadOnlyError',
    'Configuration',
    'config',
    'load_config',
    'ComplexObject',
    'Ket',
    'Bra',
    'Operator',
    'Scalar',
    'add',
    'sub',
    'dot',
    'outer',
    'matmul',
    'scale',
    'multiply',
    'kron',
    'kron_all',
    'assemble_blocks',
    'to_ket',
    'to_bra',
    'to_operator',
    'gates',
]
