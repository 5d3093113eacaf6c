"""
Standard quantum gates
======================

Named operators built from the public constructors. Each constant is built
on first access and frozen; later reads share the same read-only object.
Constants are always complex128, whatever ``numeric.precision`` says.

Constants:
    I, X, Y, Z, H, S, T: single-qubit gates
    CNOT, CZ, SWAP: two-qubit gates

Families:
    phase(theta): diag(1, exp(i theta))
    cphase(theta): diag(1, 1, 1, exp(i theta))

Example:
    >>> from qompute import gates
    >>> gates.X * gates.X == gates.I
    True
"""

import cmath
import functools
import logging
import math
import threading

import numpy as np

from .braket import Operator

log = logging.getLogger(__name__)

# Constants are shared process-wide, so they do not follow numeric.precision
GATE_DTYPE = np.complex128

__all__ = ["I", "X", "Y", "Z", "H", "S", "T", "CNOT", "CZ", "SWAP", "phase", "cphase"]


def _identity():
    return Operator.identity(2, dtype=GATE_DTYPE)


def _pauli_x():
    return Operator([[0, 1], [1, 0]], dtype=GATE_DTYPE)


def _pauli_y():
    return Operator([[0, -1j], [1j, 0]], dtype=GATE_DTYPE)


def _pauli_z():
    return Operator([[1, 0], [0, -1]], dtype=GATE_DTYPE)


def _hadamard():
    return Operator([[1, 1], [1, -1]], dtype=GATE_DTYPE) * (1 / math.sqrt(2))


def _s():
    return Operator.from_diag([1, 1j], dtype=GATE_DTYPE)


def _t():
    return Operator.from_diag([1, cmath.exp(1j * math.pi / 4)], dtype=GATE_DTYPE)


def _cnot():
    zero = Operator.from_diag([0, 0], dtype=GATE_DTYPE)
    return Operator.from_blocks([[Operator.identity(2, dtype=GATE_DTYPE), zero], [zero, _pauli_x()]])


def _cz():
    return Operator.from_diag([1, 1, 1, -1], dtype=GATE_DTYPE)


def _swap():
    return Operator([
        [1, 0, 0, 0],
        [0, 0, 1, 0],
        [0, 1, 0, 0],
        [0, 0, 0, 1],
    ], dtype=GATE_DTYPE)


_BUILDERS = {
    "I": _identity,
    "X": _pauli_x,
    "Y": _pauli_y,
    "Z": _pauli_z,
    "H": _hadamard,
    "S": _s,
    "T": _t,
    "CNOT": _cnot,
    "CZ": _cz,
    "SWAP": _swap,
}

_cache = {}
_lock = threading.Lock()


def __getattr__(name):
    builder = _BUILDERS.get(name)
    if builder is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    with _lock:
        if name not in _cache:
            _cache[name] = builder().freeze()
            log.debug("Initialised gate %s", name)
        return _cache[name]


def __dir__():
    return sorted(set(globals()) | set(_BUILDERS))


@functools.lru_cache(maxsize=None)
def phase(theta: float) -> Operator:
    """Phase gate: |0> -> |0>, |1> -> exp(i theta)|1>"""
    return Operator.from_diag([1, cmath.exp(1j * theta)], dtype=GATE_DTYPE).freeze()


@functools.lru_cache(maxsize=None)
def cphase(theta: float) -> Operator:
    """Controlled phase gate: diag(1, 1, 1, exp(i theta))"""
    return Operator.from_diag([1, 1, 1, cmath.exp(1j * theta)], dtype=GATE_DTYPE).freeze()
