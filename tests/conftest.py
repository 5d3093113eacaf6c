"""
Pytest configuration and fixtures for qompute tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the repository root to path so qompute can be imported
sys.path.insert(0, str(Path(__file__).parent.parent))


# =============================================================================
# Test Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# =============================================================================
# Fixtures - Linear Objects
# =============================================================================

@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def random_ket(rng):
    """Factory for random complex kets."""
    from qompute import Ket

    def _make(n):
        return Ket(rng.normal(size=n) + 1j * rng.normal(size=n))
    return _make


@pytest.fixture
def random_operator(rng):
    """Factory for random complex operators."""
    from qompute import Operator

    def _make(rows, cols=None):
        cols = rows if cols is None else cols
        return Operator(rng.normal(size=(rows, cols)) + 1j * rng.normal(size=(rows, cols)))
    return _make


@pytest.fixture
def pauli():
    """Pauli matrices and the 2x2 identity as fresh, writable operators."""
    from qompute import Operator
    return {
        "I": Operator([[1, 0], [0, 1]]),
        "X": Operator([[0, 1], [1, 0]]),
        "Y": Operator([[0, -1j], [1j, 0]]),
        "Z": Operator([[1, 0], [0, -1]]),
    }


@pytest.fixture
def hermitian_2x2():
    """Small hermitian operator with complex off-diagonal entries."""
    from qompute import Operator
    return Operator([[1, 1j], [-1j, 0]])


# =============================================================================
# Utility Functions
# =============================================================================

@pytest.fixture
def assert_close():
    """Fixture providing an entrywise comparison helper."""
    def _assert_close(actual, expected, tolerance=1e-10):
        """Assert that two linear objects agree entrywise."""
        assert type(actual) is type(expected), (
            f"Kind mismatch: {type(actual).__name__} vs {type(expected).__name__}"
        )
        assert actual.shape == expected.shape, (
            f"Shape mismatch: expected {expected.shape}, got {actual.shape}"
        )
        np.testing.assert_allclose(actual.to_numpy(), expected.to_numpy(), atol=tolerance)
    return _assert_close


@pytest.fixture
def assert_shape_invariant():
    """Fixture asserting that backing storage matches the shape."""
    def _assert_invariant(obj):
        assert len(obj.to_numpy().ravel()) == obj.shape.rows * obj.shape.cols
        assert len(obj) == obj.size
    return _assert_invariant


@pytest.fixture
def single_precision():
    """Switch the shared configuration to single precision for one test."""
    from qompute import config
    config["numeric.precision"] = "single"
    yield config
    config.reset()
