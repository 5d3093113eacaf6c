"""
Tests for Kronecker products and block assembly.
"""

import math

import numpy as np
import pytest

from qompute import (
    Bra,
    EmptyInputError,
    Ket,
    NonMatchingSizesError,
    Operator,
    QomputeError,
    Scalar,
    Shape,
    kron,
    kron_all,
)


class TestKronecker:
    """Tests for tensorprod across kinds."""

    def test_ket_product(self):
        """|0> x |1> == |01>."""
        zero = Ket([1, 0])
        one = Ket([0, 1])
        assert zero.tensorprod(one) == Ket([0, 1, 0, 0])

    def test_ket_values(self):
        assert Ket([1, 2]).tensorprod(Ket([1j, 3, 5])) == Ket([1j, 3, 5, 2j, 6, 10])

    def test_bra_product(self):
        result = Bra([1, 2]).tensorprod(Bra([3, 4]))
        assert isinstance(result, Bra)
        assert result == Bra([3, 4, 6, 8])

    def test_operator_product(self, pauli):
        """X x Z laid out block by block."""
        result = pauli["X"].tensorprod(pauli["Z"])
        assert result == Operator([
            [0, 0, 1, 0],
            [0, 0, 0, -1],
            [1, 0, 0, 0],
            [0, -1, 0, 0],
        ])

    def test_scalar_product(self):
        assert Scalar(2).tensorprod(Scalar(3j)) == 6j

    @pytest.mark.parametrize("lhs_shape,rhs_shape", [
        ((1, 1), (2, 3)),
        ((2, 3), (4, 1)),
        ((3, 2), (2, 5)),
    ])
    def test_shape_law(self, random_operator, lhs_shape, rhs_shape):
        """(R0, C0) x (R1, C1) has shape (R0 * R1, C0 * C1)."""
        lhs = random_operator(*lhs_shape)
        rhs = random_operator(*rhs_shape)
        result = lhs.tensorprod(rhs)
        assert result.shape == Shape(lhs_shape[0] * rhs_shape[0], lhs_shape[1] * rhs_shape[1])

    def test_vector_shape_law(self):
        assert Ket.zeros(3).tensorprod(Ket.zeros(4)).shape == Shape(12, 1)
        assert Bra.zeros(3).tensorprod(Bra.zeros(4)).shape == Shape(1, 12)

    def test_entry_formula(self, random_operator):
        """out[i0*R1 + i1, j0*C1 + j1] == lhs[i0, j0] * rhs[i1, j1]."""
        lhs = random_operator(2, 3)
        rhs = random_operator(3, 2)
        out = kron(lhs, rhs)
        for i0 in range(2):
            for j0 in range(3):
                for i1 in range(3):
                    for j1 in range(2):
                        assert out[i0 * 3 + i1, j0 * 2 + j1] == lhs[i0, j0] * rhs[i1, j1]

    def test_dagger_distributes(self, random_ket):
        a, b = random_ket(2), random_ket(3)
        assert a.tensorprod(b).dagger() == a.dagger().tensorprod(b.dagger())

    def test_mixed_kinds(self):
        with pytest.raises(TypeError):
            kron(Ket([1]), Bra([1]))

    def test_kron_all(self):
        zero = Ket([1, 0])
        result = kron_all([zero, zero, zero])
        assert result.shape == Shape(8, 1)
        assert result[0] == 1
        assert sum(abs(v) for v in result) == 1

    def test_kron_all_empty(self):
        with pytest.raises(EmptyInputError):
            kron_all([])


class TestBlockAssembly:
    """Tests for Operator.from_blocks."""

    def test_hadamard_blocks(self):
        """[[H, 0], [0, H]] matches the direct 4x4 literal."""
        s = 1 / math.sqrt(2)
        h = Operator([[s, s], [s, -s]])
        zero = Operator.from_diag([0, 0])
        result = Operator.from_blocks([[h, zero], [zero, h]])
        assert result == Operator([
            [s, s, 0, 0],
            [s, -s, 0, 0],
            [0, 0, s, s],
            [0, 0, s, -s],
        ])

    def test_rectangular_blocks(self):
        a = Operator([[1, 2, 3]])
        b = Operator([[4, 5, 6]])
        result = Operator.from_blocks([[a, b], [b, a]])
        assert result.shape == Shape(2, 6)
        assert result == Operator([[1, 2, 3, 4, 5, 6], [4, 5, 6, 1, 2, 3]])

    def test_single_block(self, random_operator):
        a = random_operator(2, 3)
        assert Operator.from_blocks([[a]]) == a

    def test_identity_blocks_equal_kron(self, pauli, random_operator):
        """Blocks of a uniform factor agree with the Kronecker product."""
        a = random_operator(2)
        zero = Operator([[0, 0], [0, 0]])
        assert Operator.from_blocks([[a, zero], [zero, a]]) == pauli["I"].tensorprod(a)

    def test_non_matching_sizes(self):
        """A 1x2 grid with blocks of different shapes fails."""
        with pytest.raises(NonMatchingSizesError):
            Operator.from_blocks([[Operator.identity(2), Operator.identity(3)]])

    def test_empty_rows(self):
        """A 0xN grid fails with EmptyInputError."""
        with pytest.raises(EmptyInputError):
            Operator.from_blocks([])

    def test_empty_columns(self):
        with pytest.raises(EmptyInputError):
            Operator.from_blocks([[], []])

    def test_ragged_grid(self):
        a = Operator.identity(2)
        with pytest.raises(NonMatchingSizesError):
            Operator.from_blocks([[a, a], [a]])

    def test_errors_share_base(self):
        with pytest.raises(QomputeError):
            Operator.from_blocks([])

    def test_blocks_untouched(self):
        a = Operator([[1, 2], [3, 4]])
        result = Operator.from_blocks([[a, a]])
        result[0, 0] = 99
        assert a[0, 0] == 1

    def test_dtype_promotion(self):
        a = Operator([[1]], dtype=np.complex64)
        b = Operator([[2]], dtype=np.complex128)
        assert Operator.from_blocks([[a, b]]).dtype == np.complex128
