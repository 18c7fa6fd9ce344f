"""
Tests for tensors: determinant and similarity transformation.

Every assertion follows from a property of linear algebra:
det(I) = 1, repeated rows give det = 0, det(AB) = det(A) det(B),
I sigma I^T = sigma, and rotations preserve trace and determinant.

Tolerances:
    algebraic  :  rtol=1e-12, atol=1e-12  (float64)
"""
import numpy as np
import pytest

from numroutines.errors import DimensionError
from numroutines.tensors import determinant, tensor_transform

RNG = np.random.default_rng(1)

RTOL = 1e-12
ATOL = 1e-12


def rotation_z(theta):
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


# ======================================================================
#  determinant
# ======================================================================

class TestDeterminant:
    def test_identity_3d(self):
        assert determinant(np.eye(3), 3) == 1.0

    def test_identity_2d(self):
        assert determinant(np.eye(2), 2) == 1.0

    def test_2d_known_value(self):
        assert determinant([[1.0, 2.0], [3.0, 4.0]], 2) == -2.0

    def test_3d_known_value(self):
        a = [[2.0, 0.0, 1.0], [1.0, 3.0, 2.0], [1.0, 1.0, 2.0]]
        assert np.isclose(determinant(a, 3), 6.0, atol=ATOL)

    def test_repeated_rows_zero(self):
        a = RNG.standard_normal((3, 3))
        a[2] = a[0]
        assert np.isclose(determinant(a, 3), 0.0, atol=1e-12)

    @pytest.mark.parametrize("ndim", [2, 3])
    def test_matches_numpy(self, ndim):
        a = RNG.standard_normal((ndim, ndim))
        assert np.isclose(determinant(a, ndim), np.linalg.det(a), rtol=1e-10, atol=1e-12)

    def test_multiplicative(self):
        a = RNG.standard_normal((3, 3))
        b = RNG.standard_normal((3, 3))
        assert np.isclose(determinant(a @ b, 3), determinant(a, 3) * determinant(b, 3),
                          rtol=1e-10, atol=1e-12)

    def test_reads_leading_block(self):
        a = np.eye(3)
        a[2, 2] = 5.0
        assert determinant(a, 2) == 1.0

    @pytest.mark.parametrize("ndim", [0, 1, 4, 5])
    def test_unsupported_ndim_raises(self, ndim):
        with pytest.raises(DimensionError):
            determinant(np.eye(5), ndim)

    def test_undersized_matrix_raises(self):
        with pytest.raises(DimensionError):
            determinant(np.eye(2), 3)


# ======================================================================
#  tensor_transform -- sigma' = a sigma a^T
# ======================================================================

class TestTensorTransform:
    @pytest.mark.parametrize("ndim", [2, 3])
    def test_identity_is_noop(self, ndim):
        sigma = RNG.standard_normal((ndim, ndim))
        np.testing.assert_allclose(tensor_transform(np.eye(ndim), sigma, ndim), sigma,
                                   rtol=RTOL, atol=ATOL)

    @pytest.mark.parametrize("ndim", [2, 3])
    def test_matches_matrix_product(self, ndim):
        a = RNG.standard_normal((ndim, ndim))
        sigma = RNG.standard_normal((ndim, ndim))
        np.testing.assert_allclose(tensor_transform(a, sigma, ndim), a @ sigma @ a.T,
                                   rtol=1e-10, atol=1e-12)

    def test_rotation_preserves_invariants(self):
        sigma = RNG.standard_normal((3, 3))
        sigma = sigma + sigma.T
        rotated = tensor_transform(rotation_z(0.7), sigma, 3)
        assert np.isclose(np.trace(rotated), np.trace(sigma), atol=1e-12)
        assert np.isclose(determinant(rotated, 3), determinant(sigma, 3), rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(rotated, rotated.T, atol=1e-12)

    def test_quarter_turn_swaps_axes(self):
        sigma = np.diag([1.0, 2.0, 3.0])
        rotated = tensor_transform(rotation_z(np.pi / 2), sigma, 3)
        np.testing.assert_allclose(rotated, np.diag([2.0, 1.0, 3.0]), atol=1e-12)

    def test_inputs_not_mutated(self):
        a = RNG.standard_normal((3, 3))
        sigma = RNG.standard_normal((3, 3))
        a0, s0 = a.copy(), sigma.copy()
        result = tensor_transform(a, sigma, 3)
        np.testing.assert_array_equal(a, a0)
        np.testing.assert_array_equal(sigma, s0)
        assert result is not sigma

    def test_result_shape(self):
        assert tensor_transform(np.eye(2), np.eye(2), 2).shape == (2, 2)

    @pytest.mark.parametrize("ndim", [1, 4])
    def test_unsupported_ndim_raises(self, ndim):
        with pytest.raises(DimensionError):
            tensor_transform(np.eye(4), np.eye(4), ndim)
