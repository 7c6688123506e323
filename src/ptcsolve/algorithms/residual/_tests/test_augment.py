import numpy as np
import pytest

from ptcsolve.algorithms.residual import (algebraic_mask, augment_jacobian,
                                          augment_residual, residual_distance)


def test_augment_adds_backward_euler_term():
    # F(y) = -y, G(y) = -y + (y_prev - y) / delta
    def F(y):
        return -y

    G = augment_residual(F, np.array([1.0, 2.0]), 0.5)
    out = G(np.array([0.5, 0.5]))

    assert np.allclose(out, [-0.5 + 1.0, -0.5 + 3.0])


def test_algebraic_components_are_not_regularized():
    def F(y):
        return np.array([1.0, 2.0])

    G = augment_residual(F, np.zeros(2), 0.5, np.array([False, True]))
    out = G(np.array([1.0, 1.0]))

    # differential: 1 + (0 - 1) / 0.5 = -1 ; algebraic: untouched
    assert np.allclose(out, [-1.0, 2.0])


def test_infinite_step_returns_residual_unchanged():
    def F(y):
        return y ** 2 - 4.0

    assert augment_residual(F, np.array([1.0]), np.inf) is F


def test_augment_does_not_alias_previous_state():
    y_prev = np.array([1.0])
    G = augment_residual(lambda y: np.zeros_like(y), y_prev, 1.0)
    y_prev[0] = 10.0

    assert np.allclose(G(np.array([0.0])), [1.0])


def test_augment_rejects_mismatched_residual_shape():
    G = augment_residual(lambda y: np.zeros(3), np.zeros(2), 1.0)

    with pytest.raises(ValueError):
        G(np.zeros(2))


def test_augment_jacobian_shifts_differential_diagonal():
    def J(y):
        return np.array([[1.0, 2.0], [3.0, 4.0]])

    dG = augment_jacobian(J, 2.0, np.array([False, True]))
    out = dG(np.zeros(2))

    assert np.allclose(out, [[0.5, 2.0], [3.0, 4.0]])


def test_augment_jacobian_requires_square_matrix():
    dG = augment_jacobian(lambda y: np.ones((2, 3)), 1.0)

    with pytest.raises(ValueError):
        dG(np.zeros(2))


def test_algebraic_mask_normalization():
    assert not algebraic_mask(None, 3).any()
    assert not algebraic_mask([], 3).any()
    assert algebraic_mask([1], 3).tolist() == [False, True, False]
    assert algebraic_mask([True, False, True], 3).tolist() == [True, False, True]
    assert algebraic_mask(np.array([0, 2]), 3).tolist() == [True, False, True]


@pytest.mark.parametrize("mask", [[True, False], [3], [-1], [0.5]])
def test_algebraic_mask_invalid(mask):
    with pytest.raises(ValueError):
        algebraic_mask(mask, 3)


def test_residual_distance_is_normalized_norm():
    # ||(3, 4)||_2 / 2
    assert residual_distance(lambda y: np.array([3.0, 4.0]), np.zeros(2)) == pytest.approx(2.5)


def test_residual_distance_propagates_nan():
    d = residual_distance(lambda y: np.array([1.0, np.nan]), np.zeros(2))

    assert np.isnan(d)
