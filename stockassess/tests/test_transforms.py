import numpy as np
import pytest
import tensorflow as tf

from stockassess.stockassess.transforms import posfun_np, posfun_tf, square_np, square_tf


def test_square_np_elementwise_preserves_length():
    x = np.array([-3.0, 0.0, 1.5, 1e150])
    out = square_np(x)
    assert out.shape == x.shape
    np.testing.assert_array_equal(out, x * x)


def test_square_tf_matches_numpy():
    x = np.array([-2.0, 0.25, 7.0])
    np.testing.assert_array_equal(square_tf(x).numpy(), square_np(x))


def test_posfun_np_above_threshold_passes_through():
    y, pen = posfun_np(3.0, 1.0, 0.5)
    assert float(y) == 3.0
    assert pen == 0.5


def test_posfun_np_at_threshold_is_unpenalised():
    y, pen = posfun_np(1.0, 1.0, 0.0)
    assert float(y) == 1.0
    assert pen == 0.0


def test_posfun_np_negative_value_is_lifted_and_penalised():
    y, pen = posfun_np(-1.0, 1.0, 0.25)
    assert float(y) == 1.0 / 3.0
    assert 0.0 < float(y) < 1.0
    np.testing.assert_allclose(pen, 0.25 + 0.01 * 4.0)


def test_posfun_np_uses_hyperbolic_formula_just_below_eps():
    x, eps = 0.8, 1.0
    y, pen = posfun_np(x, eps)
    assert float(y) == eps / (2.0 - eps / x)
    np.testing.assert_allclose(pen, 0.01 * (x - eps) ** 2)


def test_posfun_np_vector_accumulates_penalty():
    x = np.array([2.0, -1.0, 0.5, -3.0])
    eps = 0.1
    y, pen = posfun_np(x, eps, 1.0)

    assert y.shape == x.shape
    assert y[0] == 2.0
    np.testing.assert_allclose(y[2], 0.5)
    expected_pen = 1.0 + 0.01 * ((-1.0 - eps) ** 2 + (-3.0 - eps) ** 2)
    np.testing.assert_allclose(pen, expected_pen)


def test_posfun_tf_matches_numpy():
    x = np.array([2.0, -1.0, 0.05, 0.3])
    y_np, pen_np = posfun_np(x, 0.2, 0.1)
    y_tf, pen_tf = posfun_tf(x, 0.2, 0.1)
    np.testing.assert_allclose(y_tf.numpy(), y_np)
    np.testing.assert_allclose(pen_tf.numpy(), pen_np)


def test_posfun_tf_gradient_through_both_branches():
    x = tf.Variable([2.0, -1.0], dtype=tf.float64)
    eps = tf.constant(1.0, dtype=tf.float64)
    with tf.GradientTape() as tape:
        y, pen = posfun_tf(x, eps)
        total = tf.reduce_sum(y) + pen
    grad = tape.gradient(total, x).numpy()

    # d/dx x = 1 above eps; below, d/dx [eps / (2 - eps/x)] + 0.02 (x - eps).
    g_below = -(1.0 / (2.0 + 1.0) ** 2) * (1.0 / 1.0) + 0.02 * (-2.0)
    np.testing.assert_allclose(grad, [1.0, g_below])


def test_posfun_np_scalar_input_returns_scalars():
    y, pen = posfun_np(-1.0, 1.0)
    assert np.ndim(y) == 0
    assert isinstance(y, float)
    assert isinstance(pen, float)


def test_posfun_np_zero_is_unguarded():
    # eps / x -> inf, so the replacement collapses to -0.0; the penalty is still added.
    with pytest.warns(RuntimeWarning):
        y, pen = posfun_np(0.0, 1.0)
    assert y == 0.0 and np.signbit(y)
    np.testing.assert_allclose(pen, 0.01)


def test_posfun_tf_zero_propagates_nan_gradient():
    x = tf.Variable(0.0, dtype=tf.float64)
    with tf.GradientTape() as tape:
        y, pen = posfun_tf(x, 1.0)
    grad = tape.gradient(y, x)
    assert float(y) == 0.0
    np.testing.assert_allclose(pen.numpy(), 0.01)
    assert np.isnan(grad.numpy())
