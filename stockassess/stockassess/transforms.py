"""Element-wise transforms used inside stock-assessment objectives."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

from .constants import POSFUN_PENALTY_WEIGHT

DTYPE = tf.float64


def square_tf(x: tf.Tensor) -> tf.Tensor:
    """Return ``x**2`` element-wise in TensorFlow."""

    return tf.square(tf.convert_to_tensor(x, dtype=DTYPE))


def square_np(x: np.ndarray) -> np.ndarray:
    """Return ``x**2`` element-wise in NumPy."""

    return np.square(np.asarray(x, dtype=np.float64))


def posfun_tf(
    x: tf.Tensor,
    eps: tf.Tensor,
    pen: tf.Tensor = 0.0,
) -> tuple[tf.Tensor, tf.Tensor]:
    """Soft floor with a quadratic penalty, differentiable in TensorFlow.

    Values at or above ``eps`` pass through unchanged. Values below are
    replaced by ``eps / (2 - eps / x)`` and the penalty accumulator is
    increased by ``0.01 * (x - eps)**2``. The replacement is positive and
    below ``eps / 2`` for negative ``x``, lies above ``eps`` for
    ``eps / 2 < x < eps``, and has a pole at ``x = eps / 2``.

    Both branches are evaluated and combined with ``tf.where`` so the graph has
    no data-dependent control flow.

    Args:
        x: Tensor of values to check.
        eps: Threshold, broadcastable against ``x``.
        pen: Incoming penalty accumulator (scalar).

    Returns:
        Tuple ``(y, pen)`` with the floored values and the accumulated penalty
        (incoming ``pen`` plus the summed increments).
    """

    x = tf.convert_to_tensor(x, dtype=DTYPE)
    eps = tf.convert_to_tensor(eps, dtype=DTYPE)
    pen = tf.convert_to_tensor(pen, dtype=DTYPE)

    below = x < eps
    increment = tf.where(
        below,
        tf.constant(POSFUN_PENALTY_WEIGHT, dtype=DTYPE) * tf.square(x - eps),
        tf.zeros_like(x),
    )
    y = tf.where(tf.logical_not(below), x, eps / (2.0 - eps / x))
    return y, pen + tf.reduce_sum(increment)


def posfun_np(
    x: np.ndarray,
    eps: np.ndarray,
    pen: float = 0.0,
) -> tuple[np.ndarray, float]:
    """Soft floor with a quadratic penalty in NumPy.

    Same formulas as :func:`posfun_tf`. ``x == 0`` below a positive ``eps``
    divides by zero and is not guarded. Scalar ``x`` and ``eps`` give a
    scalar ``y``.
    """

    x_arr = np.asarray(x, dtype=np.float64)
    eps_arr = np.asarray(eps, dtype=np.float64)

    below = x_arr < eps_arr
    increment = np.where(below, POSFUN_PENALTY_WEIGHT * np.square(x_arr - eps_arr), 0.0)
    y = np.where(~below, x_arr, eps_arr / (2.0 - eps_arr / x_arr))
    return y[()], pen + float(np.sum(increment))


__all__ = ["DTYPE", "posfun_np", "posfun_tf", "square_np", "square_tf"]
