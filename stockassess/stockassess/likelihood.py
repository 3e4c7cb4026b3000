"""Logistic-normal likelihood for compositional observations.

Reference: Schnute and Haigh (2007).
"""

from __future__ import annotations

import numpy as np
import tensorflow as tf

from .transforms import DTYPE, square_np, square_tf


def _check_same_shape(y_shape, p_shape) -> None:
    if not tf.TensorShape(y_shape).is_compatible_with(tf.TensorShape(p_shape)):
        raise ValueError(
            f"observed shape {tuple(y_shape)} must match expected shape {tuple(p_shape)}"
        )


def neg_log_logistic_normal_tf(y: tf.Tensor, p: tf.Tensor, var: tf.Tensor) -> tf.Tensor:
    """Negative log density of a logistic-normal composition in TensorFlow.

    Args:
        y: Observed proportions, shape ``[..., N]``.
        p: Expected proportions, same shape as ``y``.
        var: Logistic-normal variance, broadcastable to the batch shape.

    Returns:
        Tensor of shape ``[...]``: ``(N - 1) * log(var) / 2`` plus the squared
        log-ratio residuals (centred on geometric means) over ``2 * var``.
    """

    y = tf.convert_to_tensor(y, dtype=DTYPE)
    p = tf.convert_to_tensor(p, dtype=DTYPE)
    var = tf.convert_to_tensor(var, dtype=DTYPE)
    _check_same_shape(y.shape, p.shape)

    N = tf.cast(tf.shape(y)[-1], DTYPE)
    lnvar = tf.math.log(var)

    ytilde = tf.pow(tf.reduce_prod(y, axis=-1, keepdims=True), 1.0 / N)
    ptilde = tf.pow(tf.reduce_prod(p, axis=-1, keepdims=True), 1.0 / N)

    nld = (N - 1.0) * lnvar / 2.0
    resid = square_tf(tf.math.log(y / ytilde) - tf.math.log(p / ptilde)) / 2.0 / tf.expand_dims(var, -1)
    return nld + tf.reduce_sum(resid, axis=-1)


def neg_log_logistic_normal_np(y: np.ndarray, p: np.ndarray, var) -> np.ndarray:
    """Negative log density of a logistic-normal composition in NumPy.

    The geometric-mean exponent is ``1.0 / N`` in floating point.
    """

    y = np.asarray(y, dtype=np.float64)
    p = np.asarray(p, dtype=np.float64)
    var = np.asarray(var, dtype=np.float64)
    _check_same_shape(y.shape, p.shape)

    N = y.shape[-1]
    lnvar = np.log(var)

    ytilde = np.power(np.prod(y, axis=-1, keepdims=True), 1.0 / N)
    ptilde = np.power(np.prod(p, axis=-1, keepdims=True), 1.0 / N)

    nld = (N - 1) * lnvar / 2.0
    resid = square_np(np.log(y / ytilde) - np.log(p / ptilde)) / 2.0 / var[..., None]
    return nld + np.sum(resid, axis=-1)


__all__ = ["neg_log_logistic_normal_np", "neg_log_logistic_normal_tf"]
