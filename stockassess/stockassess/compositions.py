"""Noise injection for compositional (proportion) data."""

from __future__ import annotations

import numpy as np
import tensorflow as tf
import tensorflow_probability as tfp

from .transforms import DTYPE

tfd = tfp.distributions


def _check_noise_shape(comp_shape, noise_shape) -> None:
    # Unknown (None) dimensions from traced graphs are compatible with any size.
    if not tf.TensorShape(comp_shape).is_compatible_with(tf.TensorShape(noise_shape)):
        raise ValueError(
            f"noise shape {tuple(noise_shape)} must match composition shape {tuple(comp_shape)}"
        )


def add_comp_noise_tf(input_comp: tf.Tensor, noise: tf.Tensor) -> tf.Tensor:
    """Perturb compositions in log space and renormalise in TensorFlow.

    Args:
        input_comp: Tensor of shape ``[..., n]`` of positive proportions.
        noise: Tensor of the same shape with additive log-ratio errors.

    Returns:
        Tensor of shape ``[..., n]`` whose last axis sums to one.
    """

    input_comp = tf.convert_to_tensor(input_comp, dtype=DTYPE)
    noise = tf.convert_to_tensor(noise, dtype=DTYPE)
    _check_noise_shape(input_comp.shape, noise.shape)

    output_comp = tf.exp(tf.math.log(input_comp) + noise)
    return output_comp / tf.reduce_sum(output_comp, axis=-1, keepdims=True)


def add_comp_noise_np(input_comp: np.ndarray, noise: np.ndarray) -> np.ndarray:
    """Perturb compositions in log space and renormalise in NumPy.

    Zero or negative proportions are not guarded; the log step yields
    ``-inf``/NaN and that propagates to the output.
    """

    comp = np.asarray(input_comp, dtype=np.float64)
    eta = np.asarray(noise, dtype=np.float64)
    _check_noise_shape(comp.shape, eta.shape)

    output_comp = np.exp(np.log(comp) + eta)
    return output_comp / np.sum(output_comp, axis=-1, keepdims=True)


def sample_comp_noise_tf(
    shape,
    scale: float,
    *,
    seed: int | None = None,
) -> tf.Tensor:
    """Draw Gaussian log-ratio noise of the given shape with TFP."""

    dist = tfd.Normal(
        loc=tf.constant(0.0, dtype=DTYPE),
        scale=tf.constant(scale, dtype=DTYPE),
    )
    return dist.sample(shape, seed=seed)


def comp_random_walk_np(
    initial: np.ndarray,
    noise_sd: float,
    n_steps: int,
    *,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Return a random walk of compositions, one row per step.

    Row 0 is ``initial`` normalised to sum to one; each following row adds
    independent ``Normal(0, noise_sd)`` log-ratio noise to the previous row.
    """

    rng = rng if rng is not None else np.random.default_rng()
    start = np.asarray(initial, dtype=np.float64)
    path = np.empty((n_steps + 1, start.shape[0]), dtype=np.float64)
    path[0] = start / start.sum()
    for t in range(1, n_steps + 1):
        eta = rng.normal(scale=noise_sd, size=start.shape[0])
        path[t] = add_comp_noise_np(path[t - 1], eta)
    return path


__all__ = [
    "add_comp_noise_np",
    "add_comp_noise_tf",
    "comp_random_walk_np",
    "sample_comp_noise_tf",
]
