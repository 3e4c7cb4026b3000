"""Newton-Raphson solver for the Baranov catch equation (no age structure).

Given observed catch ``C``, natural mortality ``M`` and biomass ``B``, the
fishing mortality ``F`` solves

    C = B * (1 - exp(-Z)) * F / Z,    Z = M + F.

The solver runs a fixed number of damped Newton steps so the sequence of
floating-point operations never depends on the data. Modified from the
delay-difference solver of S. Rossi and S. P. Cox.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
import warnings

import numpy as np
import tensorflow as tf

from .constants import BARANOV_B_STEP, BARANOV_N_ITER
from .transforms import DTYPE


@dataclass(frozen=True)
class BaranovConfig:
    """Iteration count and step damping for :func:`solve_baranov_dd_np`."""

    n_iter: int = BARANOV_N_ITER
    b_step: float = BARANOV_B_STEP

    def __post_init__(self) -> None:
        if self.n_iter < 0:
            raise ValueError(f"n_iter must be non-negative, got {self.n_iter}")
        if not 0.0 < self.b_step <= 1.0:
            raise ValueError(f"b_step must lie in (0, 1], got {self.b_step}")


def _resolve_config(
    n_iter: Optional[int],
    b_step: Optional[float],
    config: Optional[BaranovConfig],
) -> BaranovConfig:
    base = config if config is not None else BaranovConfig()
    return BaranovConfig(
        n_iter=base.n_iter if n_iter is None else n_iter,
        b_step=base.b_step if b_step is None else b_step,
    )


def baranov_catch_np(F: np.ndarray, M: np.ndarray, B: np.ndarray) -> np.ndarray:
    """Predicted catch for fishing mortality ``F``."""

    F = np.asarray(F, dtype=np.float64)
    Z = np.asarray(M, dtype=np.float64) + F
    return np.asarray(B, dtype=np.float64) * (1.0 - np.exp(-Z)) * F / Z


def baranov_catch_tf(F: tf.Tensor, M: tf.Tensor, B: tf.Tensor) -> tf.Tensor:
    F = tf.convert_to_tensor(F, dtype=DTYPE)
    Z = tf.convert_to_tensor(M, dtype=DTYPE) + F
    return tf.convert_to_tensor(B, dtype=DTYPE) * (1.0 - tf.exp(-Z)) * F / Z


def solve_baranov_dd_np(
    C: np.ndarray,
    M: np.ndarray,
    B: np.ndarray,
    *,
    n_iter: Optional[int] = None,
    b_step: Optional[float] = None,
    config: Optional[BaranovConfig] = None,
    check_tol: Optional[float] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Solve the Baranov equation for ``F`` by fixed-count Newton-Raphson.

    Args:
        C: Observed catch. ``C``, ``M`` and ``B`` broadcast together, so a
            whole catch series can be solved in one call.
        M: Natural mortality rate.
        B: Biomass.
        n_iter: Number of Newton iterations. Overrides ``config.n_iter``.
        b_step: Fraction of the Newton step taken each iteration. Overrides
            ``config.b_step``.
        config: Optional :class:`BaranovConfig` supplying defaults.
        check_tol: If given, the relative catch residual after the last
            iteration is compared against it and a ``RuntimeWarning`` is
            issued where it is exceeded. The iterations are unaffected.

    Returns:
        Tuple ``(Z, F)``. ``Z`` is the total mortality used in the final
        iteration and ``F`` the fishing mortality after the final update.
    """

    cfg = _resolve_config(n_iter, b_step, config)
    C = np.asarray(C, dtype=np.float64)
    M = np.asarray(M, dtype=np.float64)
    B = np.asarray(B, dtype=np.float64)

    F = C / (C + B)
    newZ = M + F
    Z = M + F

    for _ in range(cfg.n_iter):
        Z = newZ
        newZ = M
        tmp = B * (1.0 - np.exp(-Z)) * F / Z
        f = C - tmp
        J = -B * ((1.0 - np.exp(-Z)) * M / np.square(Z) + np.exp(-Z) * F / Z)
        F = F - cfg.b_step * f / J
        newZ = newZ + F

    if check_tol is not None:
        resid = np.abs(C - baranov_catch_np(F, M, B))
        # Zero catch is solved exactly (F = 0), so compare without dividing by C.
        bad = ~(resid <= check_tol * np.abs(C))
        if np.any(bad):
            warnings.warn(
                (
                    "Baranov solver did not reach the catch tolerance "
                    f"{check_tol:g} for {int(np.sum(bad))} of {bad.size} values "
                    f"after {cfg.n_iter} iterations (max absolute residual {np.nanmax(resid):.3g})."
                ),
                RuntimeWarning,
            )

    return Z, F


def solve_baranov_dd_tf(
    C: tf.Tensor,
    M: tf.Tensor,
    B: tf.Tensor,
    *,
    n_iter: Optional[int] = None,
    b_step: Optional[float] = None,
    config: Optional[BaranovConfig] = None,
) -> Tuple[tf.Tensor, tf.Tensor]:
    """TensorFlow version of :func:`solve_baranov_dd_np`.

    The loop is unrolled in Python so the graph is static and gradients with
    respect to ``C``, ``M`` and ``B`` pass through every iteration.
    """

    cfg = _resolve_config(n_iter, b_step, config)
    C = tf.convert_to_tensor(C, dtype=DTYPE)
    M = tf.convert_to_tensor(M, dtype=DTYPE)
    B = tf.convert_to_tensor(B, dtype=DTYPE)
    step = tf.constant(cfg.b_step, dtype=DTYPE)

    F = C / (C + B)
    newZ = M + F
    Z = M + F

    for _ in range(cfg.n_iter):
        Z = newZ
        newZ = M
        tmp = B * (1.0 - tf.exp(-Z)) * F / Z
        f = C - tmp
        J = -B * ((1.0 - tf.exp(-Z)) * M / tf.square(Z) + tf.exp(-Z) * F / Z)
        F = F - step * f / J
        newZ = newZ + F

    return Z, F


__all__ = [
    "BaranovConfig",
    "baranov_catch_np",
    "baranov_catch_tf",
    "solve_baranov_dd_np",
    "solve_baranov_dd_tf",
]
