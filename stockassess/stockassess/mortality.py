"""Chapman-Robson total mortality estimation from catch-at-age samples.

References: Chapman and Robson (1960); Dunn et al. (2002).
"""

from __future__ import annotations

from dataclasses import dataclass
import warnings

import numpy as np
import pandas as pd

from .constants import CR_NO_ESTIMATE


@dataclass(frozen=True)
class ChapmanRobsonEstimate:
    """Chapman-Robson estimate with the summary statistics behind it."""

    Z: float
    abar: float
    n_obs: float
    n_ages: int

    @property
    def has_estimate(self) -> bool:
        return self.Z != CR_NO_ESTIMATE and not np.isnan(self.Z)


def _validate_age_range(n_comp: int, kage: int, a_plus: int) -> None:
    if kage < 1:
        raise ValueError(f"kage must be >= 1, got {kage}")
    if a_plus < kage:
        raise ValueError(f"a_plus ({a_plus}) must be >= kage ({kage})")
    if n_comp < a_plus:
        raise ValueError(
            f"age composition has {n_comp} entries but a_plus={a_plus} requires at least {a_plus}"
        )


def chapman_robson(
    age_comp: np.ndarray,
    kage: int,
    a_plus: int,
    min_obs: float,
) -> ChapmanRobsonEstimate:
    """Estimate total mortality from ages ``kage`` through ``a_plus``.

    Ages are 1-indexed (``age_comp[0]`` is age 1). Observations are taken
    from ``kage`` upward and the scan stops at the first age whose count is
    below ``min_obs``; all older ages are dropped with it.

    If the mean relative age is zero the estimate is ``CR_NO_ESTIMATE``
    (-1). An empty sample gives ``0 / 0`` and the NaN is returned as is.
    """

    comp = np.asarray(age_comp, dtype=np.float64)
    _validate_age_range(comp.shape[0], kage, a_plus)

    max_ages = a_plus - kage + 1
    age_obs = np.zeros(max_ages, dtype=np.float64)
    abar = np.float64(0.0)

    n_ages = 0
    for a in range(kage - 1, a_plus):
        if comp[a] >= min_obs:
            age_obs[a - kage + 1] = comp[a]
            abar += (a - kage + 1) * comp[a]
            n_ages += 1
        else:
            break

    N = age_obs.sum()
    with np.errstate(divide="ignore", invalid="ignore"):
        abar = abar / N
        if abar == 0:
            Z = CR_NO_ESTIMATE
        else:
            Z = float(np.log((1.0 + abar - 1.0 / N) / abar))

    return ChapmanRobsonEstimate(Z=Z, abar=float(abar), n_obs=float(N), n_ages=n_ages)


def crmort_np(
    age_comp: np.ndarray,
    kage: int,
    a_plus: int,
    min_obs: float,
) -> float:
    """Return the Chapman-Robson Z estimate, ``-1`` when none is possible."""

    return chapman_robson(age_comp, kage, a_plus, min_obs).Z


def crmort_by_year(
    frame: pd.DataFrame,
    kage: int,
    a_plus: int,
    min_obs: float,
) -> pd.Series:
    """Apply :func:`crmort_np` to every row of a year x age table.

    Columns must be ordered by age starting at age 1. Years without an
    estimate keep the ``-1`` sentinel (or NaN) and trigger a warning.
    """

    values = frame.to_numpy(dtype=np.float64)
    Z = pd.Series(
        [crmort_np(row, kage, a_plus, min_obs) for row in values],
        index=frame.index,
        name="Z",
        dtype=np.float64,
    )
    missing = (Z == CR_NO_ESTIMATE) | Z.isna()
    if missing.any():
        warnings.warn(
            (
                "Chapman-Robson estimate unavailable for "
                f"{int(missing.sum())} of {len(Z)} rows: {list(Z.index[missing])}"
            ),
            RuntimeWarning,
        )
    return Z


__all__ = ["ChapmanRobsonEstimate", "chapman_robson", "crmort_by_year", "crmort_np"]
