import numpy as np
import pandas as pd
import pytest

from stockassess.stockassess.constants import CR_NO_ESTIMATE
from stockassess.stockassess.mortality import chapman_robson, crmort_by_year, crmort_np


def test_crmort_truncates_at_first_sparse_age():
    Z = crmort_np(np.array([5.0, 10.0, 3.0, 0.0, 0.0]), kage=1, a_plus=5, min_obs=1)
    # abar = (0*5 + 1*10 + 2*3) / 18 = 8/9; Z = log((1 + 8/9 - 1/18) / (8/9)) = log(33/16)
    np.testing.assert_allclose(Z, np.log(33.0 / 16.0))


def test_crmort_offsets_by_recruitment_age():
    comp = np.array([100.0, 5.0, 10.0, 3.0])
    Z = crmort_np(comp, kage=2, a_plus=4, min_obs=1)
    np.testing.assert_allclose(Z, np.log(33.0 / 16.0))


def test_crmort_returns_sentinel_when_mean_age_zero():
    Z = crmort_np(np.array([5.0, 0.0, 3.0]), kage=1, a_plus=3, min_obs=1)
    assert Z == CR_NO_ESTIMATE == -1.0


def test_crmort_early_exit_ignores_ages_after_gap():
    # A filter would keep the age-3 count; the scan stops at age 2 instead.
    Z = crmort_np(np.array([5.0, 0.5, 10.0]), kage=1, a_plus=3, min_obs=1)
    assert Z == -1.0


def test_crmort_empty_sample_propagates_nan():
    Z = crmort_np(np.array([0.0, 5.0]), kage=1, a_plus=2, min_obs=1)
    assert np.isnan(Z)


def test_chapman_robson_reports_summary():
    est = chapman_robson(np.array([5.0, 10.0, 3.0, 0.0, 0.0]), 1, 5, 1)
    assert est.n_ages == 3
    assert est.n_obs == 18.0
    np.testing.assert_allclose(est.abar, 16.0 / 18.0)
    assert est.has_estimate

    none = chapman_robson(np.array([5.0, 0.0]), 1, 2, 1)
    assert not none.has_estimate


@pytest.mark.parametrize(
    "comp, kage, a_plus",
    [
        (np.ones(5), 0, 5),
        (np.ones(5), 4, 3),
        (np.ones(3), 1, 5),
    ],
)
def test_crmort_rejects_invalid_age_range(comp, kage, a_plus):
    with pytest.raises(ValueError):
        crmort_np(comp, kage, a_plus, 1)


def test_crmort_by_year_applies_per_row_and_warns():
    frame = pd.DataFrame(
        [[5.0, 10.0, 3.0, 0.0], [5.0, 0.0, 0.0, 0.0]],
        index=pd.Index([2001, 2002], name="year"),
        columns=[1, 2, 3, 4],
    )
    with pytest.warns(RuntimeWarning, match="1 of 2"):
        Z = crmort_by_year(frame, kage=1, a_plus=4, min_obs=1)

    assert list(Z.index) == [2001, 2002]
    np.testing.assert_allclose(Z.loc[2001], np.log(33.0 / 16.0))
    assert Z.loc[2002] == -1.0
