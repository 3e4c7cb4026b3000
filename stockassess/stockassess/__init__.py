"""Stock-assessment numerical utilities with lazy attribute loading."""

from importlib import import_module
from typing import Any


_EXPORTS = {
    "DTYPE": ("stockassess.stockassess.transforms", "DTYPE"),
    "square_np": ("stockassess.stockassess.transforms", "square_np"),
    "square_tf": ("stockassess.stockassess.transforms", "square_tf"),
    "posfun_np": ("stockassess.stockassess.transforms", "posfun_np"),
    "posfun_tf": ("stockassess.stockassess.transforms", "posfun_tf"),
    "add_comp_noise_np": ("stockassess.stockassess.compositions", "add_comp_noise_np"),
    "add_comp_noise_tf": ("stockassess.stockassess.compositions", "add_comp_noise_tf"),
    "sample_comp_noise_tf": ("stockassess.stockassess.compositions", "sample_comp_noise_tf"),
    "comp_random_walk_np": ("stockassess.stockassess.compositions", "comp_random_walk_np"),
    "ChapmanRobsonEstimate": ("stockassess.stockassess.mortality", "ChapmanRobsonEstimate"),
    "chapman_robson": ("stockassess.stockassess.mortality", "chapman_robson"),
    "crmort_np": ("stockassess.stockassess.mortality", "crmort_np"),
    "crmort_by_year": ("stockassess.stockassess.mortality", "crmort_by_year"),
    "BaranovConfig": ("stockassess.stockassess.baranov", "BaranovConfig"),
    "baranov_catch_np": ("stockassess.stockassess.baranov", "baranov_catch_np"),
    "baranov_catch_tf": ("stockassess.stockassess.baranov", "baranov_catch_tf"),
    "solve_baranov_dd_np": ("stockassess.stockassess.baranov", "solve_baranov_dd_np"),
    "solve_baranov_dd_tf": ("stockassess.stockassess.baranov", "solve_baranov_dd_tf"),
    "neg_log_logistic_normal_np": (
        "stockassess.stockassess.likelihood",
        "neg_log_logistic_normal_np",
    ),
    "neg_log_logistic_normal_tf": (
        "stockassess.stockassess.likelihood",
        "neg_log_logistic_normal_tf",
    ),
}


__all__ = sorted(_EXPORTS.keys())


def __getattr__(name: str) -> Any:  # pragma: no cover - exercised via import
    try:
        module_name, attribute = _EXPORTS[name]
    except KeyError as exc:  # pragma: no cover - simple delegation
        raise AttributeError(
            f"module 'stockassess.stockassess' has no attribute {name!r}"
        ) from exc
    module = import_module(module_name)
    value = getattr(module, attribute)
    globals()[name] = value
    return value


def __dir__() -> list[str]:  # pragma: no cover - introspection helper
    return sorted(set(globals().keys()) | set(__all__))
