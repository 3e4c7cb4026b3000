"""Namespace package entry point for the stock-assessment toolkit."""

from importlib import import_module
from typing import Any

__all__ = [
    "square_np",
    "square_tf",
    "posfun_np",
    "posfun_tf",
    "add_comp_noise_np",
    "add_comp_noise_tf",
    "sample_comp_noise_tf",
    "comp_random_walk_np",
    "ChapmanRobsonEstimate",
    "chapman_robson",
    "crmort_np",
    "crmort_by_year",
    "BaranovConfig",
    "baranov_catch_np",
    "baranov_catch_tf",
    "solve_baranov_dd_np",
    "solve_baranov_dd_tf",
    "neg_log_logistic_normal_np",
    "neg_log_logistic_normal_tf",
]


def __getattr__(name: str) -> Any:  # pragma: no cover - simple delegation
    if name in __all__:
        module = import_module(".stockassess", __name__)
        return getattr(module, name)
    raise AttributeError(f"module 'stockassess' has no attribute {name!r}")


def __dir__() -> list[str]:  # pragma: no cover - introspection helper
    return sorted(set(globals().keys()) | set(__all__))
