"""Analysis and reporting for the REEM model."""

from .summary import (
    MassSummary,
    summarize_model,
    build_chart_data,
    print_summary,
    LOG_Z_FLOOR,
)

__all__ = [
    "MassSummary",
    "summarize_model",
    "build_chart_data",
    "print_summary",
    "LOG_Z_FLOOR",
]
