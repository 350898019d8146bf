"""Timing report parsing and reconciliation."""

from .reconciler import (
    FRESH_THRESHOLD_SECONDS,
    TimingAggregate,
    TimingReconciler,
    timing_report_path,
)
from .report_parser import decode_unit_data, locate_unit_data, parse_unit_data

__all__ = [
    "FRESH_THRESHOLD_SECONDS",
    "TimingAggregate",
    "TimingReconciler",
    "decode_unit_data",
    "locate_unit_data",
    "parse_unit_data",
    "timing_report_path",
]
