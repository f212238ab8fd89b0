from .steps import StepSeries, TimeWindow, correlate, filter_series, parse_iso_ms

__all__ = ["StepSeries", "TimeWindow", "correlate", "filter_series", "parse_iso_ms"]
