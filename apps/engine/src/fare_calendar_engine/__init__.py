"""Price calendar aggregation engine."""

from .orchestrator import CalendarConfig, compute_calendar, search_single_date

__all__ = ["CalendarConfig", "compute_calendar", "search_single_date"]
