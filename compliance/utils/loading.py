"""
Hydraulic loading calculations for a single sprayfield and day.

Formulas follow the NDAR-1 form:
- Daily loading (in) = Volume applied (gal) / (Area (ac) x 27,152)
- Maximum hourly loading (in):
    - Time irrigated < 60 minutes: equal to the daily loading
    - Otherwise: (Daily loading / Time irrigated) x 60

Missing or inapplicable results are None, never a division error.
"""

from dataclasses import dataclass
from datetime import datetime, date, time, timedelta
from typing import Iterable, Optional

from compliance.schemas.records import IrrigationEvent

# Gallons in one acre-inch, as printed on the NDAR-1 form. Used for every
# loading and application-rate conversion.
GALLONS_PER_ACRE_INCH = 27152.0

MINUTES_PER_HOUR = 60.0


@dataclass(frozen=True)
class FieldDayLoading:
    """Loading results for one field on one day."""
    volume_applied: Optional[float] = None
    minutes_irrigated: Optional[float] = None
    daily_loading: Optional[float] = None
    max_hourly_loading: Optional[float] = None


NO_ACTIVITY = FieldDayLoading()


def minutes_between(start: time, end: time) -> float:
    """
    Length of an irrigation run in minutes.

    An end time earlier than the start time is a run that crossed midnight.

    Example:
        >>> minutes_between(time(23, 0), time(1, 0))
        120.0
    """
    anchor = date(2000, 1, 1)
    start_dt = datetime.combine(anchor, start)
    end_dt = datetime.combine(anchor, end)
    if end_dt < start_dt:
        end_dt += timedelta(days=1)
    return (end_dt - start_dt).total_seconds() / 60.0


def compute_daily_loading(volume_applied: Optional[float], area_acres: Optional[float]) -> Optional[float]:
    """
    Daily hydraulic loading in inches.

    Returns None when there is no volume or no usable field area.
    """
    if not volume_applied or area_acres is None or area_acres <= 0:
        return None
    return volume_applied / (area_acres * GALLONS_PER_ACRE_INCH)


def compute_max_hourly_loading(daily_loading: Optional[float], minutes_irrigated: Optional[float]) -> Optional[float]:
    """
    Maximum hourly loading in inches.

    A run shorter than an hour is assumed not to exceed its own daily
    loading; longer runs are normalized to an hourly rate.
    """
    if daily_loading is None or not minutes_irrigated:
        return None
    if minutes_irrigated < MINUTES_PER_HOUR:
        return daily_loading
    return (daily_loading / minutes_irrigated) * MINUTES_PER_HOUR


def compute_field_day(events: Iterable[IrrigationEvent], area_acres: Optional[float]) -> FieldDayLoading:
    """
    Loading results for one field from that day's irrigation events.

    Multiple events on the same day are summed. With no events every value
    stays None, so a day without irrigation is distinguishable from a
    recorded zero-volume event.

    Args:
        events: Irrigation events for the field on the day
        area_acres: Field area in acres

    Returns:
        FieldDayLoading for the day
    """
    events = list(events)
    if not events:
        return NO_ACTIVITY

    volume_applied = sum((e.total_volume_gallons for e in events), 0.0)
    minutes_irrigated = sum((minutes_between(e.start_time, e.end_time) for e in events), 0.0)
    daily_loading = compute_daily_loading(volume_applied, area_acres)

    return FieldDayLoading(
        volume_applied=volume_applied,
        minutes_irrigated=minutes_irrigated,
        daily_loading=daily_loading,
        max_hourly_loading=compute_max_hourly_loading(daily_loading, minutes_irrigated),
    )
