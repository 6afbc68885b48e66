"""
Tests for the detailed monthly report aggregation.
"""

import pytest
from datetime import date, time
from uuid import uuid4

from compliance.exceptions import BusinessRuleViolation
from compliance.schemas import Facility
from compliance.utils.aggregation import (
    assign_field_slots,
    build_detailed_report,
    check_company_scope,
    events_in_month,
)


def build(facility, sprayfields, events=(), year=2024, month=6, **kwargs):
    return build_detailed_report(
        facility,
        year,
        month,
        effective_company_id=facility.company_id,
        sprayfields=sprayfields,
        irrigation_events=events,
        **kwargs,
    )


class TestFieldSlots:
    """Test placing sprayfields into the four report slots."""

    def test_ordered_by_label(self, make_sprayfield):
        fields = [make_sprayfield("SF-3"), make_sprayfield("SF-1"), make_sprayfield("SF-2")]

        blocks = assign_field_slots(fields)

        assert [b.field_label for b in blocks] == ["SF-1", "SF-2", "SF-3", ""]
        assert [b.slot for b in blocks] == [1, 2, 3, 4]
        assert blocks[3].sprayfield_id is None
        assert not blocks[3].is_configured

    def test_at_most_four_fields(self, make_sprayfield):
        fields = [make_sprayfield(f"SF-{i}") for i in range(1, 7)]

        blocks = assign_field_slots(fields)

        assert len(blocks) == 4
        assert [b.field_label for b in blocks] == ["SF-1", "SF-2", "SF-3", "SF-4"]

    def test_crop_name_and_rates_copied(self, make_sprayfield, make_crop):
        crop = make_crop(name="Fescue")
        field = make_sprayfield("SF-1", size_acres=3.5, crop_id=crop.id, hourly_rate_inches=0.25, annual_rate_inches=48.0)

        block = assign_field_slots([field], {crop.id: crop})[0]

        assert block.crop_name == "Fescue"
        assert block.size_acres == 3.5
        assert block.hourly_rate_inches == 0.25
        assert block.annual_rate_inches == 48.0


class TestDetailedReport:
    """Test daily series and monthly totals."""

    def test_month_without_events(self, facility, make_sprayfield):
        report = build(facility, [make_sprayfield("SF-1")])

        assert report.did_irrigation_occur is False
        block = report.field_reports[0]
        for series in (block.volume_applied_daily, block.time_irrigated_daily,
                       block.daily_loading_daily, block.max_hourly_loading_daily):
            assert len(series) == 31
            assert all(v is None for v in series)
        assert block.monthly_loading == 0.0
        assert block.max_hourly_loading == 0.0

    def test_single_event(self, facility, make_sprayfield, make_event):
        field = make_sprayfield("SF-1", size_acres=1.0)
        event = make_event(field, date(2024, 6, 5), time(8, 0), time(10, 0), gallons=27152.0)

        report = build(facility, [field], [event])
        block = report.field_reports[0]

        assert report.did_irrigation_occur is True
        assert block.volume_applied_daily[4] == 27152.0
        assert block.time_irrigated_daily[4] == 120.0
        assert block.daily_loading_daily[4] == pytest.approx(1.0)
        assert block.max_hourly_loading_daily[4] == pytest.approx(0.5)
        assert block.daily_loading_daily[3] is None
        assert block.daily_loading_daily[5] is None
        assert block.monthly_loading == pytest.approx(1.0)
        assert block.max_hourly_loading == pytest.approx(0.5)
        assert block.twelve_month_floating_total == pytest.approx(1.0)

    def test_monthly_totals(self, facility, make_sprayfield, make_event):
        field = make_sprayfield("SF-1", size_acres=2.0)
        events = [
            # 0.5 in over 30 minutes -> max hourly 0.5
            make_event(field, date(2024, 6, 1), time(8, 0), time(8, 30), gallons=27152.0),
            # 1.0 in over 240 minutes -> max hourly 0.25
            make_event(field, date(2024, 6, 20), time(8, 0), time(12, 0), gallons=54304.0),
        ]

        block = build(facility, [field], events).field_reports[0]

        assert block.monthly_loading == pytest.approx(1.5)
        assert block.max_hourly_loading == pytest.approx(0.5)

    def test_unconfigured_slots_stay_empty(self, facility, make_sprayfield, make_event):
        field = make_sprayfield("SF-1")
        report = build(facility, [field], [make_event(field, date(2024, 6, 5))])

        assert len(report.field_reports) == 4
        for block in report.field_reports[1:]:
            assert block.sprayfield_id is None
            assert block.monthly_loading == 0.0
            assert block.twelve_month_floating_total == 0.0
            assert all(v is None for v in block.volume_applied_daily)

    def test_days_past_month_end_stay_empty(self, facility, make_sprayfield, make_event):
        field = make_sprayfield("SF-1")
        report = build(facility, [field], [make_event(field, date(2023, 2, 28))], year=2023, month=2)
        block = report.field_reports[0]

        assert block.volume_applied_daily[27] == 27152.0
        assert block.volume_applied_daily[28:] == [None, None, None]

    def test_event_on_unreported_field_still_counts_as_irrigation(self, facility, make_sprayfield, make_event):
        fields = [make_sprayfield(f"SF-{i}") for i in range(1, 6)]
        report = build(facility, fields, [make_event(fields[4], date(2024, 6, 5))])

        assert report.did_irrigation_occur is True
        assert all(b.monthly_loading == 0.0 for b in report.field_reports)

    def test_events_outside_period_ignored(self, facility, make_sprayfield, make_event):
        field = make_sprayfield("SF-1")
        events = [
            make_event(field, date(2024, 5, 31)),
            make_event(field, date(2024, 7, 1)),
            make_event(field, date(2024, 6, 10), facility_id=uuid4()),
        ]

        report = build(facility, [field], events)

        assert report.did_irrigation_occur is False
        assert events_in_month(events, facility.id, 2024, 6) == []


class TestDailyObservations:
    """Test operator log series."""

    def test_logs_fill_their_day(self, facility, make_sprayfield, make_log):
        logs = [
            make_log(date(2024, 6, 3), weather_conditions="Sunny", temperature_f=71.0,
                     precipitation_in=0.0, storage_ft=3.2, five_day_upset_ft=1.1),
            make_log(date(2024, 6, 4), weather_conditions="", temperature_f=65.0),
        ]

        report = build(facility, [make_sprayfield("SF-1")], operator_logs=logs)

        assert report.weather_code_daily[2] == "Sunny"
        assert report.temperature_daily[2] == 71.0
        assert report.precipitation_daily[2] == 0.0
        assert report.storage_daily[2] == 3.2
        assert report.five_day_upset_daily[2] == 1.1
        assert report.weather_code_daily[3] is None
        assert report.temperature_daily[3] == 65.0
        assert report.temperature_daily[0] is None
        assert len(report.weather_code_daily) == 31

    def test_first_log_of_a_day_wins(self, facility, make_sprayfield, make_log):
        logs = [make_log(date(2024, 6, 3), temperature_f=60.0), make_log(date(2024, 6, 3), temperature_f=80.0)]

        report = build(facility, [make_sprayfield("SF-1")], operator_logs=logs)

        assert report.temperature_daily[2] == 60.0


class TestCompanyScope:
    """Test ownership checks."""

    def test_other_company_facility_rejected(self, facility, make_sprayfield):
        with pytest.raises(BusinessRuleViolation):
            build_detailed_report(
                facility, 2024, 6,
                effective_company_id=uuid4(),
                sprayfields=[make_sprayfield("SF-1")],
                irrigation_events=[],
            )

    def test_other_company_sprayfield_rejected(self, facility, make_sprayfield):
        field = make_sprayfield("SF-1", company_id=uuid4())
        with pytest.raises(BusinessRuleViolation):
            build(facility, [field])

    def test_other_facility_sprayfield_rejected(self, facility, make_sprayfield):
        field = make_sprayfield("SF-1", facility_id=uuid4())
        with pytest.raises(BusinessRuleViolation):
            check_company_scope(facility.company_id, facility, [field])

    def test_same_company_accepted(self, facility, make_sprayfield):
        other = Facility(id=uuid4(), company_id=facility.company_id, name="Other")
        check_company_scope(facility.company_id, other)

    def test_invalid_month(self, facility, make_sprayfield):
        with pytest.raises(ValueError):
            build(facility, [make_sprayfield("SF-1")], month=13)
