"""
Tests for the monthly irrigation summary.

Most cases use two 10-acre fields (20 acres total), where
543,040 gallons = 1 inch applied.
"""

import pytest
from datetime import date, time
from uuid import uuid4

from compliance.exceptions import BusinessRuleViolation
from compliance.schemas import ComplianceStatus, WastewaterCharacteristic
from compliance.utils.irrigation_summary import (
    application_efficiency,
    average_ammonia_concentration,
    build_summary_report,
    pan_uptake_rate,
    summarize_weather,
    target_monthly_rate,
)


@pytest.fixture
def two_fields(make_sprayfield):
    return [
        make_sprayfield("SF-1", size_acres=10.0, limit=15.0),
        make_sprayfield("SF-2", size_acres=10.0, limit=15.0),
    ]


def summarize(facility, fields, events, **kwargs):
    return build_summary_report(
        facility, 2024, 6,
        effective_company_id=facility.company_id,
        sprayfields=fields,
        irrigation_events=events,
        **kwargs,
    )


class TestSummaryReport:
    """Test the facility-level rates."""

    def test_rates_and_status(self, facility, two_fields, make_event):
        events = [
            make_event(two_fields[0], date(2024, 6, 3), gallons=271520.0),
            make_event(two_fields[1], date(2024, 6, 4), gallons=271520.0),
        ]

        report = summarize(facility, two_fields, events)

        # 543,040 / (20 x 27,152) = 1.0 in; target = 15 / 12 = 1.25 in
        assert report.total_volume_applied == 543040.0
        assert report.total_application_rate == pytest.approx(1.0)
        assert report.hydraulic_loading_rate == pytest.approx(12.0)
        assert report.hydraulic_loading_limit == 15.0
        assert report.application_efficiency == pytest.approx(80.0)
        assert report.compliance_status == ComplianceStatus.COMPLIANT
        assert report.operational_notes == "Generated from 2 irrigation record(s)."

    def test_no_events_rejected(self, facility, two_fields):
        with pytest.raises(BusinessRuleViolation, match="No irrigation records"):
            summarize(facility, two_fields, [])

    def test_events_of_other_months_do_not_count(self, facility, two_fields, make_event):
        with pytest.raises(BusinessRuleViolation):
            summarize(facility, two_fields, [make_event(two_fields[0], date(2024, 7, 1))])

    def test_nitrogen_loading(self, facility, two_fields, make_event):
        events = [make_event(two_fields[0], date(2024, 6, 3), gallons=543040.0)]

        report = summarize(facility, two_fields, events, average_ammonia_mg_l=20.0)

        # 20 x 543,040 x 8.34 / (20 x 1,000,000) x 12
        assert report.nitrogen_loading_rate == pytest.approx(54.3474432)

    def test_no_concentration_data(self, facility, two_fields, make_event):
        report = summarize(facility, two_fields, [make_event(two_fields[0], date(2024, 6, 3))])
        assert report.nitrogen_loading_rate == 0.0

    def test_over_limit(self, facility, make_sprayfield, make_event):
        fields = [make_sprayfield("SF-1", size_acres=1.0, limit=12.0)]
        # 2 in this month -> 24 in/yr against a 12 in/yr limit
        events = [make_event(fields[0], date(2024, 6, 3), gallons=54304.0)]

        report = summarize(facility, fields, events)

        assert report.hydraulic_loading_rate == pytest.approx(24.0)
        assert report.application_efficiency == 100.0
        assert report.compliance_status == ComplianceStatus.NON_COMPLIANT

    def test_no_fields_guards_division(self, facility, make_sprayfield, make_event):
        field = make_sprayfield("SF-1")
        report = summarize(facility, [], [make_event(field, date(2024, 6, 3))])

        assert report.total_application_rate == 0.0
        assert report.application_efficiency == 0.0
        assert report.pan_uptake_rate == 0.0
        assert report.hydraulic_loading_limit == 0.0

    def test_other_company_rejected(self, facility, two_fields, make_event):
        events = [make_event(two_fields[0], date(2024, 6, 3))]
        with pytest.raises(BusinessRuleViolation):
            build_summary_report(
                facility, 2024, 6,
                effective_company_id=uuid4(),
                sprayfields=two_fields,
                irrigation_events=events,
            )


class TestPanAndTarget:
    """Test area-weighted crop and target rates."""

    def test_pan_uptake_weighted_by_area(self, make_sprayfield, make_crop):
        bermuda = make_crop("Bermuda", pan_factor=0.5, n_uptake=200.0)   # 100
        fescue = make_crop("Fescue", pan_factor=0.8, n_uptake=150.0)     # 120
        fields = [
            make_sprayfield("SF-1", size_acres=10.0, crop_id=bermuda.id),
            make_sprayfield("SF-2", size_acres=30.0, crop_id=fescue.id),
            make_sprayfield("SF-3", size_acres=50.0),                     # no crop
        ]

        # (10 x 100 + 30 x 120) / 40 = 115
        rate = pan_uptake_rate(fields, {bermuda.id: bermuda, fescue.id: fescue})
        assert rate == pytest.approx(115.0)

    def test_pan_without_crops(self, make_sprayfield):
        assert pan_uptake_rate([make_sprayfield("SF-1")], {}) == 0.0

    def test_target_rate_weighted_by_area(self, make_sprayfield):
        fields = [
            make_sprayfield("SF-1", size_acres=10.0, limit=12.0),   # 1 in/month
            make_sprayfield("SF-2", size_acres=30.0, limit=24.0),   # 2 in/month
        ]
        # (10 x 1 + 30 x 2) / 40 = 1.75
        assert target_monthly_rate(fields) == pytest.approx(1.75)

    def test_efficiency_guards(self):
        assert application_efficiency(1.0, 0.0) == 0.0
        assert application_efficiency(3.0, 1.0) == 100.0
        assert application_efficiency(0.5, 1.0) == 50.0


class TestTextFields:
    """Test weather summary and ammonia source."""

    def test_weather_summary(self, make_sprayfield, make_event):
        field = make_sprayfield("SF-1")
        notes = ["Clear", "Rain", "Clear", "", None, "Fog", "Wind", "Snow", "Hail"]
        events = [make_event(field, date(2024, 6, day), weather=w) for day, w in enumerate(notes, start=1)]

        assert summarize_weather(reversed(events)) == "Clear; Rain; Fog; Wind; Snow"

    def test_weather_summary_empty(self, make_sprayfield, make_event):
        field = make_sprayfield("SF-1")
        assert summarize_weather([make_event(field, date(2024, 6, 1))]) == ""

    def test_same_day_ordered_by_start_time(self, make_sprayfield, make_event):
        field = make_sprayfield("SF-1")
        events = [
            make_event(field, date(2024, 6, 1), start=time(14, 0), end=time(15, 0), weather="Windy"),
            make_event(field, date(2024, 6, 1), start=time(6, 0), end=time(7, 0), weather="Calm"),
        ]
        assert summarize_weather(events) == "Calm; Windy"

    def test_average_ammonia(self, facility):
        record = WastewaterCharacteristic(
            id=uuid4(), company_id=facility.company_id, facility_id=facility.id,
            year=2024, month=6, nh3n_daily=[10.0, None, 20.0],
        )
        assert len(record.nh3n_daily) == 31
        assert average_ammonia_concentration(record) == 15.0

    def test_average_ammonia_without_data(self, facility):
        empty = WastewaterCharacteristic(
            id=uuid4(), company_id=facility.company_id, facility_id=facility.id, year=2024, month=6,
        )
        assert average_ammonia_concentration(empty) is None
        assert average_ammonia_concentration(None) is None
