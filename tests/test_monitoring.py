"""
Tests for mass loading and daily monitoring reports.
"""

import pytest
from datetime import date
from uuid import uuid4

from compliance.schemas import GroundwaterSample
from compliance.utils.aggregation import build_detailed_report
from compliance.utils.monitoring import (
    average_total_nitrogen,
    build_daily_monitoring_report,
    build_mass_loading_report,
    compute_mass_load,
    sample_total_nitrogen,
)


@pytest.fixture
def make_sample(facility):
    def _make(on, tkn=None, no3n=None, nh3n=None, **kwargs):
        return GroundwaterSample(
            id=uuid4(),
            company_id=facility.company_id,
            facility_id=kwargs.pop("facility_id", facility.id),
            sample_date=on,
            tkn=tkn,
            no3n=no3n,
            nh3n=nh3n,
        )
    return _make


class TestTotalNitrogen:
    """Test groundwater total nitrogen."""

    def test_missing_component_counts_as_zero(self, make_sample):
        assert sample_total_nitrogen(make_sample(date(2024, 6, 1), tkn=2.0)) == 2.0
        assert sample_total_nitrogen(make_sample(date(2024, 6, 1), no3n=1.5)) == 1.5

    def test_sample_without_nitrogen(self, make_sample):
        assert sample_total_nitrogen(make_sample(date(2024, 6, 1), nh3n=0.3)) is None

    def test_average_skips_unmeasured_samples(self, make_sample):
        samples = [
            make_sample(date(2024, 6, 1), tkn=2.0, no3n=3.0),
            make_sample(date(2024, 6, 2)),
            make_sample(date(2024, 6, 3), tkn=4.0),
        ]
        # (5 + 4) / 2
        assert average_total_nitrogen(samples) == 4.5

    def test_average_without_samples(self):
        assert average_total_nitrogen([]) is None


class TestMassLoad:
    """Test the monthly mass load formula."""

    def test_formula(self):
        # 1,000,000 gal x 10 mg/L x 8.34e-6 / 10 ac
        assert compute_mass_load(1_000_000.0, 10.0, 10.0) == pytest.approx(8.34)

    @pytest.mark.parametrize("volume,concentration,area", [
        (1000.0, None, 10.0),
        (1000.0, 10.0, 0.0),
        (1000.0, 10.0, None),
        (0.0, 10.0, 10.0),
    ])
    def test_guards(self, volume, concentration, area):
        assert compute_mass_load(volume, concentration, area) is None


class TestMassLoadingReport:
    """Test building the mass loading report from a detailed report."""

    def test_fields(self, facility, make_sprayfield, make_event, make_sample):
        loaded = make_sprayfield("SF-1", size_acres=2.0)
        idle = make_sprayfield("SF-2", size_acres=3.0)
        detailed = build_detailed_report(
            facility, 2024, 6,
            effective_company_id=facility.company_id,
            sprayfields=[loaded, idle],
            irrigation_events=[
                make_event(loaded, date(2024, 6, 1), gallons=100_000.0),
                make_event(loaded, date(2024, 6, 2), gallons=100_000.0),
            ],
        )
        samples = [
            make_sample(date(2024, 6, 15), tkn=8.0, no3n=2.0),
            make_sample(date(2024, 5, 15), tkn=100.0),
        ]

        report = build_mass_loading_report(detailed, samples)

        assert report.average_concentration_mg_l == 10.0
        assert [f.field_label for f in report.field_reports] == ["SF-1", "SF-2"]

        first, second = report.field_reports
        assert first.field_loaded is True
        assert first.load_type == "Wastewater"
        assert first.monthly_volume_gallons == 200_000.0
        # 200,000 x 10 x 8.34e-6 / 2
        assert first.monthly_load_lbs_per_acre == pytest.approx(8.34)
        assert first.twelve_month_floating_total == detailed.field_reports[0].twelve_month_floating_total

        assert second.field_loaded is False
        assert second.monthly_volume_gallons == 0.0
        assert second.monthly_load_lbs_per_acre is None

    def test_no_samples(self, facility, make_sprayfield, make_event):
        field = make_sprayfield("SF-1")
        detailed = build_detailed_report(
            facility, 2024, 6,
            effective_company_id=facility.company_id,
            sprayfields=[field],
            irrigation_events=[make_event(field, date(2024, 6, 1))],
        )

        report = build_mass_loading_report(detailed, [])

        assert report.average_concentration_mg_l is None
        assert report.field_reports[0].monthly_load_lbs_per_acre is None


class TestDailyMonitoringReport:
    """Test daily flow and nitrogen series."""

    def test_daily_values(self, facility, make_sprayfield, make_event, make_sample):
        field = make_sprayfield("SF-1")
        events = [
            make_event(field, date(2024, 6, 2), gallons=1000.0),
            make_event(field, date(2024, 6, 2), gallons=500.0),
        ]
        samples = [
            make_sample(date(2024, 6, 2), tkn=2.0, no3n=1.0, nh3n=0.5),
            make_sample(date(2024, 6, 2), tkn=4.0),
            make_sample(date(2024, 6, 5), no3n=3.0),
        ]

        report = build_daily_monitoring_report(
            facility, 2024, 6,
            effective_company_id=facility.company_id,
            irrigation_events=events,
            groundwater_samples=samples,
        )

        assert report.flow_gallons_daily[1] == 1500.0
        assert report.flow_gallons_daily[2] is None
        assert report.tkn_daily[1] == 3.0
        assert report.no3n_daily[1] == 1.0
        assert report.nh3n_daily[1] == 0.5
        assert report.total_nitrogen_daily[1] == 4.0
        assert report.tkn_daily[4] is None
        assert report.total_nitrogen_daily[4] == 3.0
        assert report.total_nitrogen_daily[0] is None
        assert len(report.tkn_daily) == 31
