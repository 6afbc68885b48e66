"""
Generate monthly compliance reports for one facility.

Builds and stores the detailed NDAR-1 report and/or the irrigation
summary for a facility and month. A period that is already reported, a
month without irrigation (summary only) or a facility owned by another
company is logged and the script exits with status 1.

Usage:
    python scripts/generate_monthly_reports.py --facility-id <uuid> --company-id <uuid> --year 2024 --month 6
    python scripts/generate_monthly_reports.py --facility-id <uuid> --company-id <uuid> --year 2024 --month 6 --report summary
"""

import argparse
import asyncio
import sys
from uuid import UUID

from compliance.crud.reports import detailed_report, summary_report
from compliance.database import async_session, create_tables
from compliance.exceptions import BusinessRuleViolation, EntityNotFoundError
from compliance.utils.logging_config import setup_logging, get_logger

# Setup logging
setup_logging()
logger = get_logger(__name__)

REPORT_CHOICES = ("detailed", "summary", "all")


async def generate_reports(
    facility_id: UUID,
    company_id: UUID,
    year: int,
    month: int,
    report: str = "all",
    init_db: bool = False
) -> int:
    """
    Generate the requested reports.

    Returns:
        Process exit status (0 on success)
    """
    if init_db:
        await create_tables()

    logger.info("=" * 70)
    logger.info(f"GENERATING {report.upper()} REPORT(S) FOR {year}-{month:02d}")
    logger.info("=" * 70)

    status = 0
    async with async_session() as db:
        if report in ("detailed", "all"):
            try:
                detailed = await detailed_report.generate(
                    db, facility_id=facility_id, year=year, month=month, effective_company_id=company_id
                )
                for block in detailed.field_reports:
                    if block.is_configured:
                        logger.info(
                            f"  {block.field_label}: monthly {block.monthly_loading:.4f} in, "
                            f"12-month {block.twelve_month_floating_total:.4f} in"
                        )
            except (EntityNotFoundError, BusinessRuleViolation) as e:
                logger.error(f"Detailed report not generated: {e}")
                status = 1

        if report in ("summary", "all"):
            try:
                summary = await summary_report.generate(
                    db, facility_id=facility_id, year=year, month=month, effective_company_id=company_id
                )
                logger.info(
                    f"  Summary: {summary.hydraulic_loading_rate:.3f} in/yr, "
                    f"efficiency {summary.application_efficiency:.1f}%, {summary.compliance_status.value}"
                )
            except (EntityNotFoundError, BusinessRuleViolation) as e:
                logger.error(f"Summary report not generated: {e}")
                status = 1

    return status


def main():
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description="Generate monthly land-application compliance reports"
    )
    parser.add_argument('--facility-id', type=UUID, required=True, help='Facility to report on')
    parser.add_argument('--company-id', type=UUID, required=True, help='Company the request acts for')
    parser.add_argument('--year', type=int, required=True, help='Report year')
    parser.add_argument('--month', type=int, required=True, choices=range(1, 13), metavar='1-12', help='Report month')
    parser.add_argument(
        '--report',
        choices=REPORT_CHOICES,
        default='all',
        help='Which report to generate (default: all)'
    )
    parser.add_argument(
        '--create-tables',
        action='store_true',
        help='Create missing database tables first'
    )

    args = parser.parse_args()

    sys.exit(asyncio.run(generate_reports(
        facility_id=args.facility_id,
        company_id=args.company_id,
        year=args.year,
        month=args.month,
        report=args.report,
        init_db=args.create_tables
    )))


if __name__ == "__main__":
    main()
