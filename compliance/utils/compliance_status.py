"""
Compliance classification for monthly irrigation summaries.

Rules, checked in order:
1. Hydraulic loading rate above the limit: NonCompliant
2. Application efficiency below 70%: NonCompliant
3. Rate above 90% of the limit, or efficiency below 75%: UnderReview
4. Otherwise: Compliant

A rate exactly equal to the limit is not above it and falls through to
rule 3.
"""

from compliance.schemas.reports import ComplianceStatus

EFFICIENCY_FLOOR_PERCENT = 70.0
EFFICIENCY_REVIEW_PERCENT = 75.0
LIMIT_REVIEW_FRACTION = 0.9


def classify_compliance(
    hydraulic_loading_rate: float,
    hydraulic_loading_limit: float,
    application_efficiency: float,
) -> ComplianceStatus:
    """
    Classify a report from its loading rate, rate limit and efficiency.

    Args:
        hydraulic_loading_rate: Annualized loading rate (inches/year)
        hydraulic_loading_limit: Permitted annual rate (inches/year)
        application_efficiency: Percent of the target rate applied (0-100)

    Returns:
        ComplianceStatus

    Examples:
        >>> classify_compliance(10.0, 10.0, 80.0)
        <ComplianceStatus.UNDER_REVIEW: 'UnderReview'>
        >>> classify_compliance(10.01, 10.0, 80.0)
        <ComplianceStatus.NON_COMPLIANT: 'NonCompliant'>
    """
    if hydraulic_loading_rate > hydraulic_loading_limit:
        return ComplianceStatus.NON_COMPLIANT

    if application_efficiency < EFFICIENCY_FLOOR_PERCENT:
        return ComplianceStatus.NON_COMPLIANT

    if (hydraulic_loading_rate > hydraulic_loading_limit * LIMIT_REVIEW_FRACTION
            or application_efficiency < EFFICIENCY_REVIEW_PERCENT):
        return ComplianceStatus.UNDER_REVIEW

    return ComplianceStatus.COMPLIANT
