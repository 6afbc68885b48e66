"""
Regulatory reporting engine for wastewater land-application facilities.

Turns irrigation, operator-log and water-quality records into monthly
NDAR-1 loading reports, irrigation summaries with a compliance status,
mass loading reports and daily monitoring reports.
"""

__version__ = "1.0.0"
