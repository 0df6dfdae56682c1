### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Date Helpers -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Date Helpers

Timestamps are stored as naive UTC datetimes.
"""

from datetime import datetime, timezone


def naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
