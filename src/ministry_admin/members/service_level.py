from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import whole_years_between
from ..core.constants import JUNIOR_MIN_YEARS, SENIOR_MIN_YEARS
from ..core.enums import ServiceLevel


def years_of_service(date_joined: Optional[date], today: date) -> int:
    if date_joined is None:
        return 0
    return whole_years_between(date_joined, today)


def derive_service_level(date_joined: Optional[date], today: date) -> ServiceLevel:
    """Bucket whole years since investiture into a tier.

    0-2 years -> NEOPHYTE, 3-4 -> JUNIOR, 5+ -> SENIOR. A member without a join
    date is a NEOPHYTE.
    """

    years = years_of_service(date_joined, today)
    if years >= SENIOR_MIN_YEARS:
        return ServiceLevel.SENIOR
    if years >= JUNIOR_MIN_YEARS:
        return ServiceLevel.JUNIOR
    return ServiceLevel.NEOPHYTE
