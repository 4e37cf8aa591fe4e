from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ServiceLevel


@dataclass(frozen=True)
class BirthdayPerson:
    id: str
    name: str
    birthday: date
    age: int
    user_type: str
    position: Optional[str] = None
    service_level: Optional[ServiceLevel] = None

    def falls_on(self, day: date) -> bool:
        """Feb 29 birthdays are celebrated on Feb 28 in common years."""

        month, dom = self.birthday.month, self.birthday.day
        if (month, dom) == (2, 29) and not calendar.isleap(day.year):
            dom = 28
        return (day.month, day.day) == (month, dom)
