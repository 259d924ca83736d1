"""Presence resolution: turn roster entries into stays and stays into day windows.

A *stay* is a head count present from one arrival instant to one departure
instant. Legacy groups and staff yield at most one stay. Scheduled groups are
resolved by a FIFO cohort state machine: each arrival slot opens a cohort,
departures drain the oldest open cohorts first, and every (cohort, departure)
pairing becomes its own stay. People never matched by a departure stay on site
indefinitely.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import date, time
from typing import Deque, Iterator, Optional

from campmeals.models.roster import (
    END_OF_DAY,
    START_OF_DAY,
    Group,
    LegacyPresence,
    PresenceSlot,
    ScheduledPresence,
    StaffMember,
)

from .rules import DayWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stay:
    """``count`` people on site from arrival to departure (``None`` = open-ended)."""

    arrival_date: date
    arrival_time: time
    departure_date: Optional[date]
    departure_time: time
    count: int

    def window_on(self, day: date) -> Optional[DayWindow]:
        if day < self.arrival_date:
            return None
        if self.departure_date is not None and day > self.departure_date:
            return None

        arriving = day == self.arrival_date
        departing = self.departure_date is not None and day == self.departure_date
        if arriving and departing:
            return DayWindow.visiting(self.arrival_time, self.departure_time)
        if arriving:
            return DayWindow.arriving(self.arrival_time)
        if departing:
            return DayWindow.departing(self.departure_time)
        return DayWindow.full_day()


def legacy_stays(presence: LegacyPresence, count: int) -> list[Stay]:
    if count <= 0 or presence.arrival_date is None or presence.departure_date is None:
        return []
    if presence.departure_date < presence.arrival_date:
        logger.debug(
            "Ignoring presence departing %s before arriving %s",
            presence.departure_date,
            presence.arrival_date,
        )
        return []
    return [
        Stay(
            arrival_date=presence.arrival_date,
            arrival_time=presence.arrival_time,
            departure_date=presence.departure_date,
            departure_time=presence.departure_time,
            count=count,
        )
    ]


@dataclass
class _Cohort:
    slot: PresenceSlot
    remaining: int

    @property
    def arrival_time(self) -> time:
        return self.slot.time or START_OF_DAY


def _slot_order(slot: PresenceSlot, default: time = START_OF_DAY) -> tuple[date, time]:
    assert slot.date is not None
    return slot.date, slot.time or default


def _departure_order(slot: PresenceSlot) -> tuple[date, time]:
    return _slot_order(slot, END_OF_DAY)


def _usable_slots(slots: list[PresenceSlot], key=_slot_order) -> list[PresenceSlot]:
    return sorted((slot for slot in slots if slot.date is not None and slot.pax > 0), key=key)


class CohortTracker:
    """Admits arrival cohorts and drains them FIFO as departures occur."""

    def __init__(self, arrivals: list[PresenceSlot], capacity: int):
        self._pending: Iterator[PresenceSlot] = iter(arrivals)
        self._next: Optional[PresenceSlot] = next(self._pending, None)
        self._open: Deque[_Cohort] = deque()
        self._capacity = capacity
        self._admitted = 0

    def admit_until(self, limit: Optional[tuple[date, time]] = None) -> None:
        """Open cohorts for every arrival at or before the ``(date, time)`` limit (all when ``None``)."""
        while self._next is not None and (limit is None or _slot_order(self._next) <= limit):
            slot = self._next
            self._next = next(self._pending, None)
            size = min(slot.pax, self._capacity - self._admitted)
            if size <= 0:
                logger.debug("Arrival slot %s exceeds group size; ignoring %s pax", slot.date, slot.pax)
                continue
            self._admitted += size
            self._open.append(_Cohort(slot=slot, remaining=size))

    def depart(self, slot: PresenceSlot) -> list[Stay]:
        assert slot.date is not None
        limit = _departure_order(slot)
        departure_time = limit[1]
        # Arrivals later than this departure are not on site yet.
        self.admit_until(limit)
        outstanding = slot.pax
        stays: list[Stay] = []
        while outstanding > 0 and self._open:
            cohort = self._open[0]
            taken = min(outstanding, cohort.remaining)
            stays.append(
                Stay(
                    arrival_date=cohort.slot.date,
                    arrival_time=cohort.arrival_time,
                    departure_date=slot.date,
                    departure_time=departure_time,
                    count=taken,
                )
            )
            cohort.remaining -= taken
            outstanding -= taken
            if cohort.remaining == 0:
                self._open.popleft()
        if outstanding:
            logger.debug(
                "Departure slot %s has %s pax with no open arrival cohort; ignoring",
                slot.date,
                outstanding,
            )
        return stays

    def remaining(self) -> list[Stay]:
        """Open-ended stays for everyone still on site after the last departure."""
        self.admit_until(None)
        return [
            Stay(
                arrival_date=cohort.slot.date,
                arrival_time=cohort.arrival_time,
                departure_date=None,
                departure_time=END_OF_DAY,
                count=cohort.remaining,
            )
            for cohort in self._open
        ]


def scheduled_stays(presence: ScheduledPresence, total: Optional[int]) -> list[Stay]:
    arrivals = _usable_slots(presence.arrivals)
    departures = _usable_slots(presence.departures, key=_departure_order)
    capacity = total if total is not None else sum(slot.pax for slot in arrivals)

    tracker = CohortTracker(arrivals, capacity)
    stays: list[Stay] = []
    for departure in departures:
        stays.extend(tracker.depart(departure))
    stays.extend(tracker.remaining())
    return stays


def group_stays(group: Group) -> list[Stay]:
    if isinstance(group.presence, ScheduledPresence):
        return scheduled_stays(group.presence, group.pax)
    return legacy_stays(group.presence, group.pax or 0)


def staff_stays(member: StaffMember) -> list[Stay]:
    return legacy_stays(member.presence, 1)
