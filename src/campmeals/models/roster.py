"""Roster data models: visiting groups, staff and their presence intervals."""

from __future__ import annotations

import datetime as dt
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .parsing import coerce_count, coerce_flag, parse_date, parse_time

START_OF_DAY = dt.time(0, 0)
END_OF_DAY = dt.time(23, 59)


class DietaryBreakdown(BaseModel):
    """Head counts per dietary requirement.

    Used both as roster input (per group) and as the running tally inside a
    meal bucket, hence mutable.
    """

    vegetarian: int = 0
    gluten_free: int = 0
    nut_allergy: int = 0
    other: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def coerce_counts(cls, value: Any) -> int:
        return coerce_count(value)

    def add(self, other: Optional["DietaryBreakdown"]) -> None:
        if other is None:
            return
        self.vegetarian += other.vegetarian
        self.gluten_free += other.gluten_free
        self.nut_allergy += other.nut_allergy
        self.other += other.other

    @property
    def total(self) -> int:
        return self.vegetarian + self.gluten_free + self.nut_allergy + self.other


class PresenceSlot(BaseModel):
    """One arrival or departure event of a scheduled group."""

    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    pax: int = 0

    model_config = ConfigDict(frozen=True)

    @field_validator("date", mode="before")
    @classmethod
    def lenient_date(cls, value: Any) -> Optional[dt.date]:
        return parse_date(value)

    @field_validator("time", mode="before")
    @classmethod
    def lenient_time(cls, value: Any) -> Optional[dt.time]:
        return parse_time(value)

    @field_validator("pax", mode="before")
    @classmethod
    def lenient_pax(cls, value: Any) -> int:
        return coerce_count(value)


class LegacyPresence(BaseModel):
    """A single arrival/departure pair."""

    kind: Literal["legacy"] = "legacy"
    arrival_date: Optional[dt.date] = None
    arrival_time: dt.time = START_OF_DAY
    departure_date: Optional[dt.date] = None
    departure_time: dt.time = END_OF_DAY

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @field_validator("arrival_date", "departure_date", mode="before")
    @classmethod
    def lenient_date(cls, value: Any) -> Optional[dt.date]:
        return parse_date(value)

    @field_validator("arrival_time", "departure_time", mode="before")
    @classmethod
    def lenient_time(cls, value: Any, info: ValidationInfo) -> dt.time:
        parsed = parse_time(value)
        if parsed is None:
            return cls.model_fields[info.field_name].default
        return parsed


class ScheduledPresence(BaseModel):
    """Ordered arrival and departure slots whose sizes partition the group."""

    kind: Literal["scheduled"] = "scheduled"
    arrivals: list[PresenceSlot] = Field(default_factory=list)
    departures: list[PresenceSlot] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("arrivals", "departures", mode="before")
    @classmethod
    def drop_unreadable_slots(cls, value: Any) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            return []
        return [slot for slot in value if isinstance(slot, (Mapping, PresenceSlot))]


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


class Group(BaseModel):
    """A visiting group with its dietary breakdown and presence."""

    name: Optional[str] = None
    pax: Optional[int] = None
    dietary: DietaryBreakdown = Field(default_factory=DietaryBreakdown)
    presence: Union[LegacyPresence, ScheduledPresence] = Field(discriminator="kind")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def resolve_presence(cls, data: Any) -> Any:
        """Fold the flat legacy/schedule fields into a tagged presence variant."""

        if not isinstance(data, Mapping) or "presence" in data:
            return data

        payload = dict(data)
        arrivals = _pick(payload, "arrivalSchedule", "arrival_schedule")
        departures = _pick(payload, "departureSchedule", "departure_schedule")
        if arrivals and departures:
            payload["presence"] = {
                "kind": "scheduled",
                "arrivals": arrivals,
                "departures": departures,
            }
        else:
            payload["presence"] = {
                "kind": "legacy",
                "arrival_date": _pick(payload, "arrivalDate", "arrival_date"),
                "arrival_time": _pick(payload, "arrivalTime", "arrival_time"),
                "departure_date": _pick(payload, "departureDate", "departure_date"),
                "departure_time": _pick(payload, "departureTime", "departure_time"),
            }
        return payload

    @field_validator("name", mode="before")
    @classmethod
    def stringify_name(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @field_validator("pax", mode="before")
    @classmethod
    def lenient_pax(cls, value: Any) -> Optional[int]:
        if value is None:
            return None
        return coerce_count(value)

    @field_validator("dietary", mode="before")
    @classmethod
    def lenient_dietary(cls, value: Any) -> Any:
        if isinstance(value, (Mapping, DietaryBreakdown)):
            return value
        return {}


class StaffMember(BaseModel):
    """A staff member; always a party of one with no dietary breakdown."""

    name: Optional[str] = None
    arrival_date: Optional[dt.date] = None
    arrival_time: dt.time = dt.time(8, 0)
    departure_date: Optional[dt.date] = None
    departure_time: dt.time = dt.time(17, 0)
    is_live_in: bool = True

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @field_validator("name", mode="before")
    @classmethod
    def stringify_name(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @field_validator("arrival_date", "departure_date", mode="before")
    @classmethod
    def lenient_date(cls, value: Any) -> Optional[dt.date]:
        return parse_date(value)

    @field_validator("arrival_time", "departure_time", mode="before")
    @classmethod
    def lenient_time(cls, value: Any, info: ValidationInfo) -> dt.time:
        parsed = parse_time(value)
        if parsed is None:
            return cls.model_fields[info.field_name].default
        return parsed

    @field_validator("is_live_in", mode="before")
    @classmethod
    def lenient_flag(cls, value: Any) -> bool:
        return coerce_flag(value, default=True)

    @property
    def presence(self) -> LegacyPresence:
        return LegacyPresence(
            arrival_date=self.arrival_date,
            arrival_time=self.arrival_time,
            departure_date=self.departure_date,
            departure_time=self.departure_time,
        )


class Roster(BaseModel):
    """Raw roster payload as read from a JSON file or request body.

    Entries are kept as plain mappings; the calculator validates them one by
    one so a single unreadable row never sinks the whole roster.
    """

    groups: list[Any] = Field(default_factory=list)
    staff: list[Any] = Field(default_factory=list)

    @field_validator("groups", "staff", mode="before")
    @classmethod
    def ensure_list(cls, value: Any) -> list[Any]:
        if isinstance(value, (list, tuple)):
            return list(value)
        return []
