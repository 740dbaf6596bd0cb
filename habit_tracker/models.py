"""Data models for the habit tracker."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from habit_tracker.errors import ValidationError


def parse_date(value: date | str) -> date:
    """Coerce an ISO ``YYYY-MM-DD`` string (or a date) to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid date: {value!r}") from e


MIN_RATING = 0
MAX_RATING = 5


def validate_rating(value: int) -> None:
    """Reject anything but an integer rating in [MIN_RATING, MAX_RATING]."""
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}, got {value!r}")


@dataclass
class Habit:
    """A trackable daily boolean behavior."""

    id: str
    name: str
    color: str
    description: str = ""
    linked_result_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "description": self.description,
            "linkedResultIds": list(self.linked_result_ids),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Habit":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            color=data.get("color", ""),
            description=data.get("description", ""),
            linked_result_ids=list(dict.fromkeys(data.get("linkedResultIds", []))),
        )


@dataclass
class Result:
    """A trackable daily outcome, rated 0-5."""

    id: str
    name: str
    color: str
    description: str = ""
    linked_habit_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "description": self.description,
            "linkedHabitIds": list(self.linked_habit_ids),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Result":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            color=data.get("color", ""),
            description=data.get("description", ""),
            linked_habit_ids=list(dict.fromkeys(data.get("linkedHabitIds", []))),
        )


@dataclass
class HabitEntry:
    """One day's completion state for one habit."""

    habit_id: str
    date: date
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"habitId": self.habit_id, "date": self.date.isoformat(), "completed": self.completed}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HabitEntry":
        completed = data["completed"]
        if not isinstance(completed, bool):
            raise ValidationError(f"completed must be a boolean, got {completed!r}")
        return cls(habit_id=str(data["habitId"]), date=parse_date(data["date"]), completed=completed)


@dataclass
class ResultEntry:
    """One day's rating for one result."""

    result_id: str
    date: date
    value: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"resultId": self.result_id, "date": self.date.isoformat(), "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResultEntry":
        value = data["value"]
        validate_rating(value)
        return cls(result_id=str(data["resultId"]), date=parse_date(data["date"]), value=value)
