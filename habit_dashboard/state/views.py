import logging
from datetime import date

from habit_dashboard.constants import (
    CREATE_HABIT_ERROR,
    DEFAULT_HABIT_COLOR,
    DELETE_HABIT_ERROR,
    HABIT_COLORS,
    HABIT_TYPES,
    LOAD_HABITS_ERROR,
    NAME_REQUIRED_ERROR,
)
from habit_dashboard.dates import last_n_days

logger = logging.getLogger(__name__)


def error_message(exc, fallback):
    detail = getattr(exc, "detail", None)
    if isinstance(detail, str) and detail:
        return detail
    return str(exc) or fallback


def parse_target_value(raw_value):
    if raw_value is None:
        return None
    text = str(raw_value).strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        raise ValueError("Target value must be a number") from None
    if value < 0:
        raise ValueError("Target value cannot be negative")
    return value


class HabitFormState:
    def __init__(self):
        self.error = None
        self.loading = False
        self.reset()

    def reset(self):
        self.name = ""
        self.type = "boolean"
        self.target_value = ""
        self.color = DEFAULT_HABIT_COLOR

    def build_payload(self):
        if not str(self.name or "").strip():
            raise ValueError(NAME_REQUIRED_ERROR)
        if self.type not in HABIT_TYPES:
            raise ValueError(f"Unknown habit type: {self.type}")
        if self.color not in HABIT_COLORS:
            raise ValueError(f"Unknown habit color: {self.color}")
        target_value = None
        if self.type == "unit":
            target_value = parse_target_value(self.target_value)
        return {
            "name": self.name.strip(),
            "type": self.type,
            "target_value": target_value,
            "color": self.color,
        }

    def submit(self, on_submit):
        """Validate and hand the payload to ``on_submit``; returns True on success."""
        self.error = None
        try:
            payload = self.build_payload()
        except ValueError as exc:
            self.error = str(exc)
            return False

        self.loading = True
        try:
            on_submit(payload)
        except Exception as exc:
            self.error = error_message(exc, CREATE_HABIT_ERROR)
            return False
        finally:
            self.loading = False
        self.reset()
        return True


class DashboardState:
    def __init__(self, data):
        self.data = data
        self.habits = []
        self.loading = False
        self.loaded = False
        self.error = None

    def fetch(self):
        self.loading = True
        try:
            self.habits = list(self.data.list_habits())
            self.error = None
        except Exception as exc:
            logger.error("Error fetching habits: %s", exc)
            self.error = LOAD_HABITS_ERROR
        finally:
            self.loading = False
            self.loaded = True

    def hydrate(self, habits):
        self.habits = list(habits or [])
        self.loaded = True

    def add_habit(self, habit_data):
        try:
            habit = self.data.create_habit(habit_data)
        except Exception as exc:
            logger.error("Error adding habit: %s", exc)
            raise
        self.habits = [habit] + [item for item in self.habits if item.get("id") != habit.get("id")]
        return habit

    def delete_habit(self, habit, confirmed):
        if not confirmed:
            return False
        try:
            self.data.delete_habit(habit["id"])
        except Exception as exc:
            logger.error("Error deleting habit: %s", exc)
            self.error = DELETE_HABIT_ERROR
            return False
        self.habits = [item for item in self.habits if item.get("id") != habit["id"]]
        return True

    def dismiss_error(self):
        self.error = None

    def grouped_habits(self):
        groups = {habit_type: [] for habit_type in HABIT_TYPES}
        for habit in self.habits:
            groups.setdefault(habit.get("type"), []).append(habit)
        return {habit_type: items for habit_type, items in groups.items() if items}


def completion_percentage(value, target_value):
    if value is None or not target_value:
        return None
    return round(float(value) / float(target_value) * 100, 2)


class EntryLogState:
    def __init__(self, data, habit, day=None):
        self.data = data
        self.habit = habit
        self.day = day or date.today()
        self.entry = None
        self.history = []
        self.error = None
        self.loading = False
        self.loaded = False

    @property
    def is_unit(self):
        return self.habit.get("type") == "unit"

    def load(self, days):
        self.loading = True
        try:
            window = last_n_days(days, today=self.day)
            self.history = list(
                self.data.list_habit_entries(self.habit["id"], window[0], window[-1])
            )
            self.entry = self.data.get_habit_entry(self.habit["id"], self.day)
        except Exception as exc:
            logger.error("Error fetching entries for habit %s: %s", self.habit.get("id"), exc)
            self.error = error_message(exc, "Failed to load entries. Please try again.")
        finally:
            self.loading = False
            self.loaded = True

    def entry_fields(self, status=None, value=None):
        if self.is_unit:
            numeric = None if value is None else float(value)
            return {
                "value": numeric,
                "percentage": completion_percentage(numeric, self.habit.get("target_value")),
            }
        return {"status": bool(status)}

    def save(self, status=None, value=None):
        self.error = None
        fields = self.entry_fields(status=status, value=value)
        try:
            if self.entry:
                saved = self.data.update_habit_entry(self.entry["id"], fields)
            else:
                saved = self.data.create_habit_entry(
                    {"habit_id": self.habit["id"], "date": self.day, **fields}
                )
        except Exception as exc:
            logger.error("Error saving entry for habit %s: %s", self.habit.get("id"), exc)
            self.error = error_message(exc, "Failed to save entry. Please try again.")
            return None
        self.entry = saved
        day_iso = self.day.isoformat()
        self.history = [saved] + [item for item in self.history if item.get("date") != day_iso]
        return saved

    def clear(self):
        if not self.entry:
            return False
        try:
            self.data.delete_habit_entry(self.entry["id"])
        except Exception as exc:
            logger.error("Error deleting entry %s: %s", self.entry.get("id"), exc)
            self.error = error_message(exc, "Failed to delete entry. Please try again.")
            return False
        entry_id = self.entry["id"]
        self.entry = None
        self.history = [item for item in self.history if item.get("id") != entry_id]
        return True
