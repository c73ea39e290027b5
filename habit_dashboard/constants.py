HABIT_TYPES = ["boolean", "unit"]
HABIT_TYPE_LABELS = {
    "boolean": "Yes/No",
    "unit": "Numeric",
}
HABIT_TYPE_OPTIONS = {
    "boolean": "Yes/No (Did you do it?)",
    "unit": "Numeric (How many units?)",
}
HABIT_GROUP_TITLES = {
    "boolean": "Yes/No Habits",
    "unit": "Numeric Habits",
}

HABIT_COLORS = ["red", "orange", "yellow", "green", "blue", "indigo", "purple", "pink"]
DEFAULT_HABIT_COLOR = "blue"
COLOR_OPTIONS = [{"value": color, "label": color.title()} for color in HABIT_COLORS]
COLOR_SWATCHES = {
    "red": "#EF4444",
    "orange": "#F97316",
    "yellow": "#EAB308",
    "green": "#22C55E",
    "blue": "#3B82F6",
    "indigo": "#6366F1",
    "purple": "#A855F7",
    "pink": "#EC4899",
}

HISTORY_DAYS = 7

EMPTY_HABITS_MESSAGE = "You don't have any habits yet. Add your first habit to get started!"
LOAD_HABITS_ERROR = "Failed to load habits. Please try again."
DELETE_HABIT_ERROR = "Failed to delete habit. Please try again."
CREATE_HABIT_ERROR = "An error occurred while creating the habit"
NAME_REQUIRED_ERROR = "Habit name is required"
