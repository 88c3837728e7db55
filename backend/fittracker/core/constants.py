"""Shared application constants.

Centralizes labels and defaults used across the stores, the stats
aggregator and the API so we can document and adjust them in one place.
"""

from enum import Enum


class WorkoutType(str, Enum):
    running = "running"
    cycling = "cycling"
    strength = "strength"
    swimming = "swimming"
    yoga = "yoga"
    cardio = "cardio"
    other = "other"


# Display labels used by the distribution breakdown
WORKOUT_TYPE_LABELS = {
    WorkoutType.running.value: "Running",
    WorkoutType.cycling.value: "Cycling",
    WorkoutType.strength.value: "Strength Training",
    WorkoutType.swimming.value: "Swimming",
    WorkoutType.yoga.value: "Yoga",
    WorkoutType.cardio.value: "Cardio",
    WorkoutType.other.value: "Other",
}

# Weekday numbers follow datetime.weekday(): Monday = 0, Sunday = 6
MONDAY = 0
SUNDAY = 6

# English abbreviations, independent of the process locale
DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# Profile defaults for new accounts
DEFAULT_WEEKLY_WORKOUT_GOAL = 4
DEFAULT_PRIMARY_GOAL = "general"

# Keys of the JSON key-value store (mirrors the browser localStorage layout)
USERS_KEY = "fittracker_users"
WORKOUTS_KEY = "fittracker_workouts"
NEXT_USER_ID_KEY = "fittracker_next_user_id"
NEXT_WORKOUT_ID_KEY = "fittracker_next_workout_id"
