"""
Constants and shared copy for cycle-related services.
"""
from src.models.phase import CyclePhase

# Logged days at most this many days apart belong to the same period
GAP_THRESHOLD_DAYS = 2

DEFAULT_CYCLE_LENGTH = 28
DEFAULT_PERIOD_LENGTH = 5

# Ovulation is modelled this many days before the next expected period
LUTEAL_PHASE_DAYS = 14

# Days on either side of the ovulation day still classed as ovulation
OVULATION_WINDOW_DAYS = 3

# Fertile window: this many days before ovulation, plus the ovulation day
FERTILE_DAYS_BEFORE_OVULATION = 5

# How many future cycles the calendar projects
CALENDAR_HORIZON_CYCLES = 12

PHASE_ICONS = {
    CyclePhase.MENSTRUAL: "🌙",
    CyclePhase.FOLLICULAR: "🌱",
    CyclePhase.OVULATION: "☀️",
    CyclePhase.LUTEAL: "🍂",
}

PHASE_DESCRIPTIONS = {
    CyclePhase.MENSTRUAL: "Your winter phase. A time for cozy blankets, warm teas, and deep rest.",
    CyclePhase.FOLLICULAR: "Spring! Estrogen is waking up your creativity and social spark.",
    CyclePhase.OVULATION: "Summer peak! You're glowing and vibrant. Confidence is at its max.",
    CyclePhase.LUTEAL: "Autumn vibes. Energy is turning inward. Prioritize comfort.",
}
