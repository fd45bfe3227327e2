"""
Domain Constants

This module contains the calibration constants of the prediction model.
They are empirical choices, declared once and imported everywhere else.
"""

# Form window
FORM_WINDOW_SIZE = 10  # Most recent completed matches sampled per team

# Fallbacks for teams without completed matches
DEFAULT_AVG_XG = 1.5
DEFAULT_AVG_GOALS_SCORED = 1.5
DEFAULT_AVG_GOALS_CONCEDED = 1.5

# Form points
POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1
POINTS_FOR_LOSS = 0

# Expected goals model
LEAGUE_AVG_GOALS_CONCEDED = 1.5  # Baseline defense
AVERAGE_FORM_POINTS = 15.0  # A .500 record over a 10-match window
FORM_POINTS_SCALE = 30.0
HOME_ADVANTAGE = 0.35  # Additive goals for the home side
MIN_EXPECTED_GOALS = 0.5
MAX_EXPECTED_GOALS = 3.5

# Scoreline grid: goals per side enumerated from 0 to MAX_GOALS inclusive.
# Changing it changes every downstream probability.
MAX_GOALS = 5

# Confidence thresholds (strict lower bound of each bracket)
HIGH_CONFIDENCE_THRESHOLD = 0.60
MEDIUM_CONFIDENCE_THRESHOLD = 0.45

# Placeholder stored when the commentary collaborator fails
COMMENTARY_UNAVAILABLE_MESSAGE = "AI analysis unavailable at this time."

# Number of predictions returned by the "recent" history query
RECENT_PREDICTIONS_LIMIT = 10
