# --- episode structure ---
TOTAL_ROUNDS = 10
TOTAL_EPISODES = 10

# --- decision timing ---
TIME_REMAINING = 20  # seconds per round
DEFAULT_SLIDER_VALUE = 25.0

# --- failure points ---
FAILURE_POINT_NUM = 1

# --- elevation range (m) ---
MIN_ELEVATION = 0
MAX_ELEVATION = 10

# --- propagation tuning ---
PROPAGATION_THRESHOLD = 10
PROPAGATION_FLOOD_INCREASE = 100  # cap on a single propagation step
ELEVATION_DIFFERENCE_FACTOR = 0.5
FLOOD_DIFFERENCE_FACTOR = 0.2

# --- growth (log-normal) ---
FLOOD_LOG_NORMAL_MU = 7
FLOOD_LOG_NORMAL_SIGMA = 1

# --- outcome ---
TRAP_LEVEL = 50  # track level above which an admitted train is trapped
MIN_FLOOD_LEVEL = 0.0
MAX_FLOOD_LEVEL = 100.0

DEFAULT_SEED = 12
