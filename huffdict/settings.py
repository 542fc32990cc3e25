# huffdict/settings.py

import os

# --- Dictionary modes ---
MAX_LENGTH_WHOLE_WORDS = 0   # each corpus entry is one symbol
DEFAULT_MAX_LENGTH = 1       # single characters

# --- Stable sorter tuning (must not change, tie order depends on it) ---
INSERTION_SORT_LIMIT = 16    # partitions up to this length use insertion sort
INSERTION_SEED = 6           # first slots inserted with the step-1 scan
MEDIAN_OF_FIVE_SHIFT = 10    # length >> 10 != 0 -> median-of-5 pivot

# --- Code alphabet ---
BIT_LEFT = "0"
BIT_RIGHT = "1"

# --- Profiling toggle (see huffdict/profkit.py) ---
PROFILE_ENV = "HUFFDICT_PROFILE"
PROFILE_ENABLED = os.getenv(PROFILE_ENV, "0") == "1"
