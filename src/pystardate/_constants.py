"""Numeric constants for date conversion.

All instants are counted in seconds from the internal epoch,
0001=01=01T00:00:00 Julian (0000-12-30 Gregorian).
"""

FRACTION_BITS = 32
FRACTION_SCALE = 1 << FRACTION_BITS
"""One second in fraction units."""

MAX_SECONDS = (1 << 64) - 1
"""Largest representable whole-second count."""

SECONDS_PER_DAY = 86400
DAYS_PER_QUADCENT = 146097
"""Days in a 400-year Gregorian cycle."""

QUADCENT_SECONDS = DAYS_PER_QUADCENT * SECONDS_PER_DAY
"""12622780800 seconds: four Gregorian centuries."""

GREGORIAN_OFFSET_DAYS = 2
"""Gregorian day counts run two days ahead of the Julian internal epoch."""

# --- Quadcent calendar ---

QUADCENT_YEAR_SECONDS = QUADCENT_SECONDS // 400
"""31556952 seconds: the average Gregorian year."""

STANDARD_YEAR_SECONDS = 365 * SECONDS_PER_DAY
"""31536000 seconds: a nominal 365-day year."""

QUADCENT_EPOCH = 117609 * SECONDS_PER_DAY
"""0323*01*01, 10161417600 seconds after the internal epoch."""

QUADCENT_EPOCH_YEAR = 323

# --- Unix time ---

UNIX_EPOCH = 719164 * SECONDS_PER_DAY
"""1970-01-01, 62135769600 seconds after the internal epoch."""

# --- Stardates ---

STARDATE_EPOCH = 789294 * SECONDS_PER_DAY
"""[0]0000 is 2162-01-04, 68195001600 seconds after the internal epoch."""

TNG_EPOCH = 848094 * SECONDS_PER_DAY
"""[21]00000 is 2323-01-01, 73275321600 seconds after the internal epoch."""

ISSUE_SECONDS = 2000 * SECONDS_PER_DAY
"""One pre-TNG issue is 2000 days."""

TOS_UNIT_SECONDS = SECONDS_PER_DAY // 5
"""One early stardate unit is a fifth of a day."""

EARLY_FILM_UNIT_SECONDS = 10 * SECONDS_PER_DAY
LATE_FILM_UNIT_SECONDS = 2 * SECONDS_PER_DAY

FILM_ISSUE = 19
FILM_START = 7340
"""[19]7340: the rate drops to 10 days per unit."""

LATE_FILM_START = 7840
"""[19]7840: the rate changes again to 2 days per unit."""

LATE_FILM_START_SCALED = 32340
"""[19]7840 after rescaling by 50 to the early rate."""

EARLY_FILM_SECONDS = (LATE_FILM_START - FILM_START) * EARLY_FILM_UNIT_SECONDS
"""5000 days between [19]7340 and [19]7840."""

FIRST_TNG_ISSUE = 21
LAST_FILM_ISSUE = 20
LAST_FILM_INTEGER = 5005
"""[20]5005 is the last stardate before the TNG epoch."""

MAX_TOS_INTEGER = 9999
MAX_INTEGER = 99999

TNG_ISSUE_SECONDS = (SECONDS_PER_DAY // 4) * DAYS_PER_QUADCENT
"""3155695200 seconds: a quarter of a 400-year cycle."""

TNG_UNIT_NUMERATOR = 27 * DAYS_PER_QUADCENT
TNG_UNIT_DENOMINATOR = 125
"""One TNG unit is 27*146097/125 seconds."""

FRACTION_DIGITS = 6
FRACTION_DENOMINATOR = 10**FRACTION_DIGITS

# --- Output configuration ---

DEFAULT_PRECISION = 2
"""Default number of stardate fraction digits."""

MAX_PRECISION = FRACTION_DIGITS

DEFAULT_FORMATS = ("s",)
"""Output selection used when the caller selects nothing."""
