"""Frozen constants for the portable ran1 generator and its transforms."""

# Park-Miller minimal standard LCG, evaluated with Schrage's factorisation.
RAN1_A = 16807
RAN1_M = 2147483647
RAN1_Q = 127773
RAN1_R = 2836

# Bays-Durham shuffle table.
TABLE_SIZE = 32
WARMUP_STEPS = TABLE_SIZE + 8
NDIV = 1 + (RAN1_M - 1) // TABLE_SIZE

AM = 1.0 / RAN1_M
EPS = 1.2e-7
RNMX = 1.0 - EPS

DEFAULT_SEED = 1

# sqrt(3) / pi: converts a standard deviation into the logistic scale.
LOGISTIC_SCALE = 0.551328895421792050

GAMMA_DEFAULT_ALPHA = 1.0
GAMMA_DEFAULT_BETA = 0.5
GAMMA_MIN_BETA = 1.0e-4

MAX_ITERATIONS = 1_000_000

# Seeded linear generator (minimal standard, revised multiplier).
SEEDED_A = 48271

# Endpoint compensation for rounding into an integer interval.
RANGE_PAD = 0.499

BIN_SUM_TOLERANCE = 1.0e-5

DISTRIBUTIONS = ("uniform", "exponential", "normal", "gamma", "logistic")
