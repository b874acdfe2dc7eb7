from .binning import Bin, WeightedBins
from .constants import DISTRIBUTIONS, LOGISTIC_SCALE, MAX_ITERATIONS, TABLE_SIZE
from .deviates import DeviateGenerator, GammaParams, LocationScale
from .errors import DeviateError, RejectionLimitExceeded
from .int_range import RandomIntInRange, generate_in_range
from .ran1_rng import Ran1Rng, Ran1State, normalize_seed, schrage_step
from .seeded_rng import SeededRng
from .shuffle import fisher_yates

__all__ = [
    "DeviateGenerator",
    "LocationScale",
    "GammaParams",
    "Ran1Rng",
    "Ran1State",
    "normalize_seed",
    "schrage_step",
    "SeededRng",
    "RandomIntInRange",
    "generate_in_range",
    "WeightedBins",
    "Bin",
    "fisher_yates",
    "DeviateError",
    "RejectionLimitExceeded",
    "DISTRIBUTIONS",
    "LOGISTIC_SCALE",
    "MAX_ITERATIONS",
    "TABLE_SIZE",
]
