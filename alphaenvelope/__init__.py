"""AlphaEnvelope - Numba-accelerated isotope envelope feature detection.

Groups fitted MS1 peaks into isotope envelope features, assigning the charge
state and the isotope series of every ion in one greedy pass over a shared
peak pool.
"""

__version__ = "0.1.0"

from alphaenvelope import constants
from alphaenvelope import features

__all__ = [
    "constants",
    "features",
]
