"""Physical constants and default settings for isotope envelope detection.

Constants are plain Python floats/ints so they can be captured as globals by
Numba JIT-compiled code.

Key Features
------------
- Carbon isotope spacing used to connect isotope peaks
- Default charge states hypothesized during feature detection
- Envelope matcher pruning threshold
"""

# =============================================================================
# Isotope Masses
# =============================================================================

# Mass difference between C12 and C13 used for candidate graph edges.
# NOTE: MaxQuant uses 1.00286864
CARBON_ISOTOPE_SPACING = 1.0033  # Da

# =============================================================================
# Feature Detection Defaults
# =============================================================================

# Charge states tried for every seed peak
DEFAULT_CHARGE_STATES = (1, 2, 3, 4, 5)

# Maximum deviation between a normalized observed height and the reference
# relative intensity before the envelope window is truncated
MAX_ENVELOPE_DEVIATION = 0.35

# A feature needs at least this many isotopes
MIN_ENVELOPE_PEAKS = 2
