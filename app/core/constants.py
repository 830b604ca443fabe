"""Application constants."""

# One-rep-max estimation (Brzycki): weight * 36 / (37 - reps)
BRZYCKI_NUMERATOR = 36
BRZYCKI_DENOMINATOR_BASE = 37
ONE_RM_REP_CAP = 12  # Estimates above 12 reps are unreliable

# Exercise name normalization: locale-specific letter folded to its base form
NAME_LETTER_VARIANTS = {"ё": "е"}

# Record value display units
UNIT_WEIGHT = "кг"
UNIT_DURATION = "сек"
UNIT_DISTANCE = "м"
