"""
Seeded pseudo-randomness for SigilForge.

Decorations that look random must come out the same for the same phrase,
so every "random" choice goes through this hash instead of a RNG.
"""

import math


def seeded_random(seed):
    """
    Map an integer seed to a reproducible value in [0, 1).

    frac(sin(seed * 9999) * 10000). The formula is kept exactly so figures
    match ones produced by earlier versions.
    """
    x = math.sin(seed * 9999) * 10000
    return x - math.floor(x)
