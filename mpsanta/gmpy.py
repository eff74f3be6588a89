"""This module collects all gmpy2 functions used by MPSanta.

Modular exponentiation and inversion dominate the cost of a gift exchange,
as every shuffle round raises all ledger entries to a fresh secret exponent.
Prime searches are used for setting up groups of a given bit length.
"""

import logging
from gmpy2 import version, is_prime, next_prime, powmod, invert, legendre

logging.debug(f'Load gmpy2 version {version()}')

__all__ = ['is_prime', 'next_prime', 'prev_prime', 'powmod', 'invert', 'legendre',
           'is_generator']


def prev_prime(x):
    """Return the greatest probable prime number < x, if any."""
    if x <= 2:
        raise ValueError('no smaller prime')

    if x == 3:
        return 2

    x -= 1 + x%2
    while not is_prime(x):
        x -= 2
    return int(x)


def is_generator(g, q, p):
    """Return True if g generates a subgroup of prime order q modulo p, else False."""
    return 1 < g < p and powmod(g, q, p) == 1
