"""This module provides the secret random values drawn by participants.

All randomness is taken from the operating system via Python's secrets
module, as exponents and permutations drawn here must remain unpredictable
to the other participants.
"""

import secrets
from mpsanta.fingroups import SymmetricGroup

_sysrandom = secrets.SystemRandom()


def randrange(start, stop):
    """Uniformly random integer in range(start, stop)."""
    if start >= stop:
        raise ValueError('empty range for randrange()')

    return start + secrets.randbelow(stop - start)


def random_exponent(group):
    """Uniformly random nonzero exponent modulo the order of the given group.

    Raising an element to such an exponent is a bijection on a group of prime order.
    """
    return randrange(1, group.order)


def random_permutation(n):
    """Uniformly random element of the symmetric group of degree n."""
    p = list(range(n))
    _sysrandom.shuffle(p)
    return SymmetricGroup(n)(p, check=False)
