"""ElGamal cryptosystem over prime-order subgroups of GF(p)*.

A key pair consists of a private key x and a public key h=g^x, where g is the
generator of the group. A message m in range(p) is encrypted as the ciphertext
c = (g^y, m h^y) for a random nonce y, and decrypted as m = c2 / c1^x.

ElGamal is multiplicatively homomorphic: multiplying two ciphertexts component-wise
yields a ciphertext for the product of the two messages. Multiplying a ciphertext
with a fresh encryption of 1 therefore re-randomizes the ciphertext.

Groups are given as types from mpsanta.fingroups, of which only the group
parameters p, q and g are used.
"""

from mpsanta.gmpy import powmod, invert
from mpsanta.random import random_exponent


class PublicKey:
    """ElGamal public key h=g^x."""

    __slots__ = 'h', 'group'

    def __init__(self, h, group):
        h = int(h)
        group(h)  # raises ValueError unless h is a group element
        self.h = h
        self.group = group

    def __eq__(self, other):
        if not isinstance(other, PublicKey):
            return NotImplemented

        return self.group is other.group and self.h == other.h

    def __hash__(self):
        return hash((self.group.__name__, self.h))

    def __repr__(self):
        return f'PublicKey(h={self.h}, group={self.group.__name__})'


class PrivateKey:
    """ElGamal private key x."""

    __slots__ = 'x', 'group'

    def __init__(self, x, group):
        self.x = int(x)
        self.group = group

    def __repr__(self):
        return f'PrivateKey(group={self.group.__name__})'  # NB: x not shown


class KeyPair:
    """ElGamal key pair (pk, sk)."""

    __slots__ = 'pk', 'sk'

    def __init__(self, pk, sk):
        if pk.group is not sk.group:
            raise ValueError('group parameters mismatch')

        self.pk = pk
        self.sk = sk

    def __iter__(self):
        yield self.pk
        yield self.sk


class Ciphertext:
    """ElGamal ciphertext (c1, c2), with c1=g^y and c2=m h^y."""

    __slots__ = 'c1', 'c2', 'group'

    def __init__(self, c1, c2, group):
        self.c1 = int(c1)
        self.c2 = int(c2)
        self.group = group

    def __iter__(self):
        yield self.c1
        yield self.c2

    def __mul__(self, other):
        if not isinstance(other, Ciphertext):
            return NotImplemented

        return multiply(self, other)

    def __eq__(self, other):
        if not isinstance(other, Ciphertext):
            return NotImplemented

        return self.group is other.group and (self.c1, self.c2) == (other.c1, other.c2)

    def __hash__(self):
        return hash((self.group.__name__, self.c1, self.c2))

    def __repr__(self):
        return f'Ciphertext(c1={self.c1}, c2={self.c2})'


def _same_group(a, b):
    if a.group is not b.group:
        raise ValueError('group parameters mismatch')

    return a.group


def generate_keypair(group):
    """ElGamal key generation, with private key x uniformly random in range(1, q)."""
    p, _, g = group.parameters()
    x = random_exponent(group)
    h = powmod(g, x, p)
    return KeyPair(PublicKey(h, group), PrivateKey(x, group))


def encrypt(m, pk, y=None):
    """ElGamal encryption of m in range(p) under public key pk.

    Nonce y is drawn at random, unless given.
    """
    group = pk.group
    p, _, g = group.parameters()
    if not 0 <= m < p:
        raise ValueError(f'message in range({p}) required')

    if y is None:
        y = random_exponent(group)
    c1 = powmod(g, y, p)
    c2 = m * powmod(pk.h, y, p) % p
    return Ciphertext(c1, c2, group)


def decrypt(c, sk):
    """ElGamal decryption of ciphertext c under private key sk."""
    group = _same_group(c, sk)
    p = group.modulus
    c1, c2 = c
    if not (0 < c1 < p and 0 <= c2 < p):
        raise ValueError('ciphertext component out of range')

    return int(c2 * invert(powmod(c1, sk.x, p), p) % p)


def multiply(a, b):
    """Return ciphertext for the product of the messages of ciphertexts a and b."""
    group = _same_group(a, b)
    p = group.modulus
    return Ciphertext(a.c1 * b.c1 % p, a.c2 * b.c2 % p, group)


def rerandomize(c, pk, y=None):
    """Return fresh ciphertext for the message of c, by multiplying c with an encryption of 1."""
    return multiply(c, encrypt(1, pk, y))
