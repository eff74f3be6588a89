"""This module supports the finite groups used by the gift exchange protocol.

Two kinds of groups are supported:

    - discrete log groups for ElGamal, which are prime-order subgroups of GF(p)*:
      quadratic residues modulo a safe prime (including the RFC 7919 FFDHE groups),
      and Schnorr groups
    - symmetric groups of any degree n (n>=0), whose elements rearrange ledgers

Group types are created dynamically and cached, hence two groups with the same
parameters are the very same type. Participants compare group types by identity
to ensure they use the same group parameters.

A discrete log group type carries its parameters as modulus p, order q, and
generator g. The ElGamal computations themselves are done on integers modulo p,
whereas calling a group type on an integer checks that it is a group element.
"""

import math
import decimal
import functools
from mpsanta.gmpy import powmod, is_prime, prev_prime, legendre, is_generator


class SymmetricGroupElement:
    """Common base class for symmetric groups, used to rearrange ledger entries.

    An element of the symmetric group of degree n is a rearrangement of n slots,
    stored as a tuple holding each of 0,...,n-1 exactly once.
    """

    __slots__ = 'value'

    degree = None

    def __init__(self, value=None, check=True):
        if value is None:  # default to identity element
            value = tuple(range(self.degree))
        elif isinstance(value, list):
            value = tuple(value)
        if check:
            if len(value) != self.degree or set(value) != set(range(self.degree)):
                raise ValueError(f'valid length-{self.degree} permutation required')

        self.value = value

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented

        return self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return repr(self.value)

    def apply(self, x):
        """Return list x rearranged by this permutation, x[p(i)] moving to position i."""
        if len(x) != self.degree:
            raise ValueError(f'length-{self.degree} sequence required')

        return [x[j] for j in self.value]


@functools.cache
def SymmetricGroup(n):
    """Return the cached permutation type for rearranging n slots, n>=0."""
    name = f'Sym({n})'
    Sym = type(name, (SymmetricGroupElement,), {'__slots__': ()})
    Sym.degree = n
    Sym.order = math.factorial(n)
    Sym.identity = Sym()
    globals()[name] = Sym  # register under its unique name
    return Sym


class PrimeFieldSubgroupElement:
    """Common base class for prime-order subgroups of the multiplicative group of a prime field.

    Group elements are represented by integers in range(1, modulus).
    """

    __slots__ = 'value'

    modulus: int  # prime p, the group is a subgroup of GF(p)*
    order: int
    generator = None
    identity = None

    def __init__(self, value=1, check=True):
        if check:
            if not isinstance(value, int):
                raise TypeError('int required')

            if not 0 < value < self.modulus:
                raise ValueError(f'value in range(1, {self.modulus}) required')

            self._check(value)
        self.value = int(value)

    @classmethod
    def _check(cls, value):
        """Raise ValueError if value is not a subgroup element."""
        raise NotImplementedError

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented

        return self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __int__(self):
        return self.value

    def __repr__(self):
        return repr(self.value)

    @classmethod
    def parameters(cls):
        """Return the group parameters (p, q, g) as integers."""
        return cls.modulus, cls.order, cls.generator.value


class QuadraticResidue(PrimeFieldSubgroupElement):
    """Common base class for groups of quadratic residues modulo an odd prime."""

    __slots__ = ()

    @classmethod
    def _check(cls, value):
        if legendre(value, cls.modulus) != 1:
            raise ValueError('quadratic residue required')


def _decimal_constant(name, digits):
    """Return pi or e as a Decimal with the given number of significant digits."""
    # See https://docs.python.org/3/library/decimal.html for the recipes.
    with decimal.localcontext() as ctx:
        ctx.prec = digits + 2  # extra digits for intermediate steps
        if name == 'pi':
            three = decimal.Decimal(3)
            lasts, t, s, n, na, d, da = 0, three, 3, 1, 0, 0, 24
            while s != lasts:
                lasts = s
                n, na = n + na, na+8
                d, da = d + da, da+32
                t = (t * n) / d
                s += t
        else:
            i, lasts, s, fact = 0, 0, decimal.Decimal(1), 1
            while s != lasts:
                lasts = s
                i += 1
                fact *= i
                s += decimal.Decimal(1) / fact
        ctx.prec = digits
        return +s  # NB: unary plus applies the new precision


def _rfc_prime(l, constant, k):
    """Return prime 2^l - 2^(l-64) - 1 + 2^64 * (floor(2^(l-130) * constant) + k).

    This is the shape of both the IKE (RFC 2409, RFC 3526) and the FFDHE (RFC 7919)
    safe primes, which use constants pi and e, respectively.
    """
    fixedbits = 64
    digits = round(l / math.log2(10))
    c = _decimal_constant(constant, digits)
    with decimal.localcontext() as ctx:
        ctx.prec = digits + 2
        ec = math.floor(c * 2**(l - 2*fixedbits - 2)) + k
    return 2**l - 2**(l - fixedbits) - 1 + ec * 2**fixedbits


_IKE_options_l_k = {768: 149686, 1024: 129093, 1536: 741804, 2048: 124476,
                    3072: 1690314, 4096: 240904, 6144: 929484, 8192: 4743158}

_FFDHE_options_l_k = {2048: 560316, 3072: 2625351, 4096: 5736041,
                      6144: 15705020, 8192: 10965728}


def _find_safe_prime(l):
    """Return an l-bit prime p with (p-1)/2 prime as well, for l>=2 (p=3 for l=2).

    For the IKE bit lengths the well-known pi-based prime is returned, otherwise
    the largest such prime below 2^l. Either way p=3 (mod 4).
    """
    if l in _IKE_options_l_k:
        # Following https://kivinen.iki.fi/primes to compute IKE prime p:
        p = _rfc_prime(l, 'pi', _IKE_options_l_k[l])
    elif l == 2:
        p = 3
    else:
        q = prev_prime(1 << l-1)
        while not is_prime(2*q+1):
            q = prev_prime(q)
        p = int(2*q + 1)
    return p


def QuadraticResidues(p=None, l=None):
    """Return the group of squares modulo an odd prime p, or modulo a safe prime of l bits.

    The group has order (p-1)/2, which is prime when p is picked for bit length l>2.
    Without arguments, the trivial group modulo p=3 is returned.
    """
    if l is not None:
        if p is None:
            p = _find_safe_prime(l)
    elif p is None:
        p = 3
    if p%2 == 0:
        raise ValueError('odd prime modulus required')

    return _QuadraticResidues(int(p))


def FFDHE(l=2048):
    """Create type for the quadratic residues group of RFC 7919 group ffdhe<l>.

    The group is generated by g=2 and has prime order q=(p-1)/2.
    """
    if l not in _FFDHE_options_l_k:
        raise ValueError(f'FFDHE group of bit length {l} not available, '
                         f'choose from {sorted(_FFDHE_options_l_k)}')

    return QuadraticResidues(p=_ffdhe_prime(l))


@functools.cache
def _ffdhe_prime(l):
    return _rfc_prime(l, 'e', _FFDHE_options_l_k[l])


@functools.cache
def _QuadraticResidues(p):
    if not is_prime(p):
        raise ValueError('prime modulus required')

    g = 2
    while legendre(g, p) != 1:
        g += 1
    # every square other than 1 generates the group if p is a safe prime

    l = p.bit_length()
    name = f'QR{l}({p})'
    QR = type(name, (QuadraticResidue,), {'__slots__': ()})
    QR.modulus = p
    QR.order = p >> 1
    QR.identity = QR()
    QR.generator = QR(g % p)
    globals()[name] = QR  # register under its unique name
    return QR


class SchnorrGroupElement(PrimeFieldSubgroupElement):
    """Common base class for Schnorr groups, subgroups of prime order q in GF(p)*."""

    __slots__ = ()

    @classmethod
    def _check(cls, value):
        if powmod(value, cls.order, cls.modulus) != 1:
            raise ValueError('element of order dividing q required')


def SchnorrGroup(p=None, q=None, g=None, l=None, n=None):
    """Return the subgroup of odd prime order q in GF(p)*, generated by g.

    Missing parameters are searched for: q as the largest n-bit prime, p as the
    smallest l-bit prime with q | p-1, and g as the first element of order q.
    Bit lengths l and n default to the NIST pairs, such as (2048, 224).
    """
    n_l = ((160, 1024), (192, 1536), (224, 2048), (256, 3072), (384, 7680))
    if p is None:
        if q is None:
            if n is None:
                if l is None:
                    l = 2048
                n = next((n for n, _ in n_l if _ >= l), 512)
            q = prev_prime(1 << n)
        else:
            if n is None:
                n = q.bit_length()
            if not (q%2 and is_prime(q)):
                raise ValueError('odd prime order required')

        if l is None:
            l = next((l for _, l in n_l if _ >= n), 15360)

        # n-bit prime q
        w = (1 << l-2) // q + 1  # w*q >= 2^(l-2), so p = 2*w*q + 1 > 2^(l-1)
        p = 2*w*q + 1
        while not is_prime(p):
            p += 2*q
        # p < 2^l provided gap between n and l is sufficiently large
    else:
        if q is None:
            raise ValueError('order q required if modulus p is given')

        if (p - 1) % q or not (q%2 and is_prime(q)) or not is_prime(p):
            raise ValueError('prime p and odd prime q dividing p-1 required')

        if l is None:
            l = p.bit_length()
        if n is None:
            n = q.bit_length()
    if l != p.bit_length() or n != q.bit_length():
        raise ValueError('bit lengths l and n inconsistent with p and q')

    p = int(p)
    q = int(q)
    if g is None:
        w = (p-1) // q
        i = 2
        while (g := powmod(i, w, p)) == 1:
            i += 1
        g = int(g)
    return _SchnorrGroup(p, q, g)


@functools.cache
def _SchnorrGroup(p, q, g):
    if not is_generator(g, q, p):
        raise ValueError('generator of order q required')

    l = p.bit_length()
    n = q.bit_length()
    name = f'SG{l}:{n}({p}:{q})'
    SG = type(name, (SchnorrGroupElement,), {'__slots__': ()})
    SG.modulus = p
    SG.order = q
    SG.identity = SG()
    SG.generator = SG(g)
    globals()[name] = SG  # register under its unique name
    return SG
