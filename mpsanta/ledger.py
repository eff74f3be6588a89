"""The shared assignment ledger, shuffled by each participant in turn.

The ledger holds one entry per participant, initially the public keys h_i=g^x_i,
next to a blinding base, initially the generator g. Paired with the blinding base,
each entry forms an ElGamal ciphertext (base, entry) which decrypts to 1 under the
private key of the participant the entry originates from.

A shuffle round raises the base and all entries to a common secret exponent s,
and rearranges the entries by a secret random permutation. After rounds with
exponents s_1,...,s_k the base equals g^S and the entry originating from
participant j equals h_j^S, for S = s_1 ... s_k. Hence, (g^S, h_j^S) still
decrypts to 1 under x_j only, whereas nobody is able to link entries across
a round without knowing the exponent and permutation used.
"""

import logging
from mpsanta.gmpy import powmod
from mpsanta.elgamal import PublicKey, Ciphertext, rerandomize


class AssignmentLedger:
    """Entries and blinding base, progressively re-randomized and permuted."""

    __slots__ = 'entries', 'base', 'group', 'rounds'

    def __init__(self, entries, base, group, rounds=0):
        self.entries = list(entries)
        self.base = int(base)
        self.group = group
        self.rounds = rounds

    @classmethod
    def from_public_keys(cls, public_keys):
        """Initialize ledger from a nonempty sequence of public keys for one and the same group.

        Entries are set to the public keys in the given order, and the blinding base
        is set to the generator of the group.
        """
        public_keys = list(public_keys)
        if not public_keys:
            raise ValueError('at least one public key required')

        for pk in public_keys:
            if not isinstance(pk, PublicKey):
                raise TypeError('public keys required')

        group = public_keys[0].group
        if any(pk.group is not group for pk in public_keys):
            raise ValueError('group parameters of public keys differ')

        _, _, g = group.parameters()
        logging.debug(f'Initialize ledger with {len(public_keys)} entries')
        return cls([pk.h for pk in public_keys], g, group)

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, i):
        return self.entries[i]

    def __eq__(self, other):
        if not isinstance(other, AssignmentLedger):
            return NotImplemented

        return (self.group is other.group and self.base == other.base
                and self.entries == other.entries)

    __hash__ = None  # mutable

    def __repr__(self):
        return f'AssignmentLedger({len(self)} entries, {self.rounds} rounds)'

    def copy(self):
        return AssignmentLedger(self.entries, self.base, self.group, self.rounds)

    @property
    def is_ready(self):
        """True once the number of shuffle rounds equals the number of entries."""
        return self.rounds == len(self.entries)

    def rerandomize(self, s):
        """Raise the blinding base and all entries to the power s, in-place."""
        p = self.group.modulus
        self.base = int(powmod(self.base, s, p))
        self.entries = [int(powmod(a, s, p)) for a in self.entries]

    def permute(self, permutation):
        """Rearrange the entries by the given permutation, in-place."""
        self.entries = permutation.apply(self.entries)

    def shuffle_round(self, participant):
        """Let participant shuffle the ledger, completing one round."""
        participant.shuffle(self)
        self.rounds += 1
        logging.debug(f'Shuffle round {self.rounds} of {len(self)} completed')

    def candidate(self, i, pk, y=None):
        """Return fresh ciphertext (base g^y, entries[i] h^y) for slot i and public key pk=h."""
        return rerandomize(Ciphertext(self.base, self.entries[i], self.group), pk, y)
