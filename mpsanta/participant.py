"""Participants in a gift exchange.

Each participant owns an ElGamal key pair. The public key is handed to the
ledger initializer, the private key is used only to find the participant's
own entry in the ledger once all participants have shuffled.
"""

import logging
from mpsanta.elgamal import generate_keypair, decrypt
from mpsanta.random import random_exponent, random_permutation


class NoAssignmentFound(RuntimeError):
    """No ledger entry decrypts to 1 under the private key of a participant.

    This happens only if the protocol was run incorrectly, for instance, if the
    participant's public key was not included in the ledger.
    """


class Participant:
    """Participant with a fresh ElGamal key pair for the given group."""

    def __init__(self, group, name=None):
        self.name = name
        self._key_pair = generate_keypair(group)

    def __repr__(self):
        if self.name is None:
            return f'Participant({self.group.__name__})'

        return f'Participant({self.name!r})'

    @property
    def group(self):
        return self._key_pair.pk.group

    @property
    def public_key(self):
        """Public key, safe to disclose to everyone."""
        return self._key_pair.pk

    @property
    def h(self):
        """Public key component h=g^x."""
        return self._key_pair.pk.h

    def shuffle(self, ledger):
        """Re-randomize and permute the ledger in-place.

        The secret exponent and the permutation are discarded afterwards.
        """
        if ledger.group is not self.group:
            raise ValueError('group parameters of ledger differ')

        ledger.rerandomize(random_exponent(self.group))
        ledger.permute(random_permutation(len(ledger)))

    def find_assignment(self, ledger):
        """Return 1-based index of the ledger entry originating from this participant.

        Each entry is tested by decrypting a freshly re-randomized candidate ciphertext
        for it, which yields 1 for the participant's own entry only.
        """
        sk = self._key_pair.sk
        for i in range(len(ledger)):
            c = ledger.candidate(i, self.public_key)
            if decrypt(c, sk) == 1:
                logging.debug(f'{self} found assignment')
                return i + 1

        raise NoAssignmentFound(f'no ledger entry found for {self}')
