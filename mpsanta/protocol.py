"""Coordinator for a gift exchange between participants.

The coordinator sequences the phases of the protocol:

    1. setup: collect the public keys and initialize the ledger,
    2. shuffle phase: let each participant shuffle the ledger exactly once,
    3. lookup phase: let each participant find its own entry in the ledger.

The 1-based index of the entry found by a participant is the index of its giftee,
counting participants in the order their public keys were collected. Since the
composition of all shuffles is a uniformly random permutation, some participants
may draw themselves. If a derangement is required (default), the lookup is
discarded if anyone drew itself, and the protocol is restarted with a fresh ledger.
This rejection sampling takes e=2.718... attempts on average.
"""

import logging
from mpsanta.fingroups import FFDHE
from mpsanta.ledger import AssignmentLedger
from mpsanta.participant import Participant


class SecretSanta:
    """Gift exchange between the given participants."""

    def __init__(self, participants, derangement=True, max_attempts=100):
        participants = list(participants)
        n = len(participants)
        if not n:
            raise ValueError('at least one participant required')

        if len({p.public_key for p in participants}) != n:
            raise ValueError('public keys of participants must be distinct')

        if derangement and n < 2:
            raise ValueError('derangement requires at least two participants')

        names = [str(i+1) if p.name is None else p.name for i, p in enumerate(participants)]
        if len(set(names)) != n:
            raise ValueError('names of participants must be distinct')

        self.participants = participants
        self.names = names
        self.derangement = derangement
        self.max_attempts = max_attempts
        self.ledger = None
        self.assignments = None
        self.attempts = 0

    def setup(self):
        """Initialize a fresh ledger from the participants' public keys."""
        self.ledger = AssignmentLedger.from_public_keys(p.public_key for p in self.participants)
        self.assignments = None
        logging.info(f'{len(self.participants)} participants enter the gift exchange')

    def shuffle_phase(self, order=None):
        """Let all participants shuffle the ledger once, in the given order (default in turn)."""
        if self.ledger is None or self.ledger.rounds:
            raise RuntimeError('shuffle phase requires a freshly initialized ledger')

        n = len(self.participants)
        if order is None:
            order = range(n)
        else:
            order = list(order)
            if sorted(order) != list(range(n)):
                raise ValueError('order must be a permutation of the participant indices')

        for i in order:
            logging.info(f'Participant {i+1} shuffles')
            self.ledger.shuffle_round(self.participants[i])

    def lookup_phase(self):
        """Let all participants find their assignments, returned as list of 1-based indices."""
        if self.ledger is None or not self.ledger.is_ready:
            raise RuntimeError('lookup requires all participants to have shuffled once')

        self.assignments = [p.find_assignment(self.ledger) for p in self.participants]
        logging.info('All participants found their giftees')
        return self.assignments

    def has_fixed_point(self):
        """Return True if some participant drew itself in the lookup phase."""
        if self.assignments is None:
            raise RuntimeError('no assignments available yet')

        return any(a == i+1 for i, a in enumerate(self.assignments))

    def run(self, order=None):
        """Run the complete protocol and return the list of assignments."""
        if order is not None:
            order = list(order)
        for attempt in range(1, self.max_attempts + 1):
            self.attempts = attempt
            self.setup()
            self.shuffle_phase(order)
            assignments = self.lookup_phase()
            if self.derangement and self.has_fixed_point():
                logging.info(f'Attempt {attempt}: a participant drew itself, restart')
                self.assignments = None
                continue

            return assignments

        raise RuntimeError(f'no derangement found in {self.max_attempts} attempts')

    def pairs(self):
        """Return dict mapping names of participants to names of their giftees.

        Unnamed participants are named by their 1-based index.
        """
        if self.assignments is None:
            raise RuntimeError('no assignments available yet')

        names = self.names
        return {names[i]: names[a-1] for i, a in enumerate(self.assignments)}


def exchange(names, group=None, derangement=True):
    """Run gift exchange between participants with the given names.

    Return dict mapping each name to the name of its giftee.
    The default group is RFC 7919 group ffdhe2048.
    """
    if group is None:
        group = FFDHE(2048)
    santa = SecretSanta([Participant(group, name) for name in names], derangement=derangement)
    santa.run()
    return santa.pairs()
