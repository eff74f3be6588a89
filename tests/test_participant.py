import unittest
import itertools
import mpsanta
from mpsanta import fingroups as fg
from mpsanta.ledger import AssignmentLedger
from mpsanta.participant import Participant, NoAssignmentFound


class Lookup(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        mpsanta.set_logging(False)
        cls.group = fg.QuadraticResidues(l=64)

    @classmethod
    def tearDownClass(cls):
        mpsanta.set_logging(True)

    def test_keys(self):
        alice = Participant(self.group, 'Alice')
        self.assertIs(alice.group, self.group)
        self.assertIs(alice.public_key.group, self.group)
        self.assertEqual(alice.h, alice.public_key.h)
        self.assertEqual(repr(alice), "Participant('Alice')")
        self.assertTrue(repr(Participant(self.group)).startswith('Participant(QR64'))
        self.assertNotEqual(alice.public_key, Participant(self.group).public_key)

    def test_unshuffled(self):
        participants = [Participant(self.group) for _ in range(4)]
        ledger = AssignmentLedger.from_public_keys(p.public_key for p in participants)
        for i, p in enumerate(participants):
            self.assertEqual(p.find_assignment(ledger), i+1)

    def test_three_participants(self):
        for order in itertools.permutations(range(3)):
            a, b, c = participants = [Participant(self.group, name) for name in 'ABC']
            ledger = AssignmentLedger.from_public_keys([a.public_key, b.public_key, c.public_key])
            for i in order:
                ledger.shuffle_round(participants[i])
            self.assertTrue(ledger.is_ready)
            found = [p.find_assignment(ledger) for p in participants]
            self.assertEqual(sorted(found), [1, 2, 3])

    def test_bijection(self):
        for n in (1, 2, 5, 12):
            participants = [Participant(self.group) for _ in range(n)]
            ledger = AssignmentLedger.from_public_keys(p.public_key for p in participants)
            for p in participants:
                ledger.shuffle_round(p)
            found = [p.find_assignment(ledger) for p in participants]
            self.assertEqual(sorted(found), list(range(1, n+1)))

    def test_shuffle_errors(self):
        alice = Participant(self.group)
        other = Participant(fg.QuadraticResidues(l=32))
        ledger = AssignmentLedger.from_public_keys([other.public_key])
        self.assertRaises(ValueError, alice.shuffle, ledger)

    def test_no_assignment(self):
        participants = [Participant(self.group) for _ in range(3)]
        outsider = Participant(self.group, 'Eve')
        ledger = AssignmentLedger.from_public_keys(p.public_key for p in participants)
        for p in participants:
            ledger.shuffle_round(p)
        self.assertRaises(NoAssignmentFound, outsider.find_assignment, ledger)
        self.assertRaises(RuntimeError, outsider.find_assignment, ledger)

        outsider = Participant(fg.QuadraticResidues(l=32))
        self.assertRaises(ValueError, outsider.find_assignment, ledger)

    def test_shuffle_hides_positions(self):
        # Outcome of one shuffle by Bob is uniform for Alice, whatever the prior order.
        alice, bob, _ = participants = [Participant(self.group) for _ in range(3)]
        pks = [p.public_key for p in participants]
        N = 300
        for prior in (pks, [pks[2], pks[0], pks[1]]):
            counts = [0] * 3
            for _ in range(N):
                ledger = AssignmentLedger.from_public_keys(prior)
                bob.shuffle(ledger)
                counts[alice.find_assignment(ledger) - 1] += 1
            self.assertEqual(sum(counts), N)
            for k in counts:
                self.assertGreater(k, N // 3 - 40)
                self.assertLess(k, N // 3 + 40)


if __name__ == "__main__":
    unittest.main()
