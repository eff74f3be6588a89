import unittest
from unittest import mock
import mpsanta
from mpsanta import fingroups as fg
from mpsanta.participant import Participant
from mpsanta.protocol import SecretSanta, exchange


class Protocol(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        mpsanta.set_logging(False)
        cls.group = fg.QuadraticResidues(l=64)

    @classmethod
    def tearDownClass(cls):
        mpsanta.set_logging(True)

    def participants(self, names):
        return [Participant(self.group, name) for name in names]

    def test_run(self):
        santa = SecretSanta(self.participants('ABC'), derangement=False)
        assignments = santa.run()
        self.assertEqual(santa.attempts, 1)
        self.assertEqual(sorted(assignments), [1, 2, 3])
        self.assertEqual(assignments, santa.assignments)
        pairs = santa.pairs()
        self.assertEqual(set(pairs), {'A', 'B', 'C'})
        self.assertEqual(set(pairs.values()), {'A', 'B', 'C'})

    def test_derangement(self):
        for n in (2, 3, 5):
            for _ in range(5):
                santa = SecretSanta(self.participants(range(n)))
                assignments = santa.run()
                self.assertEqual(sorted(assignments), list(range(1, n+1)))
                self.assertTrue(all(a != i+1 for i, a in enumerate(assignments)))
                self.assertTrue(1 <= santa.attempts <= santa.max_attempts)
        santa = SecretSanta(self.participants('AB'))
        santa.run()
        self.assertEqual(santa.assignments, [2, 1])
        self.assertEqual(santa.pairs(), {'A': 'B', 'B': 'A'})

    def test_single(self):
        santa = SecretSanta(self.participants('A'), derangement=False)
        self.assertEqual(santa.run(), [1])
        self.assertEqual(santa.pairs(), {'A': 'A'})
        self.assertRaises(ValueError, SecretSanta, self.participants('A'))

    def test_phases(self):
        santa = SecretSanta(self.participants([None, None, None]))
        self.assertRaises(RuntimeError, santa.shuffle_phase)
        self.assertRaises(RuntimeError, santa.lookup_phase)
        self.assertRaises(RuntimeError, santa.pairs)
        santa.setup()
        self.assertRaises(RuntimeError, santa.lookup_phase)
        self.assertRaises(RuntimeError, santa.has_fixed_point)
        self.assertRaises(ValueError, santa.shuffle_phase, [0, 0, 1])
        santa.shuffle_phase([2, 0, 1])
        self.assertTrue(santa.ledger.is_ready)
        self.assertRaises(RuntimeError, santa.shuffle_phase)
        self.assertEqual(sorted(santa.lookup_phase()), [1, 2, 3])
        self.assertEqual(set(santa.pairs()), {'1', '2', '3'})

    def test_order_iterator(self):
        santa = SecretSanta(self.participants('ABC'), derangement=False)
        santa.setup()
        santa.shuffle_phase(iter([2, 0, 1]))
        self.assertEqual(santa.ledger.rounds, 3)
        self.assertTrue(santa.ledger.is_ready)
        santa = SecretSanta(self.participants('ABC'))
        assignments = santa.run(i for i in (1, 2, 0))
        self.assertEqual(santa.ledger.rounds, 3)
        self.assertEqual(sorted(assignments), [1, 2, 3])
        self.assertRaises(ValueError, santa.run, iter([0, 1]))

    def test_single_lookup(self):
        for derangement in (False, True):
            santa = SecretSanta(self.participants('ABCD'), derangement=derangement)
            with mock.patch.object(Participant, 'find_assignment', autospec=True,
                                   side_effect=Participant.find_assignment) as find:
                santa.run()
            self.assertEqual(find.call_count, 4 * santa.attempts)
            self.assertFalse(derangement and santa.has_fixed_point())

    def test_errors(self):
        self.assertRaises(ValueError, SecretSanta, [])
        alice = Participant(self.group)
        self.assertRaises(ValueError, SecretSanta, [alice, alice])
        self.assertRaises(ValueError, SecretSanta, self.participants('AAB'))
        self.assertRaises(ValueError, SecretSanta, self.participants([None, '1']))
        self.assertRaises(ValueError, SecretSanta, self.participants(['2', None]))
        self.assertRaises(ValueError, exchange, ['A', 'A', 'B'], group=self.group)
        santa = SecretSanta(self.participants([None, 'Bob']), derangement=False)
        santa.run()
        self.assertEqual(set(santa.pairs()), {'1', 'Bob'})
        bob = Participant(fg.QuadraticResidues(l=32))
        santa = SecretSanta([alice, bob])
        self.assertRaises(ValueError, santa.setup)
        self.assertIsNone(santa.ledger)

    def test_max_attempts(self):
        santa = SecretSanta(self.participants('AB'), max_attempts=0)
        self.assertRaises(RuntimeError, santa.run)

    def test_exchange(self):
        names = ['Alice', 'Bob', 'Charlie', 'Dave']
        pairs = exchange(names, group=self.group)
        self.assertEqual(set(pairs), set(names))
        self.assertEqual(set(pairs.values()), set(names))
        self.assertTrue(all(giver != receiver for giver, receiver in pairs.items()))
        pairs = exchange(['Alice'], group=self.group, derangement=False)
        self.assertEqual(pairs, {'Alice': 'Alice'})


if __name__ == "__main__":
    unittest.main()
