"""Run a gift exchange between participants simulated in one process.

To let Alice, Bob, and Charlie exchange gifts using RFC 7919 group ffdhe3072, run:

    python -m mpsanta -L3072 Alice Bob Charlie

Each participant generates a key pair, shuffles the ledger once, and finds
its giftee. As all participants run inside one process, all assignments are
printed at the end.
"""

import sys
import argparse
import mpsanta
from mpsanta.fingroups import FFDHE
from mpsanta.participant import Participant
from mpsanta.protocol import SecretSanta


def main():
    parser = mpsanta.get_arg_parser()
    options, args = parser.parse_known_args()
    if options.HELP:
        parser.print_help()
        sys.exit()

    if options.VERSION:
        print(f'MPSanta {mpsanta.__version__}')
        sys.exit()

    if options.help:
        args += ['-h']

    parser = argparse.ArgumentParser(prog='python -m mpsanta')
    parser.add_argument('names', nargs='*', metavar='name',
                        help='distinct names of the participants')
    parser.add_argument('--no-derangement', action='store_true',
                        help='allow participants to draw themselves')
    args = parser.parse_args(args)
    names = args.names or ['Alice', 'Bob', 'Charlie']
    if len(set(names)) != len(names):
        parser.error('names must be distinct')

    if not args.no_derangement and len(names) < 2:
        parser.error('at least two participants required')

    try:
        group = FFDHE(options.bit_length)
    except ValueError as exc:
        parser.error(str(exc))
    print(f'Using group ffdhe{options.bit_length}')

    participants = [Participant(group, name) for name in names]
    santa = SecretSanta(participants, derangement=not args.no_derangement)
    santa.run()
    print(f'Gift exchange completed in {santa.attempts} attempt(s)')
    for giver, receiver in santa.pairs().items():
        print(f'{giver} gifts {receiver}')


if __name__ == '__main__':
    main()
