"""MPSanta is a Python package for secret gift exchanges (Secret Santa).

N participants are assigned giftees such that every participant learns only
the identity of its own giftee, while no participant nor any coordinator learns
the full assignment. The protocol is modeled on "mental poker" shuffles.

Each participant generates an ElGamal key pair in a common discrete log group.
A shared ledger is initialized with all public keys, after which each participant
in turn re-randomizes and permutes the ledger using a secret exponent and a secret
permutation. Finally, each participant locates its own public key in the ledger
by trial decryption, and the position found is the index of its giftee.

The protocol withstands passive (honest-but-curious) adversaries only, as
participants do not prove correctness of their shuffles.

The package consists of modules fingroups (finite groups, including the RFC 7919
FFDHE groups), elgamal (the ElGamal cryptosystem), ledger (the shared assignment
ledger), participant, and protocol (sequencing the phases of a gift exchange).
"""

__version__ = '0.1.0'
__license__ = 'MIT License'

import os
import sys
import argparse
import logging


def get_arg_parser():
    """Return parser for command line arguments passed to MPSanta."""
    parser = argparse.ArgumentParser(add_help=False)

    group = parser.add_argument_group('MPSanta help')
    group.add_argument('-V', '--VERSION', action='store_true',
                       help='print MPSanta version number and exit')
    group.add_argument('-H', '--HELP', action='store_true',
                       help='print this help message for MPSanta and exit')
    group.add_argument('-h', '--help', action='store_true',
                       help='print help message for this MPSanta program (if any)')

    group = parser.add_argument_group('MPSanta parameters')
    group.add_argument('-L', '--bit-length', type=int, metavar='l',
                       help='bit length l of the modulus of the FFDHE group, l>=2048')
    group.add_argument('--log-level', type=str, metavar='ll',
                       help='logging level ll=debug/info(default)/warning/error')
    group.add_argument('--no-log', action='store_true',
                       help='disable logging messages')

    group = parser.add_argument_group('MPSanta misc')
    group.add_argument('-f', type=str, default='',
                       help='consume IPython\'s -f argument F')

    parser.set_defaults(bit_length=2048, log_level='info')
    return parser


options = None

if os.getenv('READTHEDOCS') != 'True':
    options = get_arg_parser().parse_known_args()[0]
    if options.VERSION or options.HELP:
        options.no_log = True

    # Set logging level as early as possible.
    if options.no_log:
        logging.basicConfig(level=logging.WARNING)
    else:
        ch = options.log_level[0].upper()
        ch = {'N': '0', 'D': '1', 'I': '2', 'W': '3', 'E': '4', 'C': '5'}.get(ch, ch)
        ch = ch if '0' <= ch <= '5' else '0'  # default to '0'
        level = int(ch)
        level = (logging.NOTSET, logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR,
                 logging.CRITICAL)[level]
        if sys.flags.dev_mode:
            # Switch to debug mode, just like asyncio does in development mode.
            level = logging.DEBUG
        logging.basicConfig(format='{asctime} {message}', style='{', level=level, stream=sys.stdout)
        logging.debug(f'Set logging level to {level}: {logging.getLevelName(level)}')
        del ch, level
    logging.debug(f'On {sys.platform=}')


def set_logging(enable=False):
    """Toggle logging on/off, e.g., to silence log messages in tests."""
    logging.disable(logging.NOTSET if enable else logging.INFO)
