"""Demo ElGamal Cryptosystem as used in MPSanta.

This demo shows the ElGamal cryptosystem underlying the gift exchange protocol.
Three types of groups can be used: RFC 7919 FFDHE groups, quadratic residue
groups modulo IKE safe primes, and Schnorr groups.

A key pair is generated, consisting of a private key x and a public key h=g^x,
where g is a generator of the group. Messages m are encrypted multiplicatively,
hence c = (g^y, m h^y) is the ciphertext for a random nonce y.

First, a batch of messages is encrypted and decrypted. Next, the multiplicative
homomorphism is shown: the component-wise product of the ciphertexts for the
messages in the batch is decrypted to obtain the product of all messages.
Finally, the trial decryption used by participants in a gift exchange is shown:
the ciphertext (g^s, h^s) for a secret exponent s decrypts to 1 under private
key x, also after re-randomization, whereas (g^s, h'^s) for another public
key h' does not.
"""

import argparse
import functools
from mpsanta import elgamal
from mpsanta.fingroups import FFDHE, QuadraticResidues, SchnorrGroup
from mpsanta.random import random_exponent


def crypt_cycle(keys, m):
    """Encrypt/decrypt cycle for message m."""
    pk, sk = keys
    c = elgamal.encrypt(m, pk)
    return c, elgamal.decrypt(c, sk)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('-g', '--group', type=int, metavar='G', choices=(1, 2, 3),
                        help=('1=FFDHE (default), 2=QR, 3=SG'))
    parser.add_argument('-l', '--bit-length', type=int, metavar='L',
                        help='bit length L of the modulus (default 2048)')
    parser.add_argument('-b', '--batch-size', type=int, metavar='B',
                        help='number of messages B in batch, B>=1')
    parser.add_argument('-o', '--offset', type=int, metavar='O',
                        help='offset O for batch of messages, O>=0')
    parser.set_defaults(group=1, bit_length=2048, batch_size=3, offset=0)
    args = parser.parse_args()

    if args.group == 1:
        group = FFDHE(args.bit_length)
    elif args.group == 2:
        group = QuadraticResidues(l=args.bit_length)
    elif args.group == 3:
        group = SchnorrGroup(l=args.bit_length)
    print(f'Using group: {group.__name__[:40]}...')
    p, _, g = group.parameters()

    keys = elgamal.generate_keypair(group)
    pk, sk = keys

    print('Encryption/decryption tests')
    print('---------------------------')
    messages = [m + 1 + args.offset for m in range(args.batch_size)]
    ciphertexts = []
    for m in messages:
        print(f'Plaintext sent: {m}')
        c, d = crypt_cycle(keys, m)
        print(f'Plaintext received: {d}')
        assert m == d, (m, d)
        ciphertexts.append(c)
    print()

    print('Homomorphic multiplication')
    print('--------------------------')
    c = functools.reduce(elgamal.multiply, ciphertexts)
    product = functools.reduce(lambda a, b: a * b % p, messages)
    d = elgamal.decrypt(c, sk)
    print(f'Product of plaintexts: {product}, decrypted product: {d}')
    assert product == d, (product, d)
    print()

    print('Trial decryption')
    print('----------------')
    other_pk = elgamal.generate_keypair(group).pk
    s = random_exponent(group)
    g_s = pow(g, s, p)
    own = elgamal.Ciphertext(g_s, pow(pk.h, s, p), group)
    other = elgamal.Ciphertext(g_s, pow(other_pk.h, s, p), group)
    print(f'Own entry decrypts to 1: {elgamal.decrypt(elgamal.rerandomize(own, pk), sk) == 1}')
    print(f'Other entry decrypts to 1: {elgamal.decrypt(elgamal.rerandomize(other, pk), sk) == 1}')


if __name__ == '__main__':
    main()
