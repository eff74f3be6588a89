"""MPSanta setup script.

Options:                python setup.py --help
Install by admin/root:  python setup.py install
Install by user:        python setup.py install --user
Install options:        python setup.py install --help
"""

from setuptools import setup
import mpsanta

with open('README.md', 'r') as f:
    LONG_DESCRIPTION = f.read()

setup(
    name='mpsanta',
    version=mpsanta.__version__,
    description='MPSanta -- Secret Gift Exchange via Mental Poker Shuffles in Python',
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    keywords=['crypto', 'cryptography', 'secret santa', 'ElGamal',
              'homomorphic encryption', 'mental poker', 'shuffle', 'derangement'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Education',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Security :: Cryptography',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
    license=mpsanta.__license__,
    packages=['mpsanta'],
    install_requires=['gmpy2'],
    platforms=['any'],
    python_requires='>=3.9'
)
