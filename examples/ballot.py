"""
Proof that an encrypted vote is 0 or 1, checked from decimal values as found in an election record:
PK{ r: (alpha = r * G & beta = r * K) | (alpha = r * G & beta - G = r * K) }
"""

import warnings

from zkor.exceptions import TranscriptBindingWarning
from zkor.modgroup import DEFAULT_GROUP
from zkor.primitives.elgamal import (
    ElGamalKeyPair,
    encrypt,
    prove_encrypts_one_of,
    verify_encrypts_one_of,
    ciphertext_from_decimals,
)

keys = ElGamalKeyPair.generate(DEFAULT_GROUP)

# The voter encrypts a 1.
ciphertext, nonce = encrypt(keys.public_key, 1)

# The record stores the ciphertext as decimal strings.
alpha_text = str(ciphertext.alpha.to_int())
beta_text = str(ciphertext.beta.to_int())

# A verifier parses them back, rejecting values that are not group elements.
parsed = ciphertext_from_decimals(alpha_text, beta_text, DEFAULT_GROUP)
assert parsed.is_ok

# Both branch instances derive from the ciphertext, so hashing the first one binds them all.
with warnings.catch_warnings():
    warnings.simplefilter("ignore", TranscriptBindingWarning)
    proof = prove_encrypts_one_of(keys.public_key, ciphertext, [0, 1], 1, nonce)
    assert verify_encrypts_one_of(keys.public_key, parsed.value, [0, 1], proof)
