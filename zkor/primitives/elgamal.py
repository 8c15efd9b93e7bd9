r"""
Exponential ElGamal encryption with proofs that a ciphertext encrypts one of a list of values.

A ciphertext of :math:`m` under public key :math:`K = s G` with nonce :math:`r` is
:math:`(\alpha, \beta) = (r G, r K + m G)`. It encrypts :math:`v` if and only if
:math:`\alpha = r G` and :math:`\beta - v G = r K` for the same :math:`r`, which is a
Chaum-Pedersen statement. The proof for a list of values is the or-composition of one such
statement per value:

.. math::
    PK\{ r: \lor_{v} (\alpha = r G \land \beta - v G = r K) \}

All branches share the bases :math:`(G, K)`, and their instances are determined by the
ciphertext, so the first-instance transcript encoding of :py:class:`zkor.SigmaProofOr` binds the
whole statement.

>>> from zkor.modgroup import ModPGroup
>>> group = ModPGroup(2039, 4)
>>> keys = ElGamalKeyPair.generate(group)
>>> ciphertext, nonce = encrypt(keys.public_key, 1)
>>> proof = prove_encrypts_one_of(keys.public_key, ciphertext, [0, 1], 1, nonce)
>>> verify_encrypts_one_of(keys.public_key, ciphertext, [0, 1], proof)
True
"""

import attr

from zkor.composition import SigmaProofOr
from zkor.encoding import strip_whitespace, decimal_to_group_element
from zkor.primitives.schnorr import SchnorrProof
from zkor.result import Ok


@attr.s(frozen=True)
class ElGamalCiphertext:
    alpha = attr.ib()
    beta = attr.ib()


@attr.s(frozen=True)
class ElGamalKeyPair:
    secret_key = attr.ib(repr=False)
    public_key = attr.ib()

    @classmethod
    def generate(cls, group):
        secret_key = group.order().random()
        return cls(secret_key=secret_key, public_key=secret_key * group.generator())


def encrypt(public_key, plaintext, nonce=None):
    """
    Encrypt a small integer.

    Args:
        public_key: Group element :math:`K`.
        plaintext: Integer :math:`m`.
        nonce: Optional encryption randomness :math:`r`. Drawn at random if None.

    Returns:
        A pair of the ciphertext and the nonce.
    """
    group = public_key.group
    if nonce is None:
        nonce = group.order().random()
    g = group.generator()
    ciphertext = ElGamalCiphertext(
        alpha=nonce * g, beta=nonce * public_key + plaintext * g
    )
    return ciphertext, nonce


def decrypt(keys, ciphertext, max_value):
    """
    Decrypt a ciphertext of a value in :math:`[0, max\\_value]`.

    Raises:
        ValueError: If the plaintext is not in the range.
    """
    group = keys.public_key.group
    target = ciphertext.beta - keys.secret_key * ciphertext.alpha
    g = group.generator()
    candidate = group.infinite()
    for value in range(max_value + 1):
        if candidate == target:
            return value
        candidate = candidate + g
    raise ValueError("Plaintext is not in [0, {}]".format(max_value))


def encryption_or_proof(public_key, num_values):
    """
    Or-proof statement with one Chaum-Pedersen branch per candidate value.
    """
    group = public_key.group
    space = group.challenge_space()
    bases = (group.generator(), public_key)
    return SigmaProofOr(space, [SchnorrProof(bases, space) for _ in range(num_values)])


def ciphertext_instances(public_key, ciphertext, values):
    """
    Instances :math:`(\\alpha, \\beta - v G)` of the branches, in the order of ``values``.
    """
    g = public_key.group.generator()
    return [(ciphertext.alpha, ciphertext.beta + (-v) * g) for v in values]


def prove_encrypts_one_of(public_key, ciphertext, values, plaintext, nonce, message=""):
    """
    Prove that ``ciphertext`` encrypts one of ``values``.

    Args:
        public_key: Encryption public key.
        ciphertext: The ciphertext.
        values: Candidate plaintexts, e.g. ``[0, 1]``.
        plaintext: The actual plaintext, one of ``values``.
        nonce: The encryption randomness.
        message (str): Optional message bound to the proof.

    Raises:
        ValueError: If ``plaintext`` is not among ``values``.
    """
    values = list(values)
    index = values.index(plaintext)
    stmt = encryption_or_proof(public_key, len(values))
    instances = ciphertext_instances(public_key, ciphertext, values)
    return stmt.prove(instances, nonce, index, message=message)


def verify_encrypts_one_of(public_key, ciphertext, values, proof, message=""):
    values = list(values)
    stmt = encryption_or_proof(public_key, len(values))
    instances = ciphertext_instances(public_key, ciphertext, values)
    return stmt.verify(instances, proof, message=message)


def ciphertext_from_decimals(alpha, beta, group):
    """
    Parse a ciphertext whose components are given as decimal strings.

    Whitespace in the strings is ignored.

    Returns:
        :py:class:`zkor.result.Ok` with an :py:class:`ElGamalCiphertext`, or the
        :py:class:`zkor.result.Err` of the first component that failed to decode.
    """
    components = []
    for text in (alpha, beta):
        if isinstance(text, str):
            text = strip_whitespace(text)
        element = decimal_to_group_element(text, group)
        if element.is_err:
            return element
        components.append(element.value)
    return Ok(ElGamalCiphertext(alpha=components[0], beta=components[1]))
