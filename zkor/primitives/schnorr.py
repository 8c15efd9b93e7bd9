r"""
Schnorr proof of knowledge of a discrete logarithm common to several bases.

For bases :math:`G_0, ..., G_{m-1}` the proof shows knowledge of :math:`x` such that

.. math::
    PK\{ x: Y_0 = x G_0 \land ... \land Y_{m-1} = x G_{m-1} \}

With a single base this is the classic Schnorr identification protocol; with two bases it is the
Chaum-Pedersen proof of equality of discrete logarithms. The instance is the tuple
:math:`(Y_0, ..., Y_{m-1})`.

>>> from zkor.modgroup import ModPGroup
>>> group = ModPGroup(2039, 4)
>>> g = group.generator()
>>> stmt = SchnorrProof([g])
>>> nizk = stmt.prove((42 * g,), 42)
>>> stmt.verify((42 * g,), nizk)
True
"""

from zkor.base import NIZK, SimulationTranscript, prehash, build_fiat_shamir_challenge
from zkor.bytetree import ByteTreeNode, expect_node
from zkor.modgroup import ModPGroupElement
from zkor.utils import ensure_bn
from zkor.exceptions import (
    ChallengeSpaceMismatch,
    GroupMismatchError,
    MalformedInstanceError,
    ValidationError,
)


class SchnorrProof:
    r"""
    Leaf sigma protocol for :math:`Y_i = x G_i`.

    Args:
        bases: Non-empty sequence of :py:class:`zkor.modgroup.ModPGroupElement` from one group.
        challenge_space: Ring of challenges and responses. Defaults to the ring of the group
            order, which is the only one the protocol is sound for.

    Raises:
        ValueError: If no bases are given.
        :py:class:`zkor.exceptions.GroupMismatchError`: If bases come from different groups.
        :py:class:`zkor.exceptions.ChallengeSpaceMismatch`: If the challenge space is not
            :math:`\mathbb{Z}_q` for the group order :math:`q`.
    """

    def __init__(self, bases, challenge_space=None):
        self.bases = tuple(bases)
        if len(self.bases) == 0:
            raise ValueError("Need at least one base")

        for g in self.bases:
            if not isinstance(g, ModPGroupElement):
                raise TypeError("Expected a group element. Got: {!r}".format(g))

        self.group = self.bases[0].group
        for g in self.bases:
            if g.group != self.group:
                raise GroupMismatchError("All bases should come from the same group")

        if challenge_space is None:
            challenge_space = self.group.challenge_space()
        elif challenge_space != self.group.challenge_space():
            raise ChallengeSpaceMismatch(
                "Challenge space {} does not match the group order".format(challenge_space)
            )
        self.challenge_space = challenge_space

    @property
    def arity(self):
        return len(self.bases)

    def bases_to_byte_tree(self):
        return ByteTreeNode([g.to_byte_tree() for g in self.bases])

    def prehash_statement(self):
        """
        Return a hash of the proof's statement: its class and bases.
        """
        return prehash(self.__class__.__name__, self.bases_to_byte_tree())

    def validate_instance(self, instance):
        """
        Check that an instance is a tuple of group elements matching the bases.

        Returns the instance as a tuple.

        Raises:
            :py:class:`zkor.exceptions.MalformedInstanceError`
        """
        try:
            instance = tuple(instance)
        except TypeError:
            raise MalformedInstanceError(
                "Instance should be a sequence of group elements. Got: {!r}".format(instance)
            )

        if len(instance) != self.arity:
            raise MalformedInstanceError(
                "Expected {} group elements, got {}".format(self.arity, len(instance))
            )
        for y in instance:
            if not isinstance(y, ModPGroupElement) or y.group != self.group:
                raise MalformedInstanceError(
                    "Instance entries must be elements of {}. Got: {!r}".format(self.group, y)
                )
        return instance

    def instance_to_byte_tree(self, instance):
        """
        Canonical encoding of an instance: a node with one leaf per element.
        """
        instance = self.validate_instance(instance)
        return ByteTreeNode([y.to_byte_tree() for y in instance])

    # Commitments have the same shape as instances.
    def commitment_to_byte_tree(self, commitment):
        return ByteTreeNode([a.to_byte_tree() for a in commitment])

    def commitment_from_byte_tree(self, tree):
        children = expect_node(tree, self.arity)
        return tuple(self.group.to_element(child) for child in children)

    def image(self, witness):
        """Compute the instance :math:`(x G_0, ..., x G_{m-1})` of a witness."""
        return tuple(witness * g for g in self.bases)

    def get_randomizer(self):
        return self.group.order().random()

    def commit(self, randomizer=None):
        r"""
        Construct the commitment :math:`(k G_0, ..., k G_{m-1})`.

        Args:
            randomizer: Optional random value :math:`k`. Drawn at random if None.

        Returns:
            A pair of the commitment and the randomizer used.
        """
        if randomizer is None:
            randomizer = self.get_randomizer()
        return self.image(randomizer), randomizer

    def compute_response(self, challenge, witness, randomizer):
        r"""
        Compute the response :math:`k + c x \mod q`.
        """
        return self.challenge_space.reduce(
            int(randomizer) + int(challenge) * int(witness)
        )

    def recompute_commitment(self, instance, challenge, response):
        r"""
        Compute the pseudo-commitment :math:`(r G_i - c Y_i)_i`.

        A pseudo-commitment is the commitment a verifier should have received if the proof was
        correct.
        """
        return tuple(
            response * g + (-challenge) * y for g, y in zip(self.bases, instance)
        )

    def check(self, instance, commitment, challenge, response):
        """
        Check the verification equation of one run of the protocol.

        Returns:
            bool: True if the transcript is accepting.
        """
        instance = self.validate_instance(instance)
        commitment = tuple(commitment)
        if len(commitment) != self.arity:
            return False
        return commitment == self.recompute_commitment(instance, challenge, response)

    def simulate_proof(self, instance, challenge=None):
        """
        Produce an accepting transcript without the witness.

        Args:
            instance: Instance to simulate for.
            challenge: Optional challenge to use in the simulation.
        """
        instance = self.validate_instance(instance)
        if challenge is None:
            challenge = self.challenge_space.random()
        response = self.challenge_space.random()
        commitment = self.recompute_commitment(instance, challenge, response)
        return SimulationTranscript(
            commitment=commitment, challenge=challenge, response=response
        )

    def validate_witness(self, instance, witness):
        if self.image(ensure_bn(witness)) != tuple(instance):
            raise ValidationError("Witness does not match the instance")

    def prove(self, instance, witness, message=""):
        r"""
        Generate the transcript of a non-interactive proof.

        Args:
            instance: Tuple :math:`(Y_0, ..., Y_{m-1})`.
            witness: The discrete logarithm :math:`x`.
            message (str): Optional message to make a signature proof of knowledge.
        """
        instance = self.validate_instance(instance)
        self.validate_witness(instance, witness)

        commitment, randomizer = self.commit()
        challenge = build_fiat_shamir_challenge(
            self.challenge_space,
            self.prehash_statement(),
            self.instance_to_byte_tree(instance),
            self.commitment_to_byte_tree(commitment),
            message=message,
        )
        response = self.compute_response(challenge, witness, randomizer)
        return NIZK(challenge=challenge, response=response)

    def verify(self, instance, nizk, message=""):
        """
        Verify a non-interactive proof.

        The commitment is recomputed from the challenge and the response, and the challenge is
        recomputed from the commitment.
        """
        instance = self.validate_instance(instance)
        commitment_prime = self.recompute_commitment(
            instance, nizk.challenge, nizk.response
        )
        challenge_prime = build_fiat_shamir_challenge(
            self.challenge_space,
            self.prehash_statement(),
            self.instance_to_byte_tree(instance),
            self.commitment_to_byte_tree(commitment_prime),
            message=message,
        )
        return int(nizk.challenge) == int(challenge_prime)

    def __repr__(self):
        return "SchnorrProof({!r})".format(list(self.bases))
