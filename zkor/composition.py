r"""
Disjunctive (OR) composition of sigma protocols.

An or-proof for statements :math:`S_0, ..., S_{K-1}` shows knowledge of a witness for at least
one of them without revealing which:

.. math::
    PK\{ (x_0, ..., x_{K-1}): S_0(x_0) \lor ... \lor S_{K-1}(x_{K-1}) \}

The prover simulates every branch it has no witness for, each with a random challenge share, and
runs the real protocol on the remaining branch with the residual challenge, so that all shares sum
to the Fiat-Shamir challenge.

The generic machinery lives in :py:class:`SigmaComposer`, which receives the function that
encodes the instances into the transcript as a parameter. :py:class:`SigmaProofOr` supplies that
function for proofs over instances of identical shape.
"""

import warnings

import attr
from petlib.pack import encode, decode, register_coders

from zkor.base import prehash, build_fiat_shamir_challenge
from zkor.bytetree import ByteTreeNode, expect_node
from zkor.modgroup import ModPGroupElement
from zkor.exceptions import (
    ChallengeSpaceMismatch,
    HomogeneityError,
    StatementMismatch,
    TranscriptBindingWarning,
)


def _find_residual_challenge(subchallenges, challenge, challenge_space):
    r"""
    Determine the complement to a global challenge in a list

    For example, to find :math:`c_1` such that :math:`c = c_1 + c_2 + c_3 \mod q`, we compute
    :math:`c - (c_2 + c_3) \mod q`.

    Args:
        subchallenges: The array of subchallenges :math:`c_2, c_3, ...`
        challenge: The global challenge to reach
        challenge_space: The ring :math:`\mathbb{Z}_q`
    """
    return challenge_space.reduce(int(challenge) - int(challenge_space.sum(subchallenges)))


def _instance_shape(instance):
    try:
        entries = tuple(instance)
    except TypeError:
        return None
    return tuple(
        (type(y), y.group if isinstance(y, ModPGroupElement) else None) for y in entries
    )


def validate_homogeneity(instances):
    """
    Check that all instances have the shape of the first one.

    Two instances have the same shape if they have the same arity and their entries, position by
    position, have the same type and come from the same group. The first instance itself is not
    inspected: that is the job of the leaf encoder.

    Raises:
        :py:class:`zkor.exceptions.HomogeneityError`
    """
    if len(instances) == 0:
        raise HomogeneityError("Need at least one instance")

    reference = _instance_shape(instances[0])
    if reference is None:
        return

    for index, instance in enumerate(instances[1:], start=1):
        if _instance_shape(instance) != reference:
            raise HomogeneityError(
                "Instance {} does not have the shape of instance 0".format(index)
            )


def encode_first_instance(proofs, instances):
    """
    Encode the instances of an or-proof as the leaf encoding of the first instance.

    This is the transcript format of or-proofs over homogeneous statements: the first branch's
    encoder is applied to ``instances[0]`` only. Instances beyond the first one are not bound by
    the Fiat-Shamir hash, which is sound only when they are determined by the first instance and
    public data (e.g., ``beta - v G`` for a fixed ciphertext). A
    :py:class:`zkor.exceptions.TranscriptBindingWarning` is emitted when there is more than one
    instance.

    Raises:
        :py:class:`zkor.exceptions.HomogeneityError`: If instances have different shapes.
        :py:class:`zkor.exceptions.MalformedInstanceError`: Propagated from the leaf encoder.
    """
    validate_homogeneity(instances)
    if len(instances) > 1:
        warnings.warn(
            "Only the first of {} instances is bound by the transcript hash".format(
                len(instances)
            ),
            TranscriptBindingWarning,
        )
    return proofs[0].instance_to_byte_tree(instances[0])


def encode_all_instances(proofs, instances):
    """
    Encode every instance with the encoder of its own branch, as a node in branch order.
    """
    if len(proofs) != len(instances):
        raise StatementMismatch(
            "Got {} instances for {} branches".format(len(instances), len(proofs))
        )
    return ByteTreeNode(
        [proof.instance_to_byte_tree(inst) for proof, inst in zip(proofs, instances)]
    )


def _to_tuples(commitments):
    return tuple(tuple(com) for com in commitments)


@attr.s(frozen=True)
class OrProof:
    """
    Non-interactive or-proof transcript.

    Holds, for every branch in order, the commitment, the challenge share and the response.
    """

    commitments = attr.ib(converter=_to_tuples)
    challenges = attr.ib(converter=tuple)
    responses = attr.ib(converter=tuple)

    def __len__(self):
        return len(self.commitments)


class SigmaComposer:
    """
    Prover and verifier of or-compositions of sigma protocols over one challenge space.

    The composer keeps no state between calls. The encoding of the instances into the transcript
    is passed to every call as a function ``instance_encoder(instances) -> ByteTree``.

    Args:
        challenge_space: Ring shared by all composed proofs.
    """

    def __init__(self, challenge_space):
        self.challenge_space = challenge_space

    def _check_branches(self, proofs, instances):
        if len(proofs) == 0:
            raise ValueError("Need at least one proof")
        if len(instances) != len(proofs):
            raise StatementMismatch(
                "Got {} instances for {} branches".format(len(instances), len(proofs))
            )
        for proof in proofs:
            if proof.challenge_space != self.challenge_space:
                raise ChallengeSpaceMismatch(
                    "Composed proofs should share the challenge space {}".format(
                        self.challenge_space
                    )
                )

    def compute_challenge(
        self, proofs, instances, commitments, instance_encoder, message="", stmt_prehash=None
    ):
        """
        Derive the global challenge from the encoded instances and all commitments.
        """
        if stmt_prehash is None:
            stmt_prehash = prehash(self.__class__.__name__)
        commitment_tree = ByteTreeNode(
            [proof.commitment_to_byte_tree(com) for proof, com in zip(proofs, commitments)]
        )
        return build_fiat_shamir_challenge(
            self.challenge_space,
            stmt_prehash,
            instance_encoder(instances),
            commitment_tree,
            message=message,
        )

    def prove_or(
        self, proofs, instances, witness, index, instance_encoder, message="", stmt_prehash=None
    ):
        """
        Construct an or-proof with a witness for branch ``index``.

        Args:
            proofs: Leaf proofs, one per branch.
            instances: Instances, one per branch, in the same order.
            witness: Witness for ``instances[index]``.
            index: Branch the prover knows a witness for.
            instance_encoder: Function encoding the instances into a ByteTree.
            message (str): Optional message to make a signature proof of knowledge.
            stmt_prehash: Optional hash object seeded with the statement.

        Raises:
            ValueError: If ``index`` is not a branch.
            :py:class:`zkor.exceptions.ValidationError`: If the witness does not satisfy its branch.
        """
        self._check_branches(proofs, instances)
        if not 0 <= index < len(proofs):
            raise ValueError("No branch {} in a proof of {} branches".format(index, len(proofs)))

        real = proofs[index]
        instance = real.validate_instance(instances[index])
        real.validate_witness(instance, witness)

        commitments = [None] * len(proofs)
        challenges = [None] * len(proofs)
        responses = [None] * len(proofs)

        # Simulate the branches we have no witness for.
        for j, proof in enumerate(proofs):
            if j == index:
                continue
            sim = proof.simulate_proof(instances[j])
            commitments[j] = sim.commitment
            challenges[j] = sim.challenge
            responses[j] = sim.response

        commitments[index], randomizer = real.commit()

        challenge = self.compute_challenge(
            proofs, instances, commitments, instance_encoder, message, stmt_prehash
        )
        residual = _find_residual_challenge(
            [c for j, c in enumerate(challenges) if j != index],
            challenge,
            self.challenge_space,
        )
        challenges[index] = residual
        responses[index] = real.compute_response(residual, witness, randomizer)

        return OrProof(commitments=commitments, challenges=challenges, responses=responses)

    def verify_or(
        self, proofs, instances, proof, instance_encoder, message="", stmt_prehash=None
    ):
        """
        Verify an or-proof.

        Returns:
            bool: True if the challenge shares add up to the recomputed challenge and every
                branch is accepting.

        Raises:
            :py:class:`zkor.exceptions.StatementMismatch`: If the proof does not have one entry per
                branch.
        """
        self._check_branches(proofs, instances)
        num = len(proofs)
        if not len(proof.commitments) == len(proof.challenges) == len(proof.responses) == num:
            raise StatementMismatch("The proof does not have {} branches".format(num))

        challenge = self.compute_challenge(
            proofs, instances, proof.commitments, instance_encoder, message, stmt_prehash
        )
        if int(self.challenge_space.sum(proof.challenges)) != int(challenge):
            return False

        return all(
            sub.check(inst, com, chal, resp)
            for sub, inst, com, chal, resp in zip(
                proofs, instances, proof.commitments, proof.challenges, proof.responses
            )
        )


class SigmaProofOr:
    """
    Or-composition of leaf proofs over instances of identical shape.

    The transcript binds the instances through the first branch's encoding of the first instance,
    see :py:func:`encode_first_instance`.

    >>> from zkor.modgroup import ModPGroup
    >>> from zkor.primitives.schnorr import SchnorrProof
    >>> group = ModPGroup(2039, 4)
    >>> g = group.generator()
    >>> space = group.challenge_space()
    >>> stmt = SigmaProofOr(space, [SchnorrProof([g], space), SchnorrProof([g], space)])
    >>> instances = [(5 * g,), (7 * g,)]
    >>> proof = stmt.prove(instances, 7, 1)
    >>> stmt.verify(instances, proof)
    True

    Args:
        challenge_space: Ring shared by all branches.
        proofs: Leaf proofs, one per branch, in order.

    Raises:
        ValueError: If no proofs are given.
        :py:class:`zkor.exceptions.ChallengeSpaceMismatch`: If a proof uses another challenge space.
    """

    def __init__(self, challenge_space, proofs):
        self.sigma_proofs = tuple(proofs)
        if len(self.sigma_proofs) == 0:
            raise ValueError("Need at least one proof")
        for proof in self.sigma_proofs:
            if proof.challenge_space != challenge_space:
                raise ChallengeSpaceMismatch(
                    "All proofs should use the challenge space {}".format(challenge_space)
                )
        self.challenge_space = challenge_space
        self.composer = SigmaComposer(challenge_space)

    def instance_to_byte_tree(self, instances):
        """
        Encode the instances of all branches for the transcript hash.

        Raises:
            :py:class:`zkor.exceptions.HomogeneityError`: If instances differ in shape.
            :py:class:`zkor.exceptions.MalformedInstanceError`: Propagated from the first branch.
        """
        return encode_first_instance(self.sigma_proofs, instances)

    def prehash_statement(self):
        """
        Return a hash seeded with the class name and the statement of every branch.
        """
        return prehash(
            self.__class__.__name__,
            *[proof.bases_to_byte_tree() for proof in self.sigma_proofs]
        )

    def prove(self, instances, witness, index, message=""):
        """
        Generate an or-proof with a witness for branch ``index``.
        """
        return self.composer.prove_or(
            self.sigma_proofs,
            instances,
            witness,
            index,
            self.instance_to_byte_tree,
            message=message,
            stmt_prehash=self.prehash_statement(),
        )

    def verify(self, instances, proof, message=""):
        """
        Verify an or-proof.
        """
        return self.composer.verify_or(
            self.sigma_proofs,
            instances,
            proof,
            self.instance_to_byte_tree,
            message=message,
            stmt_prehash=self.prehash_statement(),
        )

    def proof_to_byte_tree(self, proof):
        """
        Serialize a proof as a node of three nodes: commitments, challenges, responses.
        """
        return ByteTreeNode(
            [
                ByteTreeNode(
                    [
                        sub.commitment_to_byte_tree(com)
                        for sub, com in zip(self.sigma_proofs, proof.commitments)
                    ]
                ),
                ByteTreeNode(
                    [self.challenge_space.element_to_byte_tree(c) for c in proof.challenges]
                ),
                ByteTreeNode(
                    [self.challenge_space.element_to_byte_tree(r) for r in proof.responses]
                ),
            ]
        )

    def proof_from_byte_tree(self, tree):
        """
        Parse a proof serialized by :py:meth:`proof_to_byte_tree`.

        Raises:
            :py:class:`zkor.exceptions.ByteTreeFormatError`: If the tree has the wrong structure.
            :py:class:`zkor.exceptions.ElementConstructionError`: If a commitment is not a group
                element.
        """
        num = len(self.sigma_proofs)
        commitments, challenges, responses = expect_node(tree, 3)
        commitments = [
            sub.commitment_from_byte_tree(com)
            for sub, com in zip(self.sigma_proofs, expect_node(commitments, num))
        ]
        challenges = [
            self.challenge_space.element_from_byte_tree(c)
            for c in expect_node(challenges, num)
        ]
        responses = [
            self.challenge_space.element_from_byte_tree(r)
            for r in expect_node(responses, num)
        ]
        return OrProof(commitments=commitments, challenges=challenges, responses=responses)

    def __len__(self):
        return len(self.sigma_proofs)


def enc_OrProof(obj):
    return encode(
        [[list(com) for com in obj.commitments], list(obj.challenges), list(obj.responses)]
    )


def dec_OrProof(data):
    commitments, challenges, responses = decode(data)
    return OrProof(commitments=commitments, challenges=challenges, responses=responses)


register_coders(OrProof, 22, enc_OrProof, dec_OrProof)
