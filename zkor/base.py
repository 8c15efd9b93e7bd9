"""
Common classes: proof transcripts and the Fiat-Shamir challenge.
"""

from hashlib import sha256

import attr

from zkor.bytetree import ByteTreeNode


@attr.s(frozen=True)
class NIZK:
    """
    Non-interactive zero-knowledge proof of a single sigma protocol.
    """

    challenge = attr.ib()
    response = attr.ib()


@attr.s(frozen=True)
class SimulationTranscript:
    """
    Simulated proof transcript.
    """

    commitment = attr.ib()
    challenge = attr.ib()
    response = attr.ib()


def prehash(label, *trees):
    """
    Start a transcript hash seeded with a statement label and ByteTrees describing the statement.

    >>> prehash("stmt").hexdigest() == prehash("stmt").hexdigest()
    True
    """
    h = sha256(label.encode())
    for tree in trees:
        h.update(tree.to_bytes())
    return h


def build_fiat_shamir_challenge(challenge_space, stmt_prehash, *trees, message=""):
    """Generate a Fiat-Shamir challenge.

    The items are hashed as one ByteTree node, so that their nesting is part of the hash input.

    >>> from zkor.bytetree import as_byte_tree
    >>> from zkor.modgroup import ChallengeSpace
    >>> space = ChallengeSpace(1019)
    >>> c = build_fiat_shamir_challenge(space, sha256(b"id"), as_byte_tree(b"commitment"))
    >>> 0 <= int(c) < 1019
    True

    Args:
        challenge_space: Ring the challenge lives in.
        stmt_prehash: Hash object seeded with the proof statement. It is updated in place.
        trees: ByteTrees to hash (e.g., instances and commitments).
        message: Message to make it a signature PK.
    """
    stmt_prehash.update(ByteTreeNode(trees).to_bytes())
    stmt_prehash.update(message.encode())
    return challenge_space.from_digest(stmt_prehash.digest())
