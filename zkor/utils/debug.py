"""
Utils that can be useful for debugging.
"""


class SigmaProtocol:
    """
    Interactive runner of a leaf sigma protocol.

    Args:
        proof: Leaf proof, e.g. :py:class:`zkor.primitives.schnorr.SchnorrProof`.
        instance: Public instance.
        witness: Witness held by the prover.
    """

    def __init__(self, proof, instance, witness):
        self.proof = proof
        self.instance = instance
        self.witness = witness

    def verify(self, verbose=True):
        """Run the three moves and check the transcript."""

        # Funky names.
        peggy = self.proof
        victor = self.proof

        commitment, randomizer = peggy.commit()
        challenge = victor.challenge_space.random()
        response = peggy.compute_response(challenge, self.witness, randomizer)
        result = victor.check(self.instance, commitment, challenge, response)

        if verbose:
            if result:
                print("Verified for {0}".format(self.proof.__class__.__name__))
            else:
                print("Not verified for {0}".format(self.proof.__class__.__name__))

        return result
