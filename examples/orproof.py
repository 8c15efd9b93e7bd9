"""
Or-composition of two discrete-logarithm knowledge proofs:
PK{ (x0, x1): (Y0 = x0 * G) | (Y1 = x1 * G) }
"""

import warnings

from zkor import ModPGroup, SchnorrProof, SigmaProofOr
from zkor.exceptions import TranscriptBindingWarning

group = ModPGroup.generate(512)
g = group.generator()
space = group.challenge_space()

# The prover only knows the second secret.
x1 = group.order().random()

# Set up the proof statement: one leaf per branch, same shape.
stmt = SigmaProofOr(space, [SchnorrProof([g], space), SchnorrProof([g], space)])

# Instances, in branch order.
y0 = group.order().random() * g
y1 = x1 * g
instances = [(y0,), (y1,)]

# Prove with the witness of branch 1, the other branch is simulated.
with warnings.catch_warnings():
    warnings.simplefilter("ignore", TranscriptBindingWarning)
    proof = stmt.prove(instances, x1, 1, message="example")
    assert stmt.verify(instances, proof, message="example")

# Proofs travel as ByteTrees.
serialized = stmt.proof_to_byte_tree(proof).to_hex()
