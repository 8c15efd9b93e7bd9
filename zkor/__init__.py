__version__ = "0.1.0"
__title__ = "zkor"
__author__ = "zkor contributors"
__email__ = "zkor@example.org"
__url__ = "https://github.com/zkor/zkor"
__license__ = "MIT"
__description__ = "Disjunctive (OR) composition of Schnorr proofs over modular groups, with canonical ByteTree encodings."
__copyright__ = "2020, zkor contributors"


from zkor.composition import SigmaProofOr, SigmaComposer, OrProof
from zkor.modgroup import ModPGroup, ChallengeSpace
from zkor.primitives.schnorr import SchnorrProof
