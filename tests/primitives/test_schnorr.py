import pytest

from zkor.exceptions import (
    ChallengeSpaceMismatch,
    GroupMismatchError,
    MalformedInstanceError,
    ValidationError,
)
from zkor.modgroup import ModPGroup, ChallengeSpace
from zkor.primitives.schnorr import SchnorrProof
from zkor.utils.debug import SigmaProtocol


def test_schnorr_interactive(group):
    sk, g = group.order().random(), group.generator()
    stmt = SchnorrProof([g])
    protocol = SigmaProtocol(stmt, stmt.image(sk), sk)
    assert protocol.verify()


def test_chaum_pedersen_interactive(group):
    g = group.generator()
    h = 31 * g
    x = group.order().random()
    stmt = SchnorrProof([g, h])
    protocol = SigmaProtocol(stmt, (x * g, x * h), x)
    assert protocol.verify()


def test_schnorr_wrong_witness(group):
    g = group.generator()
    stmt = SchnorrProof([g])
    commitment, randomizer = stmt.commit()
    response = stmt.compute_response(5, 11, randomizer)
    assert not stmt.check((10 * g,), commitment, 5, response)


def test_schnorr_non_interactive(group):
    g = group.generator()
    h = 5 * g
    stmt = SchnorrProof([g, h])
    x = 123456
    nizk = stmt.prove((x * g, x * h), x)
    assert stmt.verify((x * g, x * h), nizk)


def test_schnorr_non_interactive_with_message(large_group):
    g = large_group.generator()
    stmt = SchnorrProof([g])
    instance = (3 * g,)
    nizk = stmt.prove(instance, 3, message="mymessage")
    assert stmt.verify(instance, nizk, message="mymessage")
    assert not stmt.verify(instance, nizk, message="othermessage")


def test_schnorr_wrong_response_non_interactive(large_group):
    g = large_group.generator()
    stmt = SchnorrProof([g])
    instance = (3 * g,)
    nizk = stmt.prove(instance, 3)
    tampered = nizk.__class__(
        challenge=nizk.challenge, response=stmt.challenge_space.reduce(int(nizk.response) + 1)
    )
    assert not stmt.verify(instance, tampered)


def test_schnorr_prove_rejects_wrong_witness(group):
    g = group.generator()
    stmt = SchnorrProof([g])
    with pytest.raises(ValidationError):
        stmt.prove((3 * g,), 4)


def test_simulation_is_accepting(group):
    g = group.generator()
    stmt = SchnorrProof([g, 2 * g])
    instance = (7 * g, 14 * g)
    sim = stmt.simulate_proof(instance)
    assert stmt.check(instance, sim.commitment, sim.challenge, sim.response)

    sim = stmt.simulate_proof(instance, challenge=5)
    assert int(sim.challenge) == 5
    assert stmt.check(instance, sim.commitment, sim.challenge, sim.response)


def test_check_rejects_commitment_of_wrong_arity(group):
    g = group.generator()
    stmt = SchnorrProof([g])
    commitment, randomizer = stmt.commit()
    response = stmt.compute_response(1, 2, randomizer)
    assert stmt.check((2 * g,), commitment, 1, response)
    assert not stmt.check((2 * g,), commitment + commitment, 1, response)


@pytest.mark.parametrize("bad", [None, 3, (), ("a",)])
def test_malformed_instances(small_group, bad):
    stmt = SchnorrProof([small_group.generator()])
    with pytest.raises(MalformedInstanceError):
        stmt.instance_to_byte_tree(bad)


def test_instance_from_other_group(small_group):
    other = ModPGroup(23, 4)
    stmt = SchnorrProof([small_group.generator()])
    with pytest.raises(MalformedInstanceError):
        stmt.instance_to_byte_tree((other.generator(),))


def test_instance_encoding_shape(small_group):
    g = small_group.generator()
    stmt = SchnorrProof([g, g])
    tree = stmt.instance_to_byte_tree((g, 2 * g))
    assert len(tree) == 2
    assert tree[0] == g.to_byte_tree()
    assert tree[1] == (2 * g).to_byte_tree()


def test_commitment_byte_tree_round_trip(group):
    g = group.generator()
    stmt = SchnorrProof([g, 3 * g])
    commitment, _ = stmt.commit()
    tree = stmt.commitment_to_byte_tree(commitment)
    assert stmt.commitment_from_byte_tree(tree) == commitment


def test_bases_from_different_groups(small_group):
    other = ModPGroup(23, 4)
    with pytest.raises(GroupMismatchError):
        SchnorrProof([small_group.generator(), other.generator()])


def test_bases_must_be_elements():
    with pytest.raises(ValueError):
        SchnorrProof([])
    with pytest.raises(TypeError):
        SchnorrProof([4])


def test_challenge_space_must_match_group(small_group):
    with pytest.raises(ChallengeSpaceMismatch):
        SchnorrProof([small_group.generator()], ChallengeSpace(1021))
