import pytest

from zkor.exceptions import ElementConstructionError, InvalidDecimalError, OversizeError
from zkor.primitives.elgamal import (
    ElGamalKeyPair,
    ElGamalCiphertext,
    encrypt,
    decrypt,
    encryption_or_proof,
    ciphertext_instances,
    prove_encrypts_one_of,
    verify_encrypts_one_of,
    ciphertext_from_decimals,
)


pytestmark = pytest.mark.filterwarnings("ignore::zkor.exceptions.TranscriptBindingWarning")


@pytest.fixture
def keys(group):
    return ElGamalKeyPair.generate(group)


@pytest.mark.parametrize("plaintext", [0, 1])
def test_encrypt_decrypt(keys, plaintext):
    ciphertext, _ = encrypt(keys.public_key, plaintext)
    assert decrypt(keys, ciphertext, 1) == plaintext


def test_decrypt_out_of_range(keys):
    ciphertext, _ = encrypt(keys.public_key, 5)
    with pytest.raises(ValueError):
        decrypt(keys, ciphertext, 3)


@pytest.mark.parametrize("plaintext", [0, 1])
def test_zero_or_one_proof(keys, plaintext):
    ciphertext, nonce = encrypt(keys.public_key, plaintext)
    proof = prove_encrypts_one_of(keys.public_key, ciphertext, [0, 1], plaintext, nonce)
    assert verify_encrypts_one_of(keys.public_key, ciphertext, [0, 1], proof)


def test_proof_for_range_of_values(keys):
    values = list(range(5))
    ciphertext, nonce = encrypt(keys.public_key, 3)
    proof = prove_encrypts_one_of(keys.public_key, ciphertext, values, 3, nonce, message="q1")
    assert verify_encrypts_one_of(keys.public_key, ciphertext, values, proof, message="q1")


def test_plaintext_outside_values(keys):
    ciphertext, nonce = encrypt(keys.public_key, 2)
    with pytest.raises(ValueError):
        prove_encrypts_one_of(keys.public_key, ciphertext, [0, 1], 2, nonce)


def test_proof_does_not_transfer_to_other_ciphertext(large_group):
    keys = ElGamalKeyPair.generate(large_group)
    ciphertext, nonce = encrypt(keys.public_key, 1)
    proof = prove_encrypts_one_of(keys.public_key, ciphertext, [0, 1], 1, nonce)

    other, _ = encrypt(keys.public_key, 1)
    assert not verify_encrypts_one_of(keys.public_key, other, [0, 1], proof)


def test_proof_does_not_transfer_to_other_values(large_group):
    keys = ElGamalKeyPair.generate(large_group)
    ciphertext, nonce = encrypt(keys.public_key, 1)
    proof = prove_encrypts_one_of(keys.public_key, ciphertext, [0, 1], 1, nonce)
    assert not verify_encrypts_one_of(keys.public_key, ciphertext, [1, 2], proof)


def test_instances_share_shape(keys):
    ciphertext, nonce = encrypt(keys.public_key, 0)
    instances = ciphertext_instances(keys.public_key, ciphertext, [0, 1, 2])
    g = keys.public_key.group.generator()
    assert instances[0] == (ciphertext.alpha, ciphertext.beta)
    assert instances[2] == (ciphertext.alpha, ciphertext.beta - 2 * g)

    stmt = encryption_or_proof(keys.public_key, 3)
    assert len(stmt) == 3
    assert stmt.instance_to_byte_tree(instances) == stmt.sigma_proofs[0].instance_to_byte_tree(
        instances[0]
    )


def test_ciphertext_from_decimals(keys):
    ciphertext, _ = encrypt(keys.public_key, 1)
    alpha = str(ciphertext.alpha.to_int())
    beta = str(ciphertext.beta.to_int())
    # Statement values as found in election records may be wrapped.
    wrapped = " \n".join(beta[i : i + 3] for i in range(0, len(beta), 3))

    res = ciphertext_from_decimals(alpha, wrapped, keys.public_key.group)
    assert res.is_ok
    assert res.value == ciphertext


def test_ciphertext_from_native_integers(keys):
    ciphertext, _ = encrypt(keys.public_key, 0)
    res = ciphertext_from_decimals(
        ciphertext.alpha.to_int(), ciphertext.beta.to_int(), keys.public_key.group
    )
    assert res.unwrap() == ciphertext


def test_ciphertext_from_decimals_errors(small_group):
    p = int(small_group.modulus)
    assert ciphertext_from_decimals("4", str(p), small_group).kind is ElementConstructionError
    assert ciphertext_from_decimals("4", str(2 ** 16), small_group).kind is OversizeError
    assert ciphertext_from_decimals("-4", "4", small_group).kind is InvalidDecimalError


def test_ciphertext_is_immutable(keys):
    ciphertext, _ = encrypt(keys.public_key, 0)
    assert isinstance(ciphertext, ElGamalCiphertext)
    with pytest.raises(AttributeError):
        ciphertext.alpha = ciphertext.beta
