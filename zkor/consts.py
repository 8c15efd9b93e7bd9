"""
Protocol constants and default group parameters.
"""

# Second Oakley group (RFC 2409, section 6.2). A safe prime: (p - 1) / 2 is prime.
MODP_1024_HEX = (
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1"
    "29024E088A67CC74020BBEA63B139B22514A08798E3404DD"
    "EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245"
    "E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE65381"
    "FFFFFFFFFFFFFFFF"
)

# Any quadratic residue other than one generates the subgroup of prime order.
DEFAULT_GENERATOR = 4

# ByteTree tags.
BYTETREE_NODE = 0
BYTETREE_LEAF = 1

# Size in bytes of the length prefix of ByteTree leaves and nodes.
BYTETREE_LENGTH_BYTES = 4
