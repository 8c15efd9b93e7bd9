"""
Prime-order subgroups of :math:`\\mathbb{Z}_p^*` for a safe prime :math:`p = 2q + 1`.

The group is the subgroup of quadratic residues modulo :math:`p`, of prime order :math:`q`.
Elements use the additive notation of :py:class:`petlib.ec.EcPt`, so that the same proof code
reads the same on both kinds of groups: ``a + b`` is the group operation, ``k * a`` is
exponentiation by the scalar ``k`` and ``-a`` is the inverse.

>>> group = ModPGroup(2039, 4)
>>> g = group.generator()
>>> group.modulus_byte_length
2
>>> (3 * g + 5 * g) == 8 * g
True
>>> g + (-g) == group.infinite()
True
"""

from petlib.bn import Bn
from petlib.pack import encode, decode, register_coders

from zkor.bytetree import ByteTreeLeaf, as_byte_tree
from zkor.consts import MODP_1024_HEX, DEFAULT_GENERATOR
from zkor.exceptions import ElementConstructionError, ByteTreeFormatError
from zkor.utils import ensure_bn, reduce_bn, sum_bn_array


class ChallengeSpace:
    """
    The ring :math:`\\mathbb{Z}_q` from which challenges and responses are drawn.

    Args:
        order: The modulus :math:`q` of the ring.
    """

    def __init__(self, order):
        self.order = ensure_bn(order)

    @property
    def byte_length(self):
        return (int(self.order).bit_length() + 7) // 8

    def random(self):
        return self.order.random()

    def reduce(self, value):
        return reduce_bn(value, self.order)

    def sum(self, values):
        return sum_bn_array(values, self.order)

    def from_digest(self, digest):
        """Map a hash digest to an element of the ring."""
        return reduce_bn(int.from_bytes(digest, "big"), self.order)

    def element_to_byte_tree(self, value):
        value = int(self.reduce(value))
        return as_byte_tree(value.to_bytes(self.byte_length, "big"))

    def element_from_byte_tree(self, tree):
        """
        Decode a ring element encoded by :py:meth:`element_to_byte_tree`.

        Raises:
            :py:class:`zkor.exceptions.ByteTreeFormatError`: If the leaf has the wrong size or the
                value is not reduced.
        """
        if not isinstance(tree, ByteTreeLeaf) or len(tree.data) != self.byte_length:
            raise ByteTreeFormatError(
                "Expected a leaf of {} bytes for a ring element".format(self.byte_length)
            )
        value = int.from_bytes(tree.data, "big")
        if value >= int(self.order):
            raise ByteTreeFormatError("Ring element is not reduced modulo the order")
        return ensure_bn(value)

    def __eq__(self, other):
        return isinstance(other, ChallengeSpace) and int(self.order) == int(other.order)

    def __hash__(self):
        return hash(("ChallengeSpace", int(self.order)))

    def __repr__(self):
        return "ChallengeSpace({})".format(int(self.order))


class ModPGroup:
    """
    Subgroup of quadratic residues modulo a safe prime.

    Args:
        modulus: Safe prime :math:`p`.
        generator: Integer value of a generator of the subgroup.

    Raises:
        ValueError: If the generator is not an element of order :math:`q`.
    """

    def __init__(self, modulus, generator=DEFAULT_GENERATOR):
        self.modulus = ensure_bn(modulus)
        self._order = ensure_bn((int(self.modulus) - 1) // 2)

        generator = ensure_bn(generator)
        if not 1 < int(generator) < int(self.modulus) or not self._is_member(generator):
            raise ValueError("Generator {} does not generate the subgroup".format(generator))
        self._generator = ModPGroupElement(generator, self)

    @classmethod
    def generate(cls, bits=1024):
        """
        Set up a group over a fresh safe prime of the given bit length.
        """
        return cls(Bn.get_prime(bits, safe=1), DEFAULT_GENERATOR)

    @property
    def modulus_byte_length(self):
        """Number of bytes of the big-endian encoding of an element."""
        return (int(self.modulus).bit_length() + 7) // 8

    def order(self):
        return self._order

    def generator(self):
        return self._generator

    def infinite(self):
        """The neutral element."""
        return ModPGroupElement(Bn(1), self)

    def challenge_space(self):
        return ChallengeSpace(self._order)

    def wsum(self, weights, elems):
        res = self.infinite()
        for weight, elem in zip(weights, elems):
            res = res + weight * elem
        return res

    def _is_member(self, value):
        return int(value.mod_pow(self._order, self.modulus)) == 1

    def to_element(self, tree):
        """
        Interpret a ByteTree leaf as a group element.

        Args:
            tree: Leaf of exactly :py:attr:`modulus_byte_length` bytes, big-endian.

        Raises:
            :py:class:`zkor.exceptions.ElementConstructionError`: If the leaf has the wrong length,
                the value is out of range, or it is not a quadratic residue.
        """
        if not isinstance(tree, ByteTreeLeaf):
            raise ElementConstructionError("Group elements are encoded as ByteTree leaves")
        if len(tree.data) != self.modulus_byte_length:
            raise ElementConstructionError(
                "Expected {} bytes, got {}".format(self.modulus_byte_length, len(tree.data))
            )

        value = ensure_bn(int.from_bytes(tree.data, "big"))
        if not 0 < int(value) < int(self.modulus):
            raise ElementConstructionError("Value is not in the range (0, p)")
        if not self._is_member(value):
            raise ElementConstructionError("Value is not a quadratic residue modulo p")
        return ModPGroupElement(value, self)

    def element_from_int(self, value):
        length = self.modulus_byte_length
        if int(value) < 0 or int(value).bit_length() > 8 * length:
            raise ElementConstructionError("Value does not fit the modulus byte length")
        return self.to_element(as_byte_tree(int(value).to_bytes(length, "big")))

    def __eq__(self, other):
        return isinstance(other, ModPGroup) and int(self.modulus) == int(other.modulus)

    def __hash__(self):
        return hash(("ModPGroup", int(self.modulus)))

    def __repr__(self):
        return "ModPGroup({})".format(int(self.modulus))


class ModPGroupElement:
    """
    Element of a :py:class:`ModPGroup`.

    Instances are produced by :py:meth:`ModPGroup.to_element` or by arithmetic on existing
    elements; the constructor itself does not check membership.
    """

    def __init__(self, value, group):
        self.value = value
        self.group = group

    def __add__(self, other):
        if not isinstance(other, ModPGroupElement) or other.group != self.group:
            return NotImplemented
        return ModPGroupElement(
            self.value.mod_mul(other.value, self.group.modulus), self.group
        )

    def __rmul__(self, scalar):
        exponent = reduce_bn(scalar, self.group.order())
        return ModPGroupElement(
            self.value.mod_pow(exponent, self.group.modulus), self.group
        )

    def __neg__(self):
        return ModPGroupElement(self.value.mod_inverse(self.group.modulus), self.group)

    def __sub__(self, other):
        return self + (-other)

    def __eq__(self, other):
        return (
            isinstance(other, ModPGroupElement)
            and self.group == other.group
            and int(self.value) == int(other.value)
        )

    def __hash__(self):
        return hash((int(self.group.modulus), int(self.value)))

    def to_int(self):
        return int(self.value)

    def to_byte_tree(self):
        return as_byte_tree(self.to_int().to_bytes(self.group.modulus_byte_length, "big"))

    def __repr__(self):
        return "ModPGroupElement({})".format(hex(self.to_int()))


DEFAULT_GROUP = ModPGroup(Bn.from_hex(MODP_1024_HEX), DEFAULT_GENERATOR)


def enc_ModPGroup(obj):
    return encode([obj.modulus, obj.generator().value])


def dec_ModPGroup(data):
    modulus, generator = decode(data)
    return ModPGroup(modulus, generator)


def enc_ModPGroupElement(obj):
    return encode([obj.value, obj.group])


def dec_ModPGroupElement(data):
    value, group = decode(data)
    return ModPGroupElement(value, group)


register_coders(ModPGroup, 20, enc_ModPGroup, dec_ModPGroup)
register_coders(ModPGroupElement, 21, enc_ModPGroupElement, dec_ModPGroupElement)
