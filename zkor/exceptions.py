"""
Common exception classes.
"""


class OversizeError(Exception):
    """Value does not fit in the requested number of bytes."""


class ElementConstructionError(Exception):
    """Byte sequence does not denote an element of the group."""


class InvalidDecimalError(ValueError):
    """Value is not a non-negative decimal integer."""


class MalformedInstanceError(Exception):
    """Instance does not have the shape expected by the proof."""


class HomogeneityError(Exception):
    """Instances of an or-proof do not share the same shape."""


class ChallengeSpaceMismatch(Exception):
    """Composed proofs do not share the same challenge space."""


class GroupMismatchError(Exception):
    """Group elements come from different groups."""


class StatementMismatch(Exception):
    """Proof statements mismatch, impossible to verify."""


class ValidationError(Exception):
    """Error during validation."""


class ByteTreeFormatError(Exception):
    """Serialized ByteTree is malformed or has an unexpected structure."""


class TranscriptBindingWarning(UserWarning):
    """Only part of the statement is bound by the transcript hash."""
