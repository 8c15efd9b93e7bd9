"""
Explicit success/failure values.

Encoders that can fail on user-supplied input return either :py:class:`Ok` or :py:class:`Err`
instead of raising, so that a value which is too large and a value which is not a group element
can be told apart by the caller.

>>> res = Ok(42)
>>> res.is_ok, res.unwrap()
(True, 42)
>>> Err(ValueError("nope")).unwrap_or(0)
0
"""

import attr


@attr.s(frozen=True)
class Ok:
    """Successful result carrying a value."""

    value = attr.ib()

    is_ok = True
    is_err = False

    def unwrap(self):
        return self.value

    def unwrap_or(self, default):
        return self.value


@attr.s(frozen=True)
class Err:
    """
    Failed result carrying the exception that describes the failure.

    The exception is not raised unless :py:meth:`unwrap` is called.
    """

    error = attr.ib(validator=attr.validators.instance_of(Exception))

    is_ok = False
    is_err = True

    @property
    def kind(self):
        """Class of the carried error, e.g. :py:class:`zkor.exceptions.OversizeError`."""
        return type(self.error)

    def unwrap(self):
        raise self.error

    def unwrap_or(self, default):
        return default
