from petlib.bn import Bn


def ensure_bn(x):
    """
    Ensure that value is big number.

    >>> isinstance(ensure_bn(42), Bn)
    True
    >>> isinstance(ensure_bn(Bn(42)), Bn)
    True
    >>> ensure_bn(2 ** 100) == Bn.from_decimal(str(2 ** 100))
    True
    """
    if isinstance(x, Bn):
        return x
    else:
        return Bn.from_decimal(str(int(x)))


def reduce_bn(x, modulus):
    """
    Reduce a (possibly negative) number into :math:`[0, modulus)`.

    >>> reduce_bn(-1, 7)
    6
    """
    return ensure_bn(int(x) % int(modulus))


def sum_bn_array(arr, modulus):
    """
    Sum an array of big numbers under a modulus.

    >>> a = [Bn(5), Bn(7)]
    >>> m = 10
    >>> sum_bn_array(a, m)
    2
    """
    modulus = ensure_bn(modulus)
    res = Bn(0)
    for elem in arr:
        res = res.mod_add(ensure_bn(elem), modulus)
    return res
