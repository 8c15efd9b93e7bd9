import pytest

from zkor.modgroup import ModPGroup


# p = 2 * 1019 + 1, small enough to enumerate.
SMALL_MODULUS = 2039


@pytest.fixture(scope="session")
def small_group():
    return ModPGroup(SMALL_MODULUS, 4)


@pytest.fixture(scope="session")
def large_group():
    """Group where accidental challenge collisions are negligible."""
    return ModPGroup.generate(256)


@pytest.fixture(scope="session", params=["small", "large"])
def group(request, small_group, large_group):
    if request.param == "small":
        return small_group
    return large_group
