import pytest

from pendelview.config import SimConfig
from pendelview.physics import PhysicalParams


@pytest.fixture
def default_params():
    return PhysicalParams(L1=130.0, L2=130.0, m1=20.0, m2=20.0, g=1.0)


@pytest.fixture
def unit_params():
    """Equal unit arms and masses under earth gravity, fast enough to move."""
    return PhysicalParams(L1=1.0, L2=1.0, m1=1.0, m2=1.0, g=9.81)


@pytest.fixture
def paused_config():
    return SimConfig(running=False)
