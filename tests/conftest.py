import pytest

from rain_ripples.wave_table import QuantizedWaveTable, TableDomain

# Full-size tables are 400^3; tests stay small.
SMALL_RESOLUTION = 40


@pytest.fixture
def small_domain():
    return TableDomain(resolution=SMALL_RESOLUTION)


@pytest.fixture
def small_table(small_domain):
    return QuantizedWaveTable(15.0, domain=small_domain)
