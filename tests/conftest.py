import pytest

from buildcalc.config import Settings
from buildcalc.sizing import CapacityTable
from buildcalc.tables import beam_table


@pytest.fixture
def beam_2_2x10():
    return [(6, 1600), (8, 1200), (10, 900), (12, 700)]


@pytest.fixture
def beam_2_2x12():
    return [(8, 1500), (10, 1200), (12, 950), (14, 750)]


@pytest.fixture
def small_table():
    return CapacityTable.from_pairs(
        {
            "A": [(4, 400), (8, 200)],
            "B": [(4, 800), (8, 400)],
            "C": [(4, 1600), (8, 800)],
        },
        name="small",
    )


@pytest.fixture
def syp_beams():
    return beam_table("SYP", "any")


@pytest.fixture
def settings():
    return Settings()
