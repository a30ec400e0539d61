import numpy as np
import pytest

from gridwalk.model.grid import GridMap


CORRIDOR = "\n".join([
    "###^###################",
    "### ###################",
    "### ###################",
    "###    ################",
    "###### ################",
    "###### ################",
    "######$################",
])


@pytest.fixture
def corridor():
    return GridMap.from_text(CORRIDOR)


@pytest.fixture
def small_map():
    return GridMap.from_text("^ #\n# $")


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
