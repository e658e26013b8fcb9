import matplotlib
matplotlib.use("Agg")

import pytest

from cubes import Configuration, DominoCube



EXAMPLE_START = "ooorrrgbggbgbgbroorrobggbgbbbgwwywwywywyyy"
SOLVED = "rrrrrrbbbbbbbbboooooogggggggggwwwwwwyyyyyy"


@pytest.fixture(scope="session")
def cube():
	return DominoCube()


@pytest.fixture
def distinctPosition():
	# every sticker different, so any misplaced sticker shows
	return Configuration(bytes(range(48, 90)))
