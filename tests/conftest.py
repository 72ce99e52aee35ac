from __future__ import annotations

import pytest

from factories import HOTEL, MUSEUM, SUBWAY, node


@pytest.fixture
def midtown_elements() -> list[dict]:
    """H1 with a subway ~14 m away and a museum ~140 m away."""
    return [
        node(1, 40.7550, -73.9840, name="H1", **HOTEL),
        node(2, 40.7551, -73.9839, name="S1", **SUBWAY),
        node(3, 40.7560, -73.9830, name="A1", **MUSEUM),
    ]
