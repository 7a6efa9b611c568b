from __future__ import annotations

import pytest

from _frames import trajectory_frame


@pytest.fixture
def sample_frame() -> str:
    return trajectory_frame()
