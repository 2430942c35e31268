"""
Shared fixtures for the comparison engine tests.
"""

import pytest

from .factories import build_option


@pytest.fixture
def make_option():
    return build_option


@pytest.fixture
def sample_costs():
    """The monthly cost structure used in the budget examples (total 1930)."""
    return dict(
        monthly_rent=1000,
        monthly_food=400,
        monthly_transport=100,
        monthly_phone=20,
        monthly_academic=50,
        monthly_leisure=150,
        monthly_travel=100,
        monthly_health=30,
        monthly_misc=80,
    )
