import pytest

from suitematch.config import MS_PER_DAY, Settings
from suitematch.models import Listing, SearcherProfile

# Instante fijo para que la recencia sea determinística
NOW_MS = 1_700_000_000_000.0


def days_ago(days: float) -> float:
    return NOW_MS - days * MS_PER_DAY


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def full_profile():
    return SearcherProfile(
        minBudget=600,
        maxBudget=1200,
        preferredCity="Oakland",
        preferredLatitude=37.80,
        preferredLongitude=-122.27,
        spaceType="studio",
        maxRoommates=2,
        bio="Grad student, I cook a lot",
        questions=["looking for a quiet", "house with a yard"],
    )


@pytest.fixture
def empty_profile():
    return SearcherProfile()


@pytest.fixture
def bare_listing():
    return Listing(id="bare")
