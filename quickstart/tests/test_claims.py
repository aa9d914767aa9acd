"""
Claim Extraction Tests

Missing claims must come back as empty strings, never None.
"""

from quickstart.auth.claims import UserClaims, get_user_profile
from quickstart.models import UserProfile


def test_find_first_value_returns_claim():
    user = UserClaims({"email": "jane@example.com"})
    assert user.find_first_value("email") == "jane@example.com"


def test_missing_claim_is_empty_string():
    user = UserClaims({"sub": "auth0|1"})
    assert user.find_first_value("picture") == ""


def test_null_claim_is_empty_string():
    user = UserClaims({"sub": "auth0|1", "name": None})
    assert user.name == ""


def test_profile_reads_well_known_claims(user_claims):
    profile = get_user_profile(UserClaims(user_claims))

    assert profile == UserProfile(
        name="Jane Doe",
        email="jane@example.com",
        picture="https://cdn.example.com/jane.png",
    )


def test_profile_defaults_when_claims_absent():
    profile = get_user_profile(UserClaims({"sub": "auth0|1"}))

    assert profile.name == ""
    assert profile.email == ""
    assert profile.picture == ""


def test_profile_for_anonymous_user():
    assert get_user_profile(None) == UserProfile()

