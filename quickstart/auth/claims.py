"""
Claim helpers for the signed-in user.

Claims come from the ID token Auth0 issues and are stored in the session by
the cookie scheme. Pages read a handful of well-known claim names off them;
a missing claim is always reported as an empty string.
"""

from typing import Any, Dict, Mapping, Optional

from quickstart.models import UserProfile


EMAIL_CLAIM = "email"
PICTURE_CLAIM = "picture"
NAME_CLAIM = "name"
SUBJECT_CLAIM = "sub"


class UserClaims:
    """
    Read-only view over the claims of an authenticated user.

    Args:
        claims: Claims mapping (parsed ID token / userinfo)
    """

    def __init__(self, claims: Optional[Mapping[str, Any]] = None):
        self._claims: Dict[str, Any] = dict(claims or {})

    def find_first_value(self, claim_type: str) -> str:
        """
        Return the value of a claim as a string.

        Args:
            claim_type: Claim name (e.g. 'email')

        Returns:
            The claim value, or "" when the claim is absent or null
        """
        value = self._claims.get(claim_type)
        if value is None:
            return ""
        return str(value)

    @property
    def name(self) -> str:
        """Display name of the identity."""
        return self.find_first_value(NAME_CLAIM)

    @property
    def subject(self) -> str:
        return self.find_first_value(SUBJECT_CLAIM)

    def __repr__(self) -> str:
        return f"UserClaims(sub={self.subject!r})"


def get_user_profile(user: Optional[UserClaims]) -> UserProfile:
    """
    Build the profile shown on the profile page.

    Args:
        user: Signed-in user, or None

    Returns:
        UserProfile with name, email and picture; each "" when absent
    """
    if user is None:
        return UserProfile()

    return UserProfile(
        name=user.name,
        email=user.find_first_value(EMAIL_CLAIM),
        picture=user.find_first_value(PICTURE_CLAIM),
    )
