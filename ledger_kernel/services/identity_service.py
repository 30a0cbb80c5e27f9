"""
IdentityResolver -- maps a caller token to a profile.

The reference deployment passes the caller's profile id in a
``profile_id`` header; this resolver accepts that id as an int or numeric
string.  Anything it cannot resolve fails as NOT_AUTHORIZED.
"""

from ledger_kernel.domain.dtos import ProfileInfo
from ledger_kernel.exceptions import ProfileNotResolvedError
from ledger_kernel.models.profile import Profile
from ledger_kernel.services.base import BaseService


def parse_profile_id(token: object) -> int | None:
    """Profile id from an int or numeric string; None for anything else."""
    if isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token
    if isinstance(token, str) and token.strip().isdigit():
        return int(token.strip())
    return None


class IdentityResolver(BaseService):
    """Resolves caller tokens against the profiles table."""

    def resolve(self, token: object) -> ProfileInfo:
        """
        Raises:
            ProfileNotResolvedError: If token is missing, malformed, or
                names no profile.
        """
        profile_id = parse_profile_id(token)
        if profile_id is None:
            raise ProfileNotResolvedError(token)
        profile = self.session.get(Profile, profile_id)
        if profile is None:
            raise ProfileNotResolvedError(token)
        return ProfileInfo.from_model(profile)
