"""Authentication provider protocol."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Auth subject extracted from a bearer token.

    Only the subject id is guaranteed; Supabase phone sign-ups carry no email.
    The ClinicMatch profile is resolved from ``id`` separately.
    """

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if the token is malformed or unsigned

        Raises:
            AuthenticationError: If the token is well-formed but expired
        """
        ...

    def create_token(self, user: TokenUser, expires_in: Optional[timedelta] = None) -> str:
        """Create a signed token for a user (local and test use)."""
        ...
