"""Session providers supplying bearer tokens for the events API."""
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


class SessionProvider:
    """Source of the bearer token attached to authenticated requests."""

    def get_token(self) -> Optional[str]:
        """
        Return the current session token.

        Returns:
            Token string, or None when there is no authenticated session
        """
        raise NotImplementedError


class StaticSessionProvider(SessionProvider):
    """Provider holding a fixed token."""

    def __init__(self, token: Optional[str]):
        self.token = token

    def get_token(self) -> Optional[str]:
        return self.token or None


class EnvironmentSessionProvider(SessionProvider):
    """Provider reading the token from an environment variable on each call."""

    DEFAULT_VARIABLE = 'COUNTDOWN_AUTH_TOKEN'

    def __init__(self, variable: str = DEFAULT_VARIABLE):
        self.variable = variable

    def get_token(self) -> Optional[str]:
        token = os.environ.get(self.variable, '').strip()
        if not token:
            logger.debug(f"No session token in {self.variable}")
            return None
        return token
