import logging

from satnogsctl.auth.base import Authenticator
from satnogsctl.errors import ConfigurationError

log = logging.getLogger(__name__)

# the catalog expects a colon right after the scheme, e.g. "Bearer: abc123"
AUTH_SCHEME = "Bearer:"


class TokenAuthenticator(Authenticator):
    """Static API token authentication for the SatNOGS Network catalog."""

    def __init__(self, token: str, scheme: str = AUTH_SCHEME):
        if not token:
            raise ConfigurationError("API token must be set")
        self.token = token
        self.scheme = scheme
        self._authenticated = False

    def authenticate(self) -> bool:
        # nothing to exchange, the token is used as-is
        self._authenticated = bool(self.token)
        log.debug("Using static API token authentication")
        return self._authenticated

    def ensure_authenticated(self, refresh: bool = False) -> bool:
        if not self._authenticated or refresh:
            return self.authenticate()
        return True

    @property
    def auth_headers(self) -> dict[str, str]:
        """Get headers carrying the API token."""
        if not self.ensure_authenticated():
            raise ConfigurationError("Failed to authenticate with the catalog")
        return {"Authorization": f"{self.scheme} {self.token}"}
