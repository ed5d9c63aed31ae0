"""Authentication modules for the observation catalog.

This package provides authenticator implementations:
- TokenAuthenticator: static API token sent on every catalog request

All authenticators implement the Authenticator interface and are registered
for use throughout satnogsctl.
"""

from satnogsctl.auth.base import Authenticator
from satnogsctl.auth.token import TokenAuthenticator
from satnogsctl.registry import Registry

registry = Registry[Authenticator](name="authenticator")
registry.register("token", TokenAuthenticator)


__all__ = ["Authenticator", "TokenAuthenticator", "registry"]
