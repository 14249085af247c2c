"""Actor resolution exceptions."""

from __future__ import annotations


class AuthConfigurationError(Exception):
    """Raised when actor resolution is misconfigured."""
