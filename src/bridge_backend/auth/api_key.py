"""
Module: api_key.py
Description: API key and trusted-origin authorization policy.

Decides whether an inbound request may proceed, based on a shared
API key sent in the x-api-key header or, as a fallback, on the
request's Origin/Referer matching a configured list of trusted
base URLs.

Key Components:
- AuthPolicy: Immutable policy (API key + allowed origin bases)
- matches_allowed_base(): Exact or base + "/" prefix match
- is_allowed_origin(): Origin/Referer fallback check
- is_request_authorized(): Full decision, first match wins

Dependencies: pydantic, secrets, typing
Author: Bridge Backend Team
"""

import secrets
from typing import Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

API_KEY_HEADER = 'x-api-key'
ORIGIN_HEADER = 'origin'
REFERER_HEADER = 'referer'


class AuthPolicy(BaseModel):
    """
    Authorization policy applied to every protected request.

    Attributes:
        api_key: Shared secret; None disables authorization entirely
        allowed_origins: Lower-cased base URLs trusted without a key
    """

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = Field(
        default=None,
        description="Shared secret expected in the x-api-key header"
    )
    allowed_origins: Tuple[str, ...] = Field(
        default=(),
        description="Base URLs whose Origin/Referer is trusted"
    )

    @field_validator('api_key')
    @classmethod
    def blank_key_disables(cls, v: Optional[str]) -> Optional[str]:
        """An empty key is the same as no key."""
        return v or None

    @field_validator('allowed_origins', mode='before')
    @classmethod
    def normalize_origins(cls, v: Optional[Iterable[str]]) -> Tuple[str, ...]:
        """Lower-case and trim bases, dropping blanks."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        return tuple(base.strip().lower() for base in v if base and base.strip())

    @property
    def enabled(self) -> bool:
        """True when an API key is configured."""
        return self.api_key is not None

    @classmethod
    def from_settings(cls, settings) -> "AuthPolicy":
        """
        Build a policy from the application settings.

        Args:
            settings: Settings instance exposing api_key and api_allowed_origins

        Returns:
            AuthPolicy snapshot of the configured values
        """
        return cls(
            api_key=settings.api_key,
            allowed_origins=settings.api_allowed_origins,
        )


def matches_allowed_base(value: Optional[str], base: str) -> bool:
    """
    Check a header value against one allowed base URL.

    The value matches when it equals the base or continues it with a
    path separator, so "https://a.com.evil.com" never matches
    "https://a.com".

    Args:
        value: Lower-cased Origin or Referer header value
        base: Lower-cased allowed base URL

    Returns:
        True if value equals base or starts with base + "/"
    """
    if not value or not base:
        return False
    return value == base or value.startswith(base + '/')


def is_allowed_origin(policy: AuthPolicy, headers: Mapping[str, str]) -> bool:
    """
    Check the request's Origin and Referer against the policy's bases.

    Args:
        policy: Authorization policy
        headers: Request headers (case-insensitive mapping or lower-cased keys)

    Returns:
        True if either header matches any allowed base
    """
    if not policy.allowed_origins:
        return False

    origin = (headers.get(ORIGIN_HEADER) or '').lower()
    referer = (headers.get(REFERER_HEADER) or '').lower()

    return any(
        matches_allowed_base(origin, base) or matches_allowed_base(referer, base)
        for base in policy.allowed_origins
    )


def is_valid_api_key(policy: AuthPolicy, supplied_key: Optional[str]) -> bool:
    """Exact comparison of the supplied key against the configured one."""
    if policy.api_key is None or supplied_key is None:
        return False
    # Constant-time comparison to prevent timing attacks
    return secrets.compare_digest(
        supplied_key.encode('utf-8'),
        policy.api_key.encode('utf-8')
    )


def is_request_authorized(policy: AuthPolicy, headers: Mapping[str, str]) -> bool:
    """
    Decide whether a request may proceed.

    Evaluated in order, first match wins:
    1. No API key configured: allow.
    2. x-api-key header equal to the configured key: allow.
    3. Origin or Referer matching an allowed base: allow.
    Anything else is denied.

    Args:
        policy: Authorization policy
        headers: Request headers

    Returns:
        True to allow the request, False to deny it

    Example:
        >>> policy = AuthPolicy(api_key="secret123", allowed_origins=["https://app.example.com"])
        >>> is_request_authorized(policy, {"origin": "https://app.example.com/dashboard"})
        True
        >>> is_request_authorized(policy, {"x-api-key": "wrong"})
        False
    """
    if not policy.enabled:
        return True

    if is_valid_api_key(policy, headers.get(API_KEY_HEADER)):
        return True

    return is_allowed_origin(policy, headers)
