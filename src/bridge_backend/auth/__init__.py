"""
Module: auth
Description: Package initialization for request authorization.

This package contains authorization components:
- api_key: AuthPolicy and the allow/deny decision
- middleware: ApiKeyMiddleware applying the policy per request
"""

from .api_key import AuthPolicy, is_request_authorized
from .middleware import ApiKeyMiddleware

__all__ = [
    "AuthPolicy",
    "ApiKeyMiddleware",
    "is_request_authorized",
]
