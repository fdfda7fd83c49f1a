"""
Module: config
Description: Package initialization for application configuration.

- settings: pydantic-settings Settings and the global settings instance
"""

__all__ = []
