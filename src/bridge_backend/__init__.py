"""
Package: bridge_backend
Description: Bridge backend API authorization and database maintenance.
"""

__version__ = "0.1.0"
