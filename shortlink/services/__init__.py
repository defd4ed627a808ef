"""
Services module for business logic separation.

This module contains the classes that own the service state, keeping it
separate from API endpoints.
"""

from shortlink.services.code_store import ALPHABET, CodeStore

__all__ = ["ALPHABET", "CodeStore"]
