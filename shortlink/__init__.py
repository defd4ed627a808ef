"""
In-memory URL shortener.

Maps long URLs to 8-character base62 codes and redirects codes back to
their targets over HTTP.
"""

__version__ = "1.0.0"
