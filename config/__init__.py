"""Top-level package for Django configuration.

This package holds the Rentshare settings modules for each environment
and the WSGI and ASGI entry points.
"""
