"""Storefront backend: accounts, session tokens and role-gated routes."""

__all__ = ["__version__"]

__version__ = "0.1.0"
