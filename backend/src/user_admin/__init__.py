"""Cognito user administration Lambda."""

__version__ = "1.0.0"
