"""Encoding helpers shared by messages and claims."""

from .sign_encoder import SignEncoder

__all__ = ["SignEncoder"]
