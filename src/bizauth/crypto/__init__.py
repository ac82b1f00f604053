"""Digest and randomness providers."""

from bizauth.crypto.base import DigestProvider
from bizauth.crypto.system import SystemDigest

__all__ = ["DigestProvider", "SystemDigest"]
