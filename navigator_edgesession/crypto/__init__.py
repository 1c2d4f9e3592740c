"""Signing primitives for the session cookie."""
from .keys import KeyMaterial
from .signature import Signature

__all__ = ("KeyMaterial", "Signature")
