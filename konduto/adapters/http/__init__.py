"""HTTP adapters for the Konduto REST API."""

from .api_control import ApiControl

__all__ = ["ApiControl"]
