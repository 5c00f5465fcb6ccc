"""External adapters for the Konduto SDK.

This package contains the implementations of the core port interfaces
that depend on third-party libraries.

Adapter Organization:

- http/: httpx-based access to the Konduto REST API
"""
