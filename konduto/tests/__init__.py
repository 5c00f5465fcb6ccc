"""Test suite for the Konduto SDK.

Organized into three categories:

1. core/: Unit tests for validation, models and the order service
   - No network access, uses the in-memory FakeApiPort

2. adapters/: Tests for the httpx adapter
   - Uses httpx.MockTransport in place of the network

3. fakes/: Port implementations for testing
"""
