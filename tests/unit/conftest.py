"""
Unit test fixtures. Use mocks and httpx.MockTransport; no real DB or gateway.
"""
