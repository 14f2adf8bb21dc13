"""Test suite for casbin-guard.

- unit/: adapters, value objects and settings in isolation
- api/: FastAPI dependencies and the example app through TestClient
"""
