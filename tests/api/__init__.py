"""API tests package.

Exercises the authorization dependencies over HTTP with TestClient,
using real Casbin enforcers loaded from config/.
"""
