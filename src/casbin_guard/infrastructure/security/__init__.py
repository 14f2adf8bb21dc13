from casbin_guard.infrastructure.security.jwt_service import JWTService

__all__ = ["JWTService"]
