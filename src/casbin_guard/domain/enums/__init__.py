from casbin_guard.domain.enums.logic import Logic

__all__ = ["Logic"]
