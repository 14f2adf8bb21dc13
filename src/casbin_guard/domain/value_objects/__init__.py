from casbin_guard.domain.value_objects.permission import Permission, parse_permission

__all__ = ["Permission", "parse_permission"]
