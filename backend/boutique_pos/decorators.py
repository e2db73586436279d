# Overview: Role decorators for service methods bound to a SessionService.

from functools import wraps

from .services import permission_service


def require_role(allowed_roles, action: str):
    """
    Require the bound session's role to be in `allowed_roles`.

    The decorated method's instance must expose `self.session`
    (a SessionService). Raises PermissionDeniedError otherwise.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(self, *args, **kwargs):
            permission_service.require_role(self.session.role, allowed_roles, action)
            return f(self, *args, **kwargs)

        return decorated_function

    return decorator
