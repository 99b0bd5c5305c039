"""
路由访问规则

每条路由声明一种访问规则：
- public: 不需要令牌
- authenticated: 需要有效的访问令牌
- roles: 需要有效的访问令牌，并且拥有任意一个指定角色
"""

from typing import FrozenSet


class AccessRule:
    """路由访问规则 (tagged variant)"""

    PUBLIC = 'public'
    AUTHENTICATED = 'authenticated'
    ROLES = 'roles'

    KINDS = (PUBLIC, AUTHENTICATED, ROLES)

    def __init__(self, kind: str, roles=()):
        if kind not in self.KINDS:
            raise ValueError(f"Unknown access rule kind: {kind}")
        if kind == self.ROLES and not roles:
            raise ValueError("A role rule needs at least one role")
        self.kind = kind
        self.roles: FrozenSet[str] = frozenset(roles) if kind == self.ROLES else frozenset()

    @classmethod
    def public(cls):
        return cls(cls.PUBLIC)

    @classmethod
    def authenticated(cls):
        return cls(cls.AUTHENTICATED)

    @classmethod
    def require_roles(cls, *roles):
        return cls(cls.ROLES, roles)

    @property
    def requires_authentication(self):
        return self.kind != self.PUBLIC

    def allows_roles(self, role_names) -> bool:
        """角色检查，非 roles 规则总是通过"""
        if self.kind != self.ROLES:
            return True
        return bool(self.roles & set(role_names))

    def __eq__(self, other):
        if not isinstance(other, AccessRule):
            return NotImplemented
        return self.kind == other.kind and self.roles == other.roles

    def __hash__(self):
        return hash((self.kind, self.roles))

    def __repr__(self):
        if self.kind == self.ROLES:
            return f"AccessRule(roles={sorted(self.roles)})"
        return f"AccessRule({self.kind})"
