"""Mini README: Identity helpers exposing the current operator and role checks."""

from .provider import IdentityProvider, Role, UserProfile

__all__ = ["IdentityProvider", "Role", "UserProfile"]
