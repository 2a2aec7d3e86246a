from src.domain.entities import UserProfile
from src.rules.models import Rules

SUBMIT_POST = "posts:submit"


class PolicyEngine:
    def __init__(self, rules: Rules):
        self.rules = rules

    def check_permission(self, user: UserProfile | None, action: str) -> bool:
        """
        Check if the user's role allows the action.

        Order of precedence:
        1. Public Permissions (Global)
        2. Role-Based Access Control (RBAC)

        The role always comes from the identity store profile, never from
        request data.
        """
        # 1. Public Permissions
        if action in self.rules.rbac.public_permissions:
            return True

        # If not public, we need a user with a role
        if not user or not user.role:
            return False

        # 2. RBAC
        allowed_actions = self.rules.rbac.roles.get(user.role, [])
        if "*" in allowed_actions or action in allowed_actions:
            return True

        # Scoped wildcards (e.g. "posts:*" matches "posts:submit")
        if ":" in action:
            scope = action.split(":")[0]
            if f"{scope}:*" in allowed_actions:
                return True

        return False

    def can_submit(self, user: UserProfile | None) -> bool:
        return self.check_permission(user, SUBMIT_POST)
