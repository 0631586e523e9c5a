"""Users app package.

Household members, their display names and the admin flag consumed by the
booking resolver for attribution and permission checks. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
