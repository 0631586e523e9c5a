"""User directory for the household calendar.

Every household member logs in with an e-mail address and appears in the
calendar under a display name. Admins (``is_staff``) may book on behalf of
other members and edit or delete any booking.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CustomUserManager(BaseUserManager):
    """Manager that uses the e-mail address as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("E-Mail ist für die Anlage eines Benutzers erforderlich.")
        email = self.normalize_email(email)
        extra_fields.setdefault("display_name", email.split("@", 1)[0])

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """Household member who can book the property."""

    username = None
    email = models.EmailField(_("E-Mail"), unique=True)
    display_name = models.CharField(
        _("Anzeigename"),
        max_length=150,
        help_text=_("Name, unter dem Buchungen im Kalender erscheinen."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["display_name"]

    class Meta:
        verbose_name = _("Benutzer")
        verbose_name_plural = _("Benutzer")
        ordering = ["display_name"]

    def __str__(self) -> str:
        return f"{self.display_name} <{self.email}>"

    @property
    def is_admin(self) -> bool:
        return bool(self.is_staff or self.is_superuser)


# Short alias used across the apps and in tests
User = CustomUser
