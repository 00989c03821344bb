"""
Account models.

This module defines the account the settlement engine works with:
- User: Custom user model with email-based authentication
- Profile: Account data the engine needs (OneToOne with User)

The Profile is "the account" everywhere else in the codebase: payment
metadata carries its id, subscriptions hang off it, orders name a buyer and
a seller profile, and push notifications are addressed to it.

Related files:
    - managers.py: Custom user manager for email-based creation
    - signals.py: Auto-create profile on user creation
"""

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils.text import slugify

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel
from authentication.managers import UserManager


class User(UUIDPrimaryKeyMixin, AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Fields:
        id: UUID primary key (shared with the Profile)
        email: Primary identifier, unique, used for login
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )
    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email


class Profile(BaseModel):
    """
    Account profile.

    Fields:
        user: OneToOne link to User (also serves as primary key)
        display_name: Name shown to other users (e.g. "X started following you")
        slug: Store slug used in deep links
        push_token: Expo push token of the account's device, if registered
        payout_recipient_code: Paystack transfer recipient for seller payouts

    Note:
        Profile is automatically created via signals when a User is created.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        primary_key=True,
        help_text="User this profile belongs to",
    )
    display_name = models.CharField(
        max_length=150,
        blank=True,
        help_text="Public display name",
    )
    slug = models.SlugField(
        max_length=160,
        blank=True,
        db_index=True,
        help_text="Store slug used in links",
    )
    push_token = models.CharField(
        max_length=255,
        blank=True,
        help_text="Expo push token, empty when the device never registered",
    )
    payout_recipient_code = models.CharField(
        max_length=64,
        blank=True,
        help_text="Paystack transfer recipient code (RCP_...)",
    )

    class Meta:
        db_table = "authentication_profile"
        verbose_name = "profile"
        verbose_name_plural = "profiles"

    def __str__(self):
        return self.display_name or str(self.user)

    @property
    def name(self) -> str:
        """Name used in notification texts."""
        return self.display_name or self.user.email.split("@")[0]

    def save(self, *args, **kwargs):
        if not self.slug and self.display_name:
            self.slug = slugify(self.display_name)
        super().save(*args, **kwargs)
