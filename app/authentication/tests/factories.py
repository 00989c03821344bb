"""
Factory Boy factories for account models.

Usage:
    from authentication.tests.factories import UserFactory, ProfileFactory

    # Buyer with a device registered for push
    buyer = ProfileFactory(push_token="ExponentPushToken[abc]")

    # Seller who can receive payouts
    seller = ProfileFactory(seller=True)
"""

import factory

from authentication.models import Profile, User


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    The post_save signal creates an empty Profile for every user.
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(
            email=kwargs.pop("email"), password=password, **kwargs
        )


class ProfileFactory(factory.django.DjangoModelFactory):
    """
    Factory for Profile.

    Reuses the profile the signal created for the user and fills it in.

    Traits:
        seller: Registered Paystack transfer recipient
    """

    class Meta:
        model = Profile
        skip_postgeneration_save = True

    user = factory.SubFactory(UserFactory)
    display_name = factory.Sequence(lambda n: f"Shop {n}")
    push_token = factory.Sequence(lambda n: f"ExponentPushToken[token-{n}]")
    payout_recipient_code = ""

    class Params:
        seller = factory.Trait(
            payout_recipient_code=factory.Sequence(lambda n: f"RCP_{n:08d}"),
        )

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        profile, _ = model_class.objects.get_or_create(user=kwargs.pop("user"))
        for field, value in kwargs.items():
            setattr(profile, field, value)
        profile.save()
        return profile
