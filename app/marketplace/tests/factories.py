"""
Factory Boy factories for marketplace models.
"""

from decimal import Decimal

import factory

from authentication.tests.factories import ProfileFactory
from marketplace.models import (
    Follow,
    Product,
    ProductComment,
    ProductLike,
    ProductView,
    ProfileView,
)


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product
        skip_postgeneration_save = True

    seller = factory.SubFactory(ProfileFactory)
    name = factory.Sequence(lambda n: f"Vintage Jacket {n}")
    price = Decimal("15000.00")


class ProductLikeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductLike

    product = factory.SubFactory(ProductFactory)
    user = factory.SubFactory(ProfileFactory)


class ProductCommentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductComment

    product = factory.SubFactory(ProductFactory)
    user = factory.SubFactory(ProfileFactory)
    content = "Is this still available?"


class FollowFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Follow

    follower = factory.SubFactory(ProfileFactory)
    following = factory.SubFactory(ProfileFactory)


class ProductViewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductView

    product = factory.SubFactory(ProductFactory)
    viewer = factory.SubFactory(ProfileFactory)


class ProfileViewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProfileView

    profile = factory.SubFactory(ProfileFactory)
    viewer = factory.SubFactory(ProfileFactory)
