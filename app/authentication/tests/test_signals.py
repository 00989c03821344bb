"""
Tests for authentication signals.
"""

import pytest

from authentication.models import Profile
from authentication.tests.factories import UserFactory


@pytest.mark.django_db
class TestCreateUserProfileSignal:
    def test_profile_created_when_user_is_created(self):
        user = UserFactory()

        assert Profile.objects.filter(user=user).exists()

    def test_profile_not_duplicated_on_user_update(self):
        user = UserFactory()
        user.is_staff = True
        user.save()

        assert Profile.objects.filter(user=user).count() == 1

    def test_new_profile_has_no_push_token_or_recipient(self):
        user = UserFactory()

        assert user.profile.push_token == ""
        assert user.profile.payout_recipient_code == ""
