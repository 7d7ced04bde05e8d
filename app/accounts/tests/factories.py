"""
Factory Boy factories for account models.

Usage:
    from accounts.tests.factories import UserFactory

    user = UserFactory()
    staff = UserFactory(is_staff=True)
"""

import factory

from accounts.models import User


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Goes through UserManager.create_user() so the password is hashed and
    the profile signal fires. Default password: "TestPass123!".
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    email_verified = False
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(
            email=kwargs.pop("email"), password=password, **kwargs
        )
