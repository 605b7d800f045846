import factory
from factory import Faker
from factory.django import DjangoModelFactory
from notifications.models import Notification


class NotificationFactory(DjangoModelFactory):
    class Meta:
        model = Notification

    user = factory.SubFactory("users.tests.factories.UserFactory")
    type = "system"
    title = Faker("sentence", nb_words=4)
    message = Faker("sentence")
