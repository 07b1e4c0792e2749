import datetime as dt
from decimal import Decimal

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from records.models import Consultation, Pet, User


@pytest.fixture(autouse=True)
def _reset_throttles():
    # Throttle counters live in the process-local cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def _clinic_zone(settings):
    settings.TIME_ZONE = 'Asia/Manila'


def authenticated(user) -> APIClient:
    """Return an APIClient authenticated as ``user``."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username='drvet', password='P@ssw0rd1', role='admin',
                                    name='Dr. Vet', email='vet@slvc.com')


@pytest.fixture
def owner(db):
    return User.objects.create_user(username='maria', password='P@ssw0rd1', role='client',
                                    name='Maria Santos', email='maria@example.com')


@pytest.fixture
def other_owner(db):
    return User.objects.create_user(username='jose', password='P@ssw0rd1', role='client',
                                    name='Jose Cruz', email='jose@example.com')


@pytest.fixture
def admin_api(admin_user):
    return authenticated(admin_user)


@pytest.fixture
def owner_api(owner):
    return authenticated(owner)


@pytest.fixture
def other_api(other_owner):
    return authenticated(other_owner)


@pytest.fixture
def pet(owner):
    return Pet.objects.create(client=owner, name='Bantay', age=3, species='canine', breed='Aspin',
                              colormark='brown')


@pytest.fixture
def other_pet(other_owner):
    return Pet.objects.create(client=other_owner, name='Mingming', age=2, species='feline',
                              breed='Puspin', colormark='calico')


@pytest.fixture
def consultation(pet):
    return Consultation.objects.create(pet=pet, consultation_date=dt.date(2024, 3, 1), weight=Decimal('12.50'),
                                       temperature=Decimal('38.50'), complaint='Limping')


@pytest.fixture
def other_consultation(other_pet):
    return Consultation.objects.create(pet=other_pet, consultation_date=dt.date(2024, 3, 2), complaint='Sneezing')
