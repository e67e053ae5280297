import pytest
from django.core.cache import cache

from clinic.models import Department, Doctor, Patient, User

from .helpers import FixedClock, aware


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters and analytics payloads share the default cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock():
    return FixedClock(aware(2025, 1, 1, 8, 0))


@pytest.fixture
def department(db):
    return Department.objects.create(name='Cardiology')


@pytest.fixture
def doctor(db, department):
    user = User.objects.create_user(username='dr_house', password='P@ssw0rd1', role=User.ROLE_DOCTOR)
    return Doctor.objects.create(user=user, name='Dr. House', specialty='Diagnostics', department=department)


@pytest.fixture
def other_doctor(db, department):
    user = User.objects.create_user(username='dr_wilson', password='P@ssw0rd1', role=User.ROLE_DOCTOR)
    return Doctor.objects.create(user=user, name='Dr. Wilson', specialty='Oncology', department=department)


@pytest.fixture
def patient(db):
    user = User.objects.create_user(username='patient1', password='P@ssw0rd1', role=User.ROLE_PATIENT)
    return Patient.objects.create(user=user, name='John Doe', age=40, gender='Male', email='john@example.com')


@pytest.fixture
def other_patient(db):
    user = User.objects.create_user(username='patient2', password='P@ssw0rd1', role=User.ROLE_PATIENT)
    return Patient.objects.create(user=user, name='Mary Major', age=35, gender='Female')


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username='admin1', password='P@ssw0rd1', role=User.ROLE_ADMIN)
