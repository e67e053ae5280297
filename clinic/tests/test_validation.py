import pytest

from clinic.models import Department, Doctor, Resource
from clinic.services.validation import (
    validate_department,
    validate_department_deletion,
    validate_doctor,
    validate_feedback,
    validate_resource,
    validate_unique_resource_name,
)


@pytest.mark.parametrize('name,specialty,ok', [
    ('Dr. Who', 'Cardiology', True),
    ('', 'Cardiology', False),
    ('Dr. Who', '  ', False),
    ('Al', 'Cardiology', False),
    ('Dr. Who', 'ENT', True),
    ('Dr. Who', 'GP', False),
])
def test_validate_doctor(name, specialty, ok):
    assert bool(validate_doctor(name, specialty)) is ok


def test_validation_failure_carries_message():
    result = validate_doctor('', 'Cardiology')
    assert not result.success
    assert result.message == 'Doctor name cannot be empty.'


@pytest.mark.django_db
def test_department_name_is_unique_case_insensitively():
    dept = Department.objects.create(name='Cardiology')
    assert not validate_department('cardiology')
    assert not validate_department('  CARDIOLOGY ')
    assert validate_department('Cardiology', exclude_id=dept.id)
    assert validate_department('Neurology')
    assert not validate_department('ER')


@pytest.mark.django_db
def test_department_with_doctors_cannot_be_deleted():
    dept = Department.objects.create(name='Cardiology')
    assert validate_department_deletion(dept.id)
    Doctor.objects.create(name='Dr. Who', specialty='Cardiology', department=dept)
    assert not validate_department_deletion(dept.id)


@pytest.mark.parametrize('name,type_,quantity,ok', [
    ('MRI Scanner', 'Equipment', 1, True),
    ('MRI Scanner', 'Equipment', 0, True),
    ('MRI Scanner', 'Equipment', -1, False),
    ('MRI Scanner', 'Equipment', 'many', False),
    ('', 'Equipment', 1, False),
    ('MRI Scanner', '', 1, False),
])
def test_validate_resource(name, type_, quantity, ok):
    assert bool(validate_resource(name, type_, quantity)) is ok


@pytest.mark.django_db
def test_resource_name_unique():
    r = Resource.objects.create(name='Ward Bed', type='Bed', quantity=4)
    assert not validate_unique_resource_name('ward bed')
    assert validate_unique_resource_name('Ward Bed', exclude_id=r.id)


@pytest.mark.parametrize('message,rating,ok', [
    ('Great', 1, True),
    ('Great', 5, True),
    ('Great', 0, False),
    ('Great', 6, False),
    ('Great', True, False),
    ('Great', '5', False),
    ('', 3, False),
    ('x' * 1000, 3, True),
    ('x' * 1001, 3, False),
])
def test_validate_feedback(message, rating, ok):
    assert bool(validate_feedback(message, rating)) is ok
