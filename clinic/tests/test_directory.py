import pytest

from clinic.models import AuditEvent, Department, Doctor, Resource
from clinic.services import directory
from clinic.services.errors import NotFoundError

pytestmark = pytest.mark.django_db


def test_create_doctor_validates_before_saving(department, admin_user):
    doc, result = directory.create_doctor('Al', 'Cardiology', department.id, actor=admin_user)
    assert doc is None
    assert not result
    assert not Doctor.objects.exists()

    doc, result = directory.create_doctor('Dr. Grey', 'Surgery', department.id, actor=admin_user)
    assert result.success
    assert doc.department_id == department.id
    assert AuditEvent.objects.filter(action='doctor_create', user=admin_user, object_id=doc.id).exists()


def test_doctor_requires_existing_department():
    doc, result = directory.create_doctor('Dr. Grey', 'Surgery', 9999)
    assert doc is None
    assert result.message == 'Selected department does not exist.'


def test_update_and_delete_doctor(doctor):
    doc, result = directory.update_doctor(doctor.id, 'Dr. Gregory House', 'Nephrology', None)
    assert result
    doctor.refresh_from_db()
    assert (doctor.name, doctor.specialty, doctor.department_id) == ('Dr. Gregory House', 'Nephrology', None)
    directory.delete_doctor(doctor.id)
    assert not Doctor.objects.filter(pk=doctor.id).exists()
    with pytest.raises(NotFoundError):
        directory.delete_doctor(doctor.id)


def test_department_lifecycle():
    dept, result = directory.create_department('Neurology')
    assert result
    dup, result = directory.create_department('NEUROLOGY')
    assert dup is None and not result

    renamed, result = directory.rename_department(dept.id, 'Neurosurgery')
    assert renamed.name == 'Neurosurgery'
    assert directory.delete_department(dept.id)
    assert not Department.objects.exists()


def test_department_in_use_is_kept(doctor, department):
    result = directory.delete_department(department.id)
    assert not result
    assert Department.objects.filter(pk=department.id).exists()


def test_resource_lifecycle():
    res, result = directory.create_resource('Ward Bed', 'Bed', 10)
    assert result and res.quantity == 10
    bad, result = directory.create_resource('Gauze', 'Supply', -1)
    assert bad is None and result.message == 'Quantity cannot be negative.'
    dup, result = directory.create_resource('ward bed', 'Bed', 1)
    assert dup is None and not result

    res, result = directory.update_resource(res.id, 'Ward Bed', 'Bed', 0)
    assert result and res.quantity == 0
    directory.delete_resource(res.id)
    assert not Resource.objects.exists()


def test_update_unknown_resource():
    with pytest.raises(NotFoundError):
        directory.update_resource(4242, 'Ward Bed', 'Bed', 1)


def test_markup_wrapped_department_name_is_a_duplicate(department):
    dept, result = directory.create_department('<i>cardiology</i>')
    assert dept is None
    assert result.message == 'A department with this name already exists.'
    assert list(Department.objects.values_list('name', flat=True)) == ['Cardiology']


def test_names_are_validated_after_markup_removal(department):
    doc, result = directory.create_doctor('<b>Al</b>', 'Cardiology', department.id)
    assert doc is None
    assert result.message == 'Doctor name must be at least 3 characters.'

    doc, result = directory.create_doctor('<b>Dr. Grey</b>', ' Surgery ', department.id)
    assert result
    doc.refresh_from_db()
    assert (doc.name, doc.specialty) == ('Dr. Grey', 'Surgery')


def test_markup_only_resource_name_is_rejected():
    res, result = directory.create_resource('<script></script>', 'Bed', 1)
    assert res is None
    assert result.message == 'Resource name cannot be empty.'
    assert not Resource.objects.exists()
