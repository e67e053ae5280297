"""
Admin-managed records: doctors, departments and resources.

Writes run the matching validation rule first and hand the result back
alongside the instance, so the caller can show the message inline:
``(instance, ValidationResult)`` with ``instance`` set to ``None`` when
validation failed.  Unknown ids raise :class:`NotFoundError`.
"""
from __future__ import annotations

from typing import Optional, Tuple

from django.db import transaction

from clinic.models import Department, Doctor, Resource
from clinic.services.audit import log_action
from clinic.services.errors import NotFoundError
from clinic.services.text import clean_text
from clinic.services.validation import (
    ValidationResult,
    validate_department,
    validate_department_deletion,
    validate_department_exists,
    validate_doctor,
    validate_resource,
    validate_unique_resource_name,
)


def _get(model, pk):
    obj = model.objects.filter(pk=pk).first()
    if obj is None:
        raise NotFoundError(f'{model.__name__} not found.')
    return obj


# ---------------------------------------------------------------------------
# Doctors
# ---------------------------------------------------------------------------

def _check_doctor(name, specialty, department_id) -> ValidationResult:
    result = validate_doctor(name, specialty)
    if result and department_id:
        result = validate_department_exists(department_id)
    return result


@transaction.atomic
def create_doctor(name: str, specialty: str, department_id: Optional[int] = None, *,
                  actor=None) -> Tuple[Optional[Doctor], ValidationResult]:
    name, specialty = clean_text(name), clean_text(specialty)
    result = _check_doctor(name, specialty, department_id)
    if not result:
        return None, result
    doctor = Doctor.objects.create(name=name, specialty=specialty, department_id=department_id or None)
    log_action(user=actor, action='doctor_create', object_type='doctor', object_id=doctor.id,
               detail={'name': doctor.name})
    return doctor, result


@transaction.atomic
def update_doctor(doctor_id: int, name: str, specialty: str, department_id: Optional[int] = None, *,
                  actor=None) -> Tuple[Optional[Doctor], ValidationResult]:
    doctor = _get(Doctor, doctor_id)
    name, specialty = clean_text(name), clean_text(specialty)
    result = _check_doctor(name, specialty, department_id)
    if not result:
        return None, result
    doctor.name = name
    doctor.specialty = specialty
    doctor.department_id = department_id or None
    doctor.save(update_fields=['name', 'specialty', 'department'])
    log_action(user=actor, action='doctor_update', object_type='doctor', object_id=doctor.id,
               detail={'name': doctor.name})
    return doctor, result


def delete_doctor(doctor_id: int, *, actor=None) -> None:
    doctor = _get(Doctor, doctor_id)
    name = doctor.name
    doctor.delete()
    log_action(user=actor, action='doctor_delete', object_type='doctor', object_id=doctor_id,
               detail={'name': name})


def list_doctors(department_id: Optional[int] = None) -> list[Doctor]:
    qs = Doctor.objects.select_related('department')
    if department_id:
        qs = qs.filter(department_id=department_id)
    return list(qs.order_by('name', 'id'))


def format_doctor(d: Doctor) -> dict:
    return {
        'id': d.id,
        'name': d.name,
        'specialty': d.specialty,
        'departmentId': d.department_id,
        'departmentName': d.department.name if d.department_id and Doctor.department.is_cached(d) else None,
    }


# ---------------------------------------------------------------------------
# Departments
# ---------------------------------------------------------------------------

@transaction.atomic
def create_department(name: str, *, actor=None) -> Tuple[Optional[Department], ValidationResult]:
    name = clean_text(name)
    result = validate_department(name)
    if not result:
        return None, result
    dept = Department.objects.create(name=name)
    log_action(user=actor, action='department_create', object_type='department', object_id=dept.id,
               detail={'name': dept.name})
    return dept, result


@transaction.atomic
def rename_department(department_id: int, name: str, *, actor=None) -> Tuple[Optional[Department], ValidationResult]:
    dept = _get(Department, department_id)
    name = clean_text(name)
    result = validate_department(name, exclude_id=dept.id)
    if not result:
        return None, result
    dept.name = name
    dept.save(update_fields=['name'])
    log_action(user=actor, action='department_update', object_type='department', object_id=dept.id,
               detail={'name': dept.name})
    return dept, result


@transaction.atomic
def delete_department(department_id: int, *, actor=None) -> ValidationResult:
    dept = _get(Department, department_id)
    result = validate_department_deletion(dept.id)
    if not result:
        return result
    name = dept.name
    dept.delete()
    log_action(user=actor, action='department_delete', object_type='department', object_id=department_id,
               detail={'name': name})
    return result


def list_departments() -> list[Department]:
    return list(Department.objects.order_by('name', 'id'))


def format_department(d: Department) -> dict:
    return {'id': d.id, 'name': d.name}


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

def _check_resource(name, type, quantity, exclude_id=None) -> ValidationResult:
    result = validate_resource(name, type, quantity)
    if result:
        result = validate_unique_resource_name(name, exclude_id=exclude_id)
    return result


@transaction.atomic
def create_resource(name: str, type: str, quantity: int, *, actor=None) -> Tuple[Optional[Resource], ValidationResult]:
    name, type = clean_text(name), clean_text(type)
    result = _check_resource(name, type, quantity)
    if not result:
        return None, result
    res = Resource.objects.create(name=name, type=type, quantity=int(quantity))
    log_action(user=actor, action='resource_create', object_type='resource', object_id=res.id,
               detail={'name': res.name, 'quantity': res.quantity})
    return res, result


@transaction.atomic
def update_resource(resource_id: int, name: str, type: str, quantity: int, *,
                    actor=None) -> Tuple[Optional[Resource], ValidationResult]:
    res = _get(Resource, resource_id)
    name, type = clean_text(name), clean_text(type)
    result = _check_resource(name, type, quantity, exclude_id=res.id)
    if not result:
        return None, result
    res.name = name
    res.type = type
    res.quantity = int(quantity)
    res.save(update_fields=['name', 'type', 'quantity'])
    log_action(user=actor, action='resource_update', object_type='resource', object_id=res.id,
               detail={'name': res.name, 'quantity': res.quantity})
    return res, result


def delete_resource(resource_id: int, *, actor=None) -> None:
    res = _get(Resource, resource_id)
    name = res.name
    res.delete()
    log_action(user=actor, action='resource_delete', object_type='resource', object_id=resource_id,
               detail={'name': name})


def list_resources() -> list[Resource]:
    return list(Resource.objects.order_by('type', 'name'))


def format_resource(r: Resource) -> dict:
    return {'id': r.id, 'name': r.name, 'type': r.type, 'quantity': r.quantity}
