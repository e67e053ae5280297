"""
Validation rules for admin-managed records and patient feedback.

Every rule returns a :class:`ValidationResult` instead of raising, so
callers can show the message inline.  ``validate_feedback`` is the only
feedback rule in the code base; the feedback aggregator calls it too.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from clinic.models import Department, Doctor, Resource

MIN_NAME_LENGTH = 3
MAX_FEEDBACK_LENGTH = 1000
MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class ValidationResult:
    success: bool
    message: str = ''

    @classmethod
    def ok(cls) -> 'ValidationResult':
        return cls(True)

    @classmethod
    def fail(cls, message: str) -> 'ValidationResult':
        return cls(False, message)

    def __bool__(self) -> bool:
        return self.success


def _blank(value: Optional[str]) -> bool:
    return not (value or '').strip()


def validate_doctor(name: Optional[str], specialty: Optional[str]) -> ValidationResult:
    if _blank(name):
        return ValidationResult.fail('Doctor name cannot be empty.')
    if _blank(specialty):
        return ValidationResult.fail('Doctor specialty cannot be empty.')
    if len(name.strip()) < MIN_NAME_LENGTH:
        return ValidationResult.fail(f'Doctor name must be at least {MIN_NAME_LENGTH} characters.')
    if len(specialty.strip()) < MIN_NAME_LENGTH:
        return ValidationResult.fail(f'Specialty must be at least {MIN_NAME_LENGTH} characters.')
    return ValidationResult.ok()


def validate_department(name: Optional[str], *, exclude_id: Optional[int] = None,
                        using: Optional[str] = None) -> ValidationResult:
    """Check a department name; ``exclude_id`` skips the record being edited."""
    if _blank(name):
        return ValidationResult.fail('Department name cannot be empty.')
    name = name.strip()
    if len(name) < MIN_NAME_LENGTH:
        return ValidationResult.fail(f'Department name must be at least {MIN_NAME_LENGTH} characters.')
    qs = Department.objects.db_manager(using).filter(name__iexact=name)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        return ValidationResult.fail('A department with this name already exists.')
    return ValidationResult.ok()


def validate_resource(name: Optional[str], type: Optional[str], quantity) -> ValidationResult:
    if _blank(name):
        return ValidationResult.fail('Resource name cannot be empty.')
    if _blank(type):
        return ValidationResult.fail('Resource type cannot be empty.')
    try:
        quantity = int(quantity)
    except (TypeError, ValueError):
        return ValidationResult.fail('Quantity must be a whole number.')
    if quantity < 0:
        return ValidationResult.fail('Quantity cannot be negative.')
    return ValidationResult.ok()


def validate_unique_resource_name(name: str, *, exclude_id: Optional[int] = None,
                                  using: Optional[str] = None) -> ValidationResult:
    qs = Resource.objects.db_manager(using).filter(name__iexact=(name or '').strip())
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        return ValidationResult.fail('A resource with this name already exists.')
    return ValidationResult.ok()


def validate_department_exists(department_id: Optional[int], *, using: Optional[str] = None) -> ValidationResult:
    if department_id and Department.objects.db_manager(using).filter(pk=department_id).exists():
        return ValidationResult.ok()
    return ValidationResult.fail('Selected department does not exist.')


def validate_department_deletion(department_id: int, *, using: Optional[str] = None) -> ValidationResult:
    if Doctor.objects.db_manager(using).filter(department_id=department_id).exists():
        return ValidationResult.fail('Cannot delete department: doctors are assigned to it.')
    return ValidationResult.ok()


def validate_feedback(message: Optional[str], rating) -> ValidationResult:
    if _blank(message):
        return ValidationResult.fail('Feedback message cannot be empty.')
    if len(message) > MAX_FEEDBACK_LENGTH:
        return ValidationResult.fail(f'Feedback message cannot exceed {MAX_FEEDBACK_LENGTH} characters.')
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        return ValidationResult.fail(f'Rating must be between {MIN_RATING} and {MAX_RATING}.')
    return ValidationResult.ok()


def validate_test_result(test_name: Optional[str], result: Optional[str]) -> ValidationResult:
    if _blank(test_name):
        return ValidationResult.fail('Test name cannot be empty.')
    if _blank(result):
        return ValidationResult.fail('Test result cannot be empty.')
    return ValidationResult.ok()
