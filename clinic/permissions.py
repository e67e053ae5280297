"""
Role based permission classes and helpers to resolve the caller's record.
"""
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import BasePermission

from clinic.models import Doctor, Patient, User


def _has_role(request, role: str) -> bool:
    user = getattr(request, "user", None)
    return bool(user and user.is_authenticated and getattr(user, "role", None) == role)


class IsAdminRole(BasePermission):
    """Allow access only to users with the admin role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, User.ROLE_ADMIN)


class IsPatientRole(BasePermission):
    """Allow access only to users with the patient role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, User.ROLE_PATIENT)


class IsDoctorRole(BasePermission):
    """Allow access only to users with the doctor role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, User.ROLE_DOCTOR)


class IsDoctorOrPatient(BasePermission):
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, User.ROLE_DOCTOR) or _has_role(request, User.ROLE_PATIENT)


def patient_for(user) -> Patient:
    """Return the patient record linked to ``user`` or deny the request."""
    patient = Patient.objects.filter(user=user).first()
    if patient is None:
        raise PermissionDenied('No patient record is linked to this account.')
    return patient


def doctor_for(user) -> Doctor:
    doctor = Doctor.objects.filter(user=user).first()
    if doctor is None:
        raise PermissionDenied('No doctor record is linked to this account.')
    return doctor
