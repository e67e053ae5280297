"""
Database models for the MediScope front desk.

These models capture the records the front desk works with: patients,
doctors, departments, appointments, feedback, test results, clinical
resources and the analytics feed.  Identity lives on :class:`User`;
domain records link to it but never depend on it for their own rules.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q


class User(AbstractUser):
    """Custom user model carrying the front-desk role.

    Roles are 'patient', 'doctor' and 'admin'.  A patient or doctor user
    is linked to its domain record through ``patient_profile`` /
    ``doctor_profile``.
    """
    ROLE_PATIENT = 'patient'
    ROLE_DOCTOR = 'doctor'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_PATIENT, 'Patient'),
        (ROLE_DOCTOR, 'Doctor'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_PATIENT)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Department(models.Model):
    """A hospital department (e.g. Cardiology).

    Names are unique case-insensitively; the rule is enforced by
    :func:`clinic.services.validation.validate_department`.
    """
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class Patient(models.Model):
    user = models.OneToOneField(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='patient_profile'
    )
    name = models.CharField(max_length=255)
    age = models.PositiveIntegerField(null=True, blank=True)
    gender = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class Doctor(models.Model):
    user = models.OneToOneField(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='doctor_profile'
    )
    name = models.CharField(max_length=255)
    specialty = models.CharField(max_length=255)
    department = models.ForeignKey(
        Department, null=True, blank=True, on_delete=models.SET_NULL, related_name='doctors'
    )

    def __str__(self) -> str:
        return f"{self.name} ({self.specialty})"


class Appointment(models.Model):
    """A booking between one patient and one doctor at an exact time.

    At most one *Scheduled* appointment may exist per (doctor, date);
    the partial unique constraint below backs up the locked
    check-then-insert done by the scheduler.
    """
    STATUS_SCHEDULED = 'Scheduled'
    STATUS_CONFIRMED = 'Confirmed'
    STATUS_COMPLETED = 'Completed'
    STATUS_CANCELLED = 'Cancelled'
    STATUS_REJECTED = 'Rejected'
    STATUS_CHOICES = [
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_CONFIRMED, 'Confirmed'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_REJECTED, 'Rejected'),
    ]
    TERMINAL_STATUSES = frozenset({STATUS_COMPLETED, STATUS_CANCELLED, STATUS_REJECTED})

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='appointments')
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='appointments')
    date = models.DateTimeField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_SCHEDULED, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['doctor', 'date'],
                condition=Q(status='Scheduled'),
                name='uniq_scheduled_doctor_slot',
            ),
        ]
        indexes = [
            models.Index(fields=['doctor', 'date'], name='appt_doctor_date_idx'),
            models.Index(fields=['patient', 'date'], name='appt_patient_date_idx'),
        ]

    @property
    def is_terminal(self) -> bool:
        return self.status in self.TERMINAL_STATUSES

    def __str__(self) -> str:
        return f"appt {self.id} d={self.doctor_id} p={self.patient_id} @ {self.date:%F %H:%M} [{self.status}]"


class Feedback(models.Model):
    """A patient's rating of a doctor; one per (patient, doctor) pair."""
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='feedbacks')
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='feedbacks')
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['patient', 'doctor'], name='uniq_feedback_per_patient_doctor'),
        ]

    def __str__(self) -> str:
        return f"feedback {self.rating}/5 p={self.patient_id} -> d={self.doctor_id}"


class TestResult(models.Model):
    # not a pytest test class
    __test__ = False

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='test_results')
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='test_results')
    appointment = models.ForeignKey(
        Appointment, null=True, blank=True, on_delete=models.SET_NULL, related_name='test_results'
    )
    test_name = models.CharField(max_length=255)
    result = models.TextField()
    date_performed = models.DateTimeField()

    def __str__(self) -> str:
        return f"{self.test_name} for p={self.patient_id}"


class Resource(models.Model):
    """Equipment, rooms, supplies and other managed assets."""
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=100)
    quantity = models.PositiveIntegerField(default=0)

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity}"


class AnalyticsRecord(models.Model):
    """Precomputed metric sample (e.g. 'AppointmentsScheduled')."""
    metric_name = models.CharField(max_length=100, db_index=True)
    value = models.FloatField()
    recorded_at = models.DateTimeField(db_index=True)

    def __str__(self) -> str:
        return f"{self.metric_name}={self.value} @ {self.recorded_at:%F %T}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action}:{self.object_type}#{self.object_id}"
