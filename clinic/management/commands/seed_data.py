"""
Management command to seed demo users and front-desk records (idempotent).
"""
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.db import transaction

from clinic.models import Department, Doctor, Patient, Resource, User

DEPARTMENTS = ['Cardiology', 'Radiology', 'Pediatrics']

DOCTORS = [
    # username, name, specialty, department
    ('dr_smith', 'Dr. Alice Smith', 'Cardiologist', 'Cardiology'),
    ('dr_jones', 'Dr. Bob Jones', 'Radiologist', 'Radiology'),
]

PATIENTS = [
    # username, name, age, gender, email
    ('patient1', 'John Doe', 42, 'Male', 'john.doe@example.com'),
    ('patient2', 'Mary Major', 35, 'Female', 'mary.major@example.com'),
]

RESOURCES = [
    ('MRI Scanner', 'Equipment', 1),
    ('Ward Bed', 'Bed', 40),
    ('Surgical Mask', 'Supply', 500),
]


class Command(BaseCommand):
    help = "Seed demo users, departments, doctors, patients and resources (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('--password', default='Passw0rd!', help='Password set on every demo account.')

    @transaction.atomic
    def handle(self, *args, **opts):
        password = make_password(opts['password'])

        self._user('admin', User.ROLE_ADMIN, password, is_staff=True)

        depts = {}
        for name in DEPARTMENTS:
            depts[name], _ = Department.objects.get_or_create(name=name)

        for username, name, specialty, dept in DOCTORS:
            user = self._user(username, User.ROLE_DOCTOR, password)
            Doctor.objects.update_or_create(
                user=user, defaults={'name': name, 'specialty': specialty, 'department': depts[dept]},
            )

        for username, name, age, gender, email in PATIENTS:
            user = self._user(username, User.ROLE_PATIENT, password)
            Patient.objects.update_or_create(
                user=user, defaults={'name': name, 'age': age, 'gender': gender, 'email': email},
            )

        for name, type_, quantity in RESOURCES:
            Resource.objects.get_or_create(name=name, defaults={'type': type_, 'quantity': quantity})

        self.stdout.write(self.style.SUCCESS("Demo data seeded."))

    def _user(self, username, role, password, is_staff=False):
        u, created = User.objects.get_or_create(
            username=username,
            defaults={"role": role, "password": password, "is_active": True, "is_staff": is_staff},
        )
        if not created:
            u.password = password
            u.role = role
            u.is_active = True
            u.save(update_fields=["password", "role", "is_active"])
        self.stdout.write(f"ok: {username} ({role})")
        return u
