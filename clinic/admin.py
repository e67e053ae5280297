"""
Django admin registrations for the clinic models, available at ``/admin/``.
"""

from django.contrib import admin

from .models import (
    AnalyticsRecord,
    Appointment,
    AuditEvent,
    Department,
    Doctor,
    Feedback,
    Patient,
    Resource,
    TestResult,
    User,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'role', 'is_staff', 'is_superuser')
    list_filter = ('role',)
    search_fields = ('username', 'first_name', 'last_name')


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'created_at')
    search_fields = ('name',)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'age', 'gender', 'email', 'user')
    search_fields = ('name', 'email', 'user__username')


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'specialty', 'department', 'user')
    list_filter = ('department',)
    search_fields = ('name', 'specialty')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'date', 'status', 'created_at')
    list_filter = ('status', 'doctor')
    search_fields = ('patient__name', 'doctor__name')


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'rating', 'created_at')
    list_filter = ('rating',)


@admin.register(TestResult)
class TestResultAdmin(admin.ModelAdmin):
    list_display = ('id', 'test_name', 'patient', 'doctor', 'date_performed')
    search_fields = ('test_name', 'patient__name')


@admin.register(Resource)
class ResourceAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'type', 'quantity')
    list_filter = ('type',)


@admin.register(AnalyticsRecord)
class AnalyticsRecordAdmin(admin.ModelAdmin):
    list_display = ('metric_name', 'value', 'recorded_at')
    list_filter = ('metric_name',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'object_type', 'object_id', 'user', 'created_at')
    list_filter = ('action',)
    search_fields = ('action', 'object_type', 'user__username')
