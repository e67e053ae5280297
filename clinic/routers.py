"""
URL mappings for the front-desk API.

Trailing slashes are omitted, matching the paths the front end calls.
"""
from django.urls import include, path

from .auth_views import login_view
from .views import admin_records, analytics, appointments, audit_logs, doctors, feedback, health, test_results


urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    # Patients
    path('api/doctors', doctors.doctor_directory, name='doctor_directory'),
    path('api/appointments/slots', appointments.available_slots, name='available_slots'),
    path('api/appointments/book', appointments.book_appointment, name='book_appointment'),
    path('api/appointments/cancel', appointments.cancel_appointment, name='cancel_appointment'),
    path('api/appointments/mine', appointments.my_appointments, name='my_appointments'),
    path('api/feedback', feedback.submit_feedback, name='submit_feedback'),
    path('api/test-results/mine', test_results.my_results, name='my_test_results'),
    path('api/test-results/<int:pk>', test_results.result_detail, name='test_result_detail'),
    # Doctors
    path('api/doctor/appointments', appointments.doctor_appointments, name='doctor_appointments'),
    path('api/doctor/appointments/accept', appointments.accept_appointment, name='accept_appointment'),
    path('api/doctor/appointments/reject', appointments.reject_appointment, name='reject_appointment'),
    path('api/doctor/appointments/complete', appointments.complete_appointment, name='complete_appointment'),
    path('api/doctor/test-results', test_results.upload_result, name='upload_test_result'),
    path('api/doctor/feedback', feedback.doctor_feedback, name='doctor_feedback'),
    # Admin records
    path('api/admin/doctors', admin_records.doctors, name='admin_doctors'),
    path('api/admin/doctors/<int:pk>', admin_records.doctor_detail, name='admin_doctor_detail'),
    path('api/admin/departments', admin_records.departments, name='admin_departments'),
    path('api/admin/departments/<int:pk>', admin_records.department_detail, name='admin_department_detail'),
    path('api/admin/resources', admin_records.resources, name='admin_resources'),
    path('api/admin/resources/<int:pk>', admin_records.resource_detail, name='admin_resource_detail'),
    path('api/admin/feedback', feedback.all_feedback, name='admin_feedback'),
    path('api/admin/logs', audit_logs.audit_logs, name='admin_logs'),
    # Admin analytics
    path('api/admin/analytics/kpis', analytics.kpis, name='analytics_kpis'),
    path('api/admin/analytics/weekly-appointments', analytics.weekly_appointments, name='analytics_weekly'),
    path('api/admin/analytics/doctor-ratings', analytics.doctor_ratings, name='analytics_ratings'),
    path('api/admin/analytics/sentiment', analytics.sentiment, name='analytics_sentiment'),
    path('api/admin/analytics/status', analytics.status_breakdown, name='analytics_status'),
    path('api/admin/analytics/trend', analytics.metric_trend, name='analytics_trend'),
]
