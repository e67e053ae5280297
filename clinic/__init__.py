"""Front-desk application for the MediScope clinic.

Models, domain services, serializers and API views for appointments,
feedback, test results, admin records and dashboard analytics.
"""
