"""
Admin CRUD for doctors, departments and resources.

Validation failures come back from the directory service as a
``ValidationResult`` and are answered with 400 and the rule's message.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.serializers.admin import DepartmentWriteSerializer, DoctorWriteSerializer, ResourceWriteSerializer
from clinic.services import directory


def _invalid(result):
    return Response({'ok': False, 'error': {'code': 'invalid', 'message': result.message}}, status=400)


def _saved(obj, result, fmt, status=200):
    if obj is None:
        return _invalid(result)
    return Response({'ok': True, 'data': fmt(obj)}, status=status)


# ---------------------------------------------------------------------
# Doctors
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def doctors(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': [directory.format_doctor(d) for d in directory.list_doctors()]})
    s = DoctorWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    obj, result = directory.create_doctor(vd['name'], vd['specialty'], vd.get('departmentId'), actor=request.user)
    return _saved(obj, result, directory.format_doctor, status=201)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def doctor_detail(request, pk: int):
    if request.method == 'DELETE':
        directory.delete_doctor(pk, actor=request.user)
        return Response({'ok': True})
    s = DoctorWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    obj, result = directory.update_doctor(pk, vd['name'], vd['specialty'], vd.get('departmentId'), actor=request.user)
    return _saved(obj, result, directory.format_doctor)


# ---------------------------------------------------------------------
# Departments
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def departments(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': [directory.format_department(d) for d in directory.list_departments()]})
    s = DepartmentWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    obj, result = directory.create_department(s.validated_data['name'], actor=request.user)
    return _saved(obj, result, directory.format_department, status=201)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def department_detail(request, pk: int):
    if request.method == 'DELETE':
        result = directory.delete_department(pk, actor=request.user)
        if not result:
            return _invalid(result)
        return Response({'ok': True})
    s = DepartmentWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    obj, result = directory.rename_department(pk, s.validated_data['name'], actor=request.user)
    return _saved(obj, result, directory.format_department)


# ---------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def resources(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': [directory.format_resource(r) for r in directory.list_resources()]})
    s = ResourceWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    obj, result = directory.create_resource(vd['name'], vd['type'], vd['quantity'], actor=request.user)
    return _saved(obj, result, directory.format_resource, status=201)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def resource_detail(request, pk: int):
    if request.method == 'DELETE':
        directory.delete_resource(pk, actor=request.user)
        return Response({'ok': True})
    s = ResourceWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    obj, result = directory.update_resource(pk, vd['name'], vd['type'], vd['quantity'], actor=request.user)
    return _saved(obj, result, directory.format_resource)
