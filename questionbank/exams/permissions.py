from django.conf import settings
from rest_framework.permissions import BasePermission


ROLE_STUDENT = 'STUDENT'
ROLE_TEACHER = 'TEACHER'
ROLES = (ROLE_STUDENT, ROLE_TEACHER)


def is_teacher(user):
    """Staff users and members of the teachers group manage questions and exams"""
    if not user or not user.is_authenticated:
        return False
    if user.is_staff:
        return True
    group_name = getattr(settings, 'TEACHER_GROUP_NAME', 'teachers')
    return user.groups.filter(name=group_name).exists()


class IsTeacher(BasePermission):
    message = 'Only teachers can perform this action'

    def has_permission(self, request, view):
        return is_teacher(request.user)
