import fnmatch
import logging

from django.db.models import Q

from .models import Course, CourseMembership, CourseRole, Recommendation, WaitingListEntry


logger = logging.getLogger(__name__)


class MembershipService:
    """Course membership and local role assignment of users"""

    def is_assigned(self, user, ref_id):
        """Is the user a participant of the course, either as member or by a local role?"""
        return Course.objects.filter(
            Q(memberships__user=user) | Q(roles__users=user),
            ref_id=ref_id,
        ).exists()

    def is_member(self, user, ref_id):
        return CourseMembership.objects.filter(course_id=ref_id, user=user).exists()

    def add_member(self, user, ref_id):
        _, created = CourseMembership.objects.get_or_create(course_id=ref_id, user=user)
        if created:
            logger.info('Added %s as member of course %s', user, ref_id)
        return created

    def assign_matching_role(self, user, ref_id, pattern):
        """
        Assign the first local role of the course whose title matches the pattern.

        :return: the assigned role or None if no role matches
        """
        if not pattern:
            return None

        for role in CourseRole.objects.filter(course_id=ref_id).order_by('pk'):
            if fnmatch.fnmatchcase(role.title, pattern):
                if not role.users.filter(pk=user.pk).exists():
                    role.users.add(user)
                    logger.info('Assigned %s to role %s of course %s', user, role.title, ref_id)
                return role

        logger.warning('No role matching %r found in course %s', pattern, ref_id)
        return None

    def add_recommendation(self, user, ref_id):
        Recommendation.objects.get_or_create(course_id=ref_id, user=user)

    def is_on_waiting_list(self, user, ref_id):
        return WaitingListEntry.objects.filter(course_id=ref_id, user=user).exists()

    def add_to_waiting_list(self, user, ref_id):
        _, created = WaitingListEntry.objects.get_or_create(course_id=ref_id, user=user)
        if created:
            logger.info('Added %s to the waiting list of course %s', user, ref_id)
        return created

    def remove_from_waiting_list(self, user, ref_id):
        deleted, _ = WaitingListEntry.objects.filter(course_id=ref_id, user=user).delete()
        return bool(deleted)
