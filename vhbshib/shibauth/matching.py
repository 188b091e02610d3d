import logging
from collections import OrderedDict

from .entitlements import ROLE_EVALUATION, ROLE_GUEST, ROLE_STUDENT, EntitlementParser, has_marker
from .exceptions import AccessDenied


logger = logging.getLogger(__name__)


SESSION_KEY = 'vhbshib_courses_to_select'

ROLE_PATTERN_PARAMS = {
    ROLE_EVALUATION: 'evaluator_role',
    ROLE_GUEST: 'guest_role',
}


class EntitlementMatcher:
    """
    Assigns the courses matching the entitlements of a user.

    Student entitlements matching more than one course, or a single course
    with confirmed subscription, are not assigned directly but stored as
    pending selection in the session. The user confirms them in the course
    selection form.

    :param catalog: ParameterCatalog
    :param repository: CourseRepository of the current request
    :param memberships: MembershipService
    :param session: session store of the current request
    """

    def __init__(self, catalog, repository, memberships, session):
        self.catalog = catalog
        self.repository = repository
        self.memberships = memberships
        self.session = session
        self.parser = EntitlementParser.from_catalog(catalog)

    def get_entitled_courses(self, entitlements):
        """
        :return: OrderedDict course number => vhb role
        """
        return self.parser.entitled_courses(entitlements, self.catalog.get('local_scope'))

    def check_access(self, entitlements, is_new):
        """
        Check the platform access before an account is created or updated.

        :raises AccessDenied: if the access marker is missing, or a new user has no course entitlement
        """
        if not self.catalog.get('check_vhb_access'):
            return

        if not has_marker(entitlements, self.catalog.get('vhb_access_marker')):
            raise AccessDenied('Your account is not entitled to access this platform.')

        if is_new and not self.get_entitled_courses(entitlements):
            raise AccessDenied('Your account is not entitled to any course on this platform.')

    def assign_matching_courses(self, user, entitlements):
        """
        Assign the courses that match the entitled vhb courses.

        :return: the pending selections, course number => list of ref_ids
        """
        pending = OrderedDict()

        for lvnr, role in self.get_entitled_courses(entitlements).items():
            candidates = self.repository.find_matching(lvnr)

            if not candidates:
                logger.info('No course found for %s', lvnr)
                continue

            if role == ROLE_STUDENT:
                ref_ids = self._assign_student(user, lvnr, candidates)
                if ref_ids:
                    pending[lvnr] = ref_ids

            elif role in ROLE_PATTERN_PARAMS:
                pattern = self.catalog.get(ROLE_PATTERN_PARAMS[role])
                for ref_id in candidates:
                    if self.memberships.assign_matching_role(user, ref_id, pattern) is not None:
                        self.memberships.add_recommendation(user, ref_id)

            else:
                logger.debug('Ignoring role %s for %s', role, lvnr)

        self.set_courses_to_select(pending)

        return pending

    def _assign_student(self, user, lvnr, candidates):
        """
        :return: list of ref_ids to be selected by the user, or None if nothing is left to do
        """
        assigned = [ref_id for ref_id in candidates if self.memberships.is_assigned(user, ref_id)]
        if assigned:
            for ref_id in assigned:
                self.memberships.add_recommendation(user, ref_id)
            return None

        if len(candidates) == 1:
            candidate = next(iter(candidates.values()))
            if not candidate.needs_confirmation:
                self.memberships.add_member(user, candidate.ref_id)
                self.memberships.add_recommendation(user, candidate.ref_id)
                return None

        logger.info('Courses %s need a selection for %s', list(candidates), lvnr)
        return list(candidates)

    def get_courses_to_select(self):
        """
        The pending selections of the session, restricted to courses that still match.

        :return: OrderedDict course number => list of ref_ids
        """
        courses = OrderedDict()

        for lvnr, ref_ids in (self.session.get(SESSION_KEY) or {}).items():
            matching = self.repository.find_matching(lvnr)
            ref_ids = [int(ref_id) for ref_id in ref_ids if int(ref_id) in matching]
            if ref_ids:
                courses[lvnr] = ref_ids

        return courses

    def set_courses_to_select(self, courses):
        if courses:
            self.session[SESSION_KEY] = {lvnr: list(ref_ids) for lvnr, ref_ids in courses.items()}
        elif SESSION_KEY in self.session:
            del self.session[SESSION_KEY]

    def has_courses_to_select(self):
        return bool(self.session.get(SESSION_KEY))

    def get_target_course(self, user, lvnr):
        """
        Get the course a deep link with a vhb course number should lead to.

        :return: CourseCandidate or None
        """
        candidates = self.repository.find_matching(lvnr)

        for ref_id, candidate in candidates.items():
            if self.memberships.is_assigned(user, ref_id):
                return candidate

        if len(candidates) == 1:
            return next(iter(candidates.values()))

        return None

    def assign_course(self, user, ref_id):
        """Let the user join a selected course directly"""
        self.memberships.add_member(user, ref_id)
        self.memberships.add_recommendation(user, ref_id)

    def save_course_selection(self, user, selections):
        """
        Apply the choices of the course selection form.

        :param selections: course number => (ref_id to join or None, ref_ids for the waiting list)
        """
        for lvnr, ref_ids in self.get_courses_to_select().items():
            join, waiting = selections.get(lvnr, (None, ()))

            for ref_id in ref_ids:
                candidate = self.repository.get(ref_id)

                if candidate.needs_confirmation:
                    if ref_id in waiting:
                        self.memberships.add_to_waiting_list(user, ref_id)
                    else:
                        self.memberships.remove_from_waiting_list(user, ref_id)

                elif ref_id == join:
                    self.assign_course(user, ref_id)

        self.set_courses_to_select(None)
