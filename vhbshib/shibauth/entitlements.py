import logging
from collections import OrderedDict, namedtuple


logger = logging.getLogger(__name__)


SEGMENT_DELIM = ':'

ROLE_STUDENT = 'student'
ROLE_EVALUATION = 'evaluation'
ROLE_GUEST = 'appr'


Entitlement = namedtuple('Entitlement', ['role', 'scope', 'course_number'])


class EntitlementParser:
    """
    Decomposes entitlements like

        urn:mace:vhb.org:entitlement:lms:student:uni-erlangen.de:LV_463_1227_1_67_1

    into role, scope and course number, read at configured segment positions.
    """

    def __init__(self, role_index=5, scope_index=6, course_index=7):
        self.role_index = role_index
        self.scope_index = scope_index
        self.course_index = course_index

    @classmethod
    def from_catalog(cls, catalog):
        def index(name, default):
            value = catalog.get(name)
            return default if value is None else value

        return cls(
            role_index=index('entitlement_role_index', 5),
            scope_index=index('entitlement_scope_index', 6),
            course_index=index('entitlement_course_index', 7),
        )

    def parse(self, entitlement):
        """
        :return: Entitlement or None if the string has no role or course number
        """
        parts = [part.strip() for part in entitlement.split(SEGMENT_DELIM)]

        try:
            role = parts[self.role_index]
            scope = parts[self.scope_index]
            course_number = parts[self.course_index]
        except IndexError:
            logger.debug('Skipping short entitlement %r', entitlement)
            return None

        if not role or not course_number:
            logger.debug('Skipping incomplete entitlement %r', entitlement)
            return None

        return Entitlement(role, scope, course_number)

    def entitled_courses(self, entitlements, local_scope):
        """
        Get the courses of the local scope for which the user is entitled.

        :return: OrderedDict course number => role; later entries replace earlier ones
        """
        courses = OrderedDict()
        if not local_scope:
            return courses

        for raw in entitlements:
            entitlement = self.parse(raw)
            if entitlement is not None and entitlement.scope == local_scope:
                courses[entitlement.course_number] = entitlement.role

        return courses


def has_marker(entitlements, marker):
    """Does any of the entitlements carry the marker as one of its segments?"""
    if not marker:
        return False

    return any(
        marker in (part.strip() for part in entitlement.split(SEGMENT_DELIM))
        for entitlement in entitlements
    )
