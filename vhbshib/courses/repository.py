import fnmatch
import logging
from collections import OrderedDict

from .models import LV_KEYWORD_PREFIX, VHB_CATALOG, CourseIdentifier, CourseKeyword, course_url


logger = logging.getLogger(__name__)


class CourseCandidate:
    """A course that can be assigned by an entitlement"""

    def __init__(self, ref_id, obj_id, title, description='', needs_confirmation=False, lv_patterns=None):
        self.ref_id = ref_id
        self.obj_id = obj_id
        self.title = title
        self.description = description
        self.needs_confirmation = needs_confirmation
        self.lv_patterns = list(lv_patterns or [])

    @classmethod
    def from_course(cls, course):
        return cls(
            ref_id=course.ref_id,
            obj_id=course.obj_id,
            title=course.title,
            description=course.description,
            needs_confirmation=course.needs_confirmation,
        )

    def matches(self, lvnr):
        """
        Check the course number against the patterns of the course.

        Patterns may contain wildcards, e.g. semester independent courses
        can have an entry like LV_328_822_1_*_1
        """
        return any(fnmatch.fnmatchcase(lvnr, pattern.strip()) for pattern in self.lv_patterns)

    def get_absolute_url(self):
        return course_url(self.ref_id)

    def __repr__(self):
        return f'<CourseCandidate {self.ref_id} {self.lv_patterns}>'


class CourseRepository:
    """
    Finds the active courses tagged with a vhb course number pattern.

    The lookup is done once per instance; create one repository per request.
    """

    def __init__(self):
        self._courses = None

    def relevant_courses(self):
        """
        :return: OrderedDict ref_id => CourseCandidate
        """
        if self._courses is None:
            self._courses = self._load_courses()
        return self._courses

    def get(self, ref_id):
        return self.relevant_courses().get(ref_id)

    def find_matching(self, lvnr):
        """
        :return: OrderedDict ref_id => CourseCandidate of all courses matching the course number
        """
        return OrderedDict(
            (ref_id, candidate)
            for ref_id, candidate in self.relevant_courses().items()
            if candidate.matches(lvnr)
        )

    def _load_courses(self):
        active = {'course__is_online': True, 'course__is_deleted': False}

        # legacy schema: general identifier with catalog "vhb"
        identifiers = (
            CourseIdentifier.objects
            .filter(catalog=VHB_CATALOG, **active)
            .select_related('course')
            .order_by('course__ref_id', 'pk')
        )
        rows = [(identifier.course, identifier.entry) for identifier in identifiers]

        # current schema: keywords starting with "LV_"
        keywords = (
            CourseKeyword.objects
            .filter(keyword__startswith=LV_KEYWORD_PREFIX, **active)
            .select_related('course')
            .order_by('course__ref_id', 'pk')
        )
        rows += [
            (keyword.course, keyword.keyword)
            for keyword in keywords if keyword.keyword.startswith(LV_KEYWORD_PREFIX)
        ]

        courses = OrderedDict()
        for course, pattern in sorted(rows, key=lambda row: row[0].ref_id):
            if course.ref_id not in courses:
                courses[course.ref_id] = CourseCandidate.from_course(course)
            courses[course.ref_id].lv_patterns.append(pattern)

        logger.debug('Found %d courses with vhb course numbers', len(courses))

        return courses
