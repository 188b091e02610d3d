from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


VHB_CATALOG = 'vhb'
LV_KEYWORD_PREFIX = 'LV_'


def course_url(ref_id):
    return settings.COURSE_URL_TEMPLATE.format(ref_id=ref_id)


class Course(models.Model):
    """A course of the learning platform, addressed by its reference id"""

    ref_id = models.PositiveIntegerField(_('reference id'), primary_key=True)
    obj_id = models.PositiveIntegerField(_('object id'), db_index=True)
    title = models.CharField(_('title'), max_length=255)
    description = models.TextField(_('description'), blank=True)
    is_online = models.BooleanField(
        _('online'), default=True,
        help_text=_('Offline courses are not assigned by entitlements')
    )
    is_deleted = models.BooleanField(
        _('in trash'), default=False,
    )
    needs_confirmation = models.BooleanField(
        _('subscription needs confirmation'), default=False,
        help_text=_('Users are put on the waiting list instead of becoming members')
    )

    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through='CourseMembership',
        related_name='courses',
        blank=True,
    )

    def __str__(self):
        return f'{self.title} ({self.ref_id})'

    def get_absolute_url(self):
        return course_url(self.ref_id)


class CourseIdentifier(models.Model):
    """General metadata identifier of a course (legacy schema: catalog "vhb")"""

    course = models.ForeignKey(Course, related_name='identifiers', on_delete=models.CASCADE)
    catalog = models.CharField(max_length=255, blank=True)
    entry = models.CharField(max_length=255)

    def __str__(self):
        return f'{self.catalog}: {self.entry}'


class CourseKeyword(models.Model):
    """Metadata keyword of a course (current schema: keywords starting with "LV_")"""

    course = models.ForeignKey(Course, related_name='keywords', on_delete=models.CASCADE)
    keyword = models.CharField(max_length=255)

    def __str__(self):
        return self.keyword


class CourseMembership(models.Model):
    course = models.ForeignKey(Course, related_name='memberships', on_delete=models.CASCADE)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='course_memberships', on_delete=models.CASCADE)
    created = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f'{self.user} - {self.course}'

    class Meta:
        unique_together = ('course', 'user')


class CourseRole(models.Model):
    """A local role of a course, e.g. "Kursgast" """

    course = models.ForeignKey(Course, related_name='roles', on_delete=models.CASCADE)
    title = models.CharField(max_length=255)
    users = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name='course_roles', blank=True)

    def __str__(self):
        return f'{self.title} ({self.course_id})'


class WaitingListEntry(models.Model):
    course = models.ForeignKey(Course, related_name='waiting_list', on_delete=models.CASCADE)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='waiting_list_entries', on_delete=models.CASCADE)
    created = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f'{self.user} - {self.course}'

    class Meta:
        unique_together = ('course', 'user')
        verbose_name_plural = 'waiting list entries'


class Recommendation(models.Model):
    """A course shown on the personal desktop of a user"""

    course = models.ForeignKey(Course, related_name='recommendations', on_delete=models.CASCADE)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='recommendations', on_delete=models.CASCADE)

    def __str__(self):
        return f'{self.user} - {self.course}'

    class Meta:
        unique_together = ('course', 'user')
