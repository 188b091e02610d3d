from django.contrib.auth.base_user import AbstractBaseUser
from django.contrib.auth.models import PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .managers import UserManager


GENDER_CHOICES = (
    ('m', _('male')),
    ('f', _('female')),
    ('n', _('not specified')),
)


class User(AbstractBaseUser, PermissionsMixin):
    login = models.CharField(
        _('login'), max_length=190, unique=True,
        help_text=_('Login name, may be renamed after creation')
    )
    external_account = models.CharField(
        _('external account'), max_length=250, unique=True, null=True, blank=True,
        help_text=_('The account key used to match federated logins. Do not edit.')
    )
    auth_mode = models.CharField(
        _('authentication mode'), max_length=50, default='shibboleth'
    )
    first_name = models.CharField(
        _('first name'), max_length=50, blank=True
    )
    last_name = models.CharField(
        _('last name'), max_length=50, blank=True
    )
    email = models.EmailField(
        _('email'), blank=True
    )
    gender = models.CharField(
        _('gender'), max_length=1, choices=GENDER_CHOICES, default='n'
    )
    matriculation = models.CharField(
        _('matriculation number'), max_length=40, blank=True
    )
    title = models.CharField(
        _('title'), max_length=32, blank=True
    )
    institution = models.CharField(
        _('institution'), max_length=80, blank=True
    )

    date_joined = models.DateTimeField(
        _('date joined'),
        default=timezone.now,
    )
    is_staff = models.BooleanField(
        _('staff status'),
        default=False,
        help_text=_('Designates whether the user can log into this admin site.'),
    )
    is_active = models.BooleanField(
        _('is active'),
        default=True,
        help_text=_('is the account active?'),
    )
    last_modified = models.DateTimeField(auto_now=True, null=False)

    objects = UserManager()

    USERNAME_FIELD = 'login'
    REQUIRED_FIELDS = []

    def __str__(self):
        return self.login

    def get_full_name(self):
        """
        Django method that must be implemented

        Return first name / last name if not empty or login otherwise
        """
        names = [name for name in [self.first_name, self.last_name] if name]
        if names:
            return ' '.join(names)
        return self.login

    def get_short_name(self):
        """Django method that must be implemented"""
        return self.get_full_name()

    def get_pref(self, keyword, default=None):
        try:
            return self.preferences.get(keyword=keyword).value
        except UserPreference.DoesNotExist:
            return default

    def write_pref(self, keyword, value):
        self.preferences.update_or_create(keyword=keyword, defaults={'value': str(value)})


class UserPreference(models.Model):
    user = models.ForeignKey(User, related_name='preferences', on_delete=models.CASCADE)
    keyword = models.CharField(max_length=40)
    value = models.CharField(max_length=255, blank=True)

    def __str__(self):
        return f'{self.user} - {self.keyword}'

    class Meta:
        unique_together = ('user', 'keyword')
