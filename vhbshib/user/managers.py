import logging

from django.contrib.auth.models import BaseUserManager


logger = logging.getLogger(__name__)


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, login, password, **extra_fields):
        """
        Creates and saves a User with the given login and password.
        """
        if not login:
            raise ValueError("The login must be set")
        user = self.model(login=login, **extra_fields)
        user.set_password(password)
        user.save()
        return user

    def create_user(self, login, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        return self._create_user(login, password, **extra_fields)

    def create_superuser(self, login, password, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        return self._create_user(login, password, **extra_fields)

    def get_by_natural_key(self, login):
        return self.get(login=login)

    def get_by_external_account(self, external_account):
        return self.get(external_account=external_account)

    def login_exists(self, login, exclude_pk=None):
        queryset = self.filter(login=login)
        if exclude_pk is not None:
            queryset = queryset.exclude(pk=exclude_pk)
        return queryset.exists()

    def get_unique_login(self, login, exclude_pk=None):
        """
        Append ".1", ".2", ... to the login until no other user has it.
        """
        candidate = login
        appendix = 0

        while self.login_exists(candidate, exclude_pk=exclude_pk):
            appendix += 1
            candidate = f"{login}.{appendix}"

        return candidate

    def next_sequence_number(self):
        """The number a generated login of the next user should carry"""
        last = self.order_by("-pk").values_list("pk", flat=True).first()
        return (last or 0) + 1
