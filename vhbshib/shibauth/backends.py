import logging

from django.contrib.auth.backends import ModelBackend


logger = logging.getLogger(__name__)


class ShibbolethBackend(ModelBackend):
    """Authenticates the user of a `ShibLogin` and provisions the account"""

    def authenticate(self, request, shib_login=None):
        if shib_login is None:
            return None

        user = shib_login.run()

        if user is None:
            return None

        if not self.is_user_authorized(user):
            logger.warning('Inactive user %s tried to log in', user)
            return None

        return user

    def is_user_authorized(self, user) -> bool:
        """ Hook to allow for additional authorization based on user settings, e.g is_active """
        return user and self.user_can_authenticate(user)
