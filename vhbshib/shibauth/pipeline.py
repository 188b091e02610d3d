import logging
from urllib.parse import urlencode

from django.conf import settings
from django.db import transaction
from django.shortcuts import resolve_url
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme

from vhbshib.courses.repository import CourseRepository
from vhbshib.courses.services import MembershipService
from vhbshib.params.catalog import ParameterCatalog

from .context import RequestContext
from .data import ShibAuthData
from .exceptions import AccessDenied
from .matching import EntitlementMatcher
from .provisioning import DjangoAccountStore, ShibUser, UserResolver


logger = logging.getLogger(__name__)


DEEP_LINK_SELECT_PARAM = 'deepLink'


class ShibLogin:
    """
    One federated login, built per request.

    The components are created in the order they depend on each other:
    configuration, request context, account store and resolver, course
    repository and matcher. `run()` computes the identity and the account
    decision and checks the access before anything is written.
    """

    def __init__(self, request, catalog=None, store=None, memberships=None):
        self.request = request
        self.catalog = catalog if catalog is not None else ParameterCatalog.load_current()
        self.context = RequestContext.from_request(request, self.catalog)
        self.store = store if store is not None else DjangoAccountStore()
        self.resolver = UserResolver(self.catalog, self.store)
        self.repository = CourseRepository()
        self.matcher = EntitlementMatcher(
            self.catalog,
            self.repository,
            memberships if memberships is not None else MembershipService(),
            self.context.session,
        )

        self.identity = None
        self.decision = None
        self.user = None
        self.pending = {}

    @property
    def deep_link(self):
        return self.context.query.get(settings.SHIBBOLETH_DEEP_LINK_PARAM) or None

    def run(self):
        """
        :return: the created or updated user, or None without federated login
        :raises ConfigAmbiguity: if aggregated attributes can't be resolved
        :raises AccessDenied: if the account is inactive or the entitlements don't allow access
        """
        self.identity = ShibAuthData(self.context, self.catalog)

        if not self.identity.login:
            logger.info('No login found in the federation attributes')
            return None

        logger.debug('Federation data: %s', self.identity.get_data())

        self.decision = self.resolver.resolve(self.identity)
        logger.info('Login of %s: %s', self.identity.login, self.decision)

        if not self.decision.is_new and not self.decision.user.is_active:
            logger.warning('Inactive user %s tried to log in', self.decision.user)
            raise AccessDenied('Your account is deactivated. Please contact the support.')

        self.matcher.check_access(self.identity.entitlements, self.decision.is_new)

        with transaction.atomic():
            shib_user = ShibUser(self.decision, self.identity, self.store, self.catalog)
            user = shib_user.create() if self.decision.is_new else shib_user.update()
            shib_user.write_prefs()

            self.pending = self.matcher.assign_matching_courses(user, self.identity.entitlements)

        self.user = user
        return user

    def store_pending(self):
        """Write the pending selections again, e.g. after the session was flushed by the login"""
        self.matcher.set_courses_to_select(self.pending)

    def get_redirect_url(self, next_url=None):
        if self.pending:
            url = reverse('shibauth:select-courses')
            if self.deep_link:
                url = f'{url}?{urlencode({DEEP_LINK_SELECT_PARAM: self.deep_link})}'
            return url

        if self.deep_link and self.user is not None:
            course = self.matcher.get_target_course(self.user, self.deep_link)
            if course is not None:
                return course.get_absolute_url()

        if next_url and url_has_allowed_host_and_scheme(
            url=next_url,
            allowed_hosts={self.request.get_host()},
            require_https=self.request.is_secure(),
        ):
            return next_url

        return resolve_url(settings.LOGIN_REDIRECT_URL)
