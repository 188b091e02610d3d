import logging

from django.conf import settings
from django.contrib.auth import get_user_model


logger = logging.getLogger(__name__)


NEW = 'new'
EXISTING = 'existing'


class UserProvisioningDecision:
    """
    The result of matching the federated identity against the local accounts.

    `external_key` is the sole matching key of an account. For new accounts
    the login, auth mode and matriculation are computed, for existing ones
    `user` is the found account.
    """

    def __init__(self, external_key, user=None, login=None, auth_mode=None, matriculation='',
                 generated_login=False):
        self.external_key = external_key
        self.user = user
        self.login = login
        self.auth_mode = auth_mode
        self.matriculation = matriculation
        self.generated_login = generated_login

    @property
    def is_new(self):
        return self.user is None

    @property
    def state(self):
        return NEW if self.is_new else EXISTING

    def __repr__(self):
        return f'<UserProvisioningDecision {self.state} {self.external_key!r} login={self.login!r}>'


class AccountStore:
    """The user directory as seen by the user resolution"""

    def find_by_external_key(self, external_key):
        raise NotImplementedError

    def get_unique_login(self, login, exclude=None):
        raise NotImplementedError

    def next_sequence_number(self):
        raise NotImplementedError

    def create(self, decision, identity):
        raise NotImplementedError

    def update(self, user, identity):
        raise NotImplementedError

    def rename(self, user, login):
        raise NotImplementedError

    def write_pref(self, user, keyword, value):
        raise NotImplementedError


class DjangoAccountStore(AccountStore):
    """Accounts stored in the user model of the project"""

    def __init__(self):
        self.model = get_user_model()

    def find_by_external_key(self, external_key):
        if not external_key:
            return None
        try:
            return self.model.objects.get_by_external_account(external_key)
        except self.model.DoesNotExist:
            return None

    def get_unique_login(self, login, exclude=None):
        return self.model.objects.get_unique_login(login, exclude_pk=exclude.pk if exclude else None)

    def next_sequence_number(self):
        return self.model.objects.next_sequence_number()

    def clip(self, field, value):
        """Cut a federation value to the length of its column"""
        max_length = self.model._meta.get_field(field).max_length
        if value and max_length and len(value) > max_length:
            logger.warning('Value of %s cut to %d characters: %r', field, max_length, value)
            return value[:max_length]
        return value

    def create(self, decision, identity):
        profile = {
            field: self.clip(field, value)
            for field, value in (
                ('matriculation', decision.matriculation),
                ('first_name', identity.first_name),
                ('last_name', identity.last_name),
                ('email', identity.email),
                ('gender', identity.gender),
                ('title', identity.title),
                ('institution', identity.institution),
            )
        }
        user = self.model(
            login=decision.login,
            external_account=decision.external_key,
            auth_mode=decision.auth_mode,
            **profile
        )
        user.set_unusable_password()
        user.save()

        logger.info('Created user %s for %s', user.login, decision.external_key)

        return user

    def update(self, user, identity):
        fields = []
        for field in settings.SHIBBOLETH_UPDATE_FIELDS:
            value = self.clip(field, getattr(identity, field))
            if getattr(user, field) != value:
                setattr(user, field, value)
                fields.append(field)

        if fields:
            user.save(update_fields=fields + ['last_modified'])
            logger.info('Updated %s of user %s', ', '.join(fields), user.login)

        return user

    def rename(self, user, login):
        user.login = login
        user.save(update_fields=['login', 'last_modified'])

    def write_pref(self, user, keyword, value):
        user.write_pref(keyword, value)


class UserResolver:
    """Decides whether the federated identity creates a new account or updates an existing one"""

    def __init__(self, catalog, store):
        self.catalog = catalog
        self.store = store

    def get_external_key(self, identity):
        """
        The external account of the identity.
        Local users may be stored without the suffix of their login.
        """
        if identity.is_local and self.catalog.get('local_user_short_external'):
            return identity.local_user_name

        return identity.login

    def resolve(self, identity):
        external_key = self.get_external_key(identity)

        user = self.store.find_by_external_key(external_key)
        if user is not None:
            return UserProvisioningDecision(external_key, user=user)

        login, generated = self.get_new_login(identity)

        return UserProvisioningDecision(
            external_key,
            login=login,
            auth_mode=self.get_new_auth_mode(identity),
            matriculation=identity.matriculation,
            generated_login=generated,
        )

    def get_new_login(self, identity):
        """
        :return: (login, generated) for a new account
        """
        if identity.is_local and self.catalog.get('local_user_take_login'):
            return self.store.get_unique_login(identity.local_user_name), False

        prefix = self.catalog.get('external_user_login_prefix')
        if not identity.is_local and prefix:
            return self.store.get_unique_login(f'{prefix}{self.store.next_sequence_number()}'), True

        return self.store.get_unique_login(identity.login), False

    def get_new_auth_mode(self, identity):
        if identity.is_local:
            auth_mode = self.catalog.get('local_user_auth_mode')
        else:
            auth_mode = self.catalog.get('external_user_auth_mode')

        return auth_mode or settings.SHIBBOLETH_DEFAULT_AUTH_MODE


class ShibUser:
    """
    Applies a provisioning decision exactly once per request.

    Whichever of `create()` or `update()` is called, a new account is created
    and an existing one is updated. Preferences are only written for new
    accounts.
    """

    def __init__(self, decision, identity, store, catalog):
        self.decision = decision
        self.identity = identity
        self.store = store
        self.catalog = catalog
        self.user = decision.user
        self.applied = False

    @property
    def state(self):
        return self.decision.state

    def create(self):
        if self.applied:
            return self.user

        if self.state == NEW:
            return self._create()

        return self._update()

    def update(self):
        if self.applied:
            return self.user

        if self.state == NEW:
            self._create()
            self.write_prefs()
            return self.user

        return self._update()

    def write_pref(self, keyword, value):
        if self.state == NEW and self.user is not None:
            self.store.write_pref(self.user, keyword, value)

    def write_prefs(self):
        for keyword, value in settings.SHIBBOLETH_DEFAULT_PREFERENCES.items():
            self.write_pref(keyword, value)

    def _create(self):
        self.user = self.store.create(self.decision, self.identity)
        self.applied = True

        # generated logins are renamed to the prefix and the id of the account
        if self.decision.generated_login:
            prefix = self.catalog.get('external_user_login_prefix')
            login = self.store.get_unique_login(f'{prefix}{self.user.pk}', exclude=self.user)
            if login != self.user.login:
                self.store.rename(self.user, login)

        return self.user

    def _update(self):
        self.user = self.store.update(self.user, self.identity)
        self.applied = True
        return self.user
