import logging

from django.conf import settings

from .exceptions import ConfigAmbiguity


logger = logging.getLogger(__name__)


DELIM = ';'

GENDER_MAP = {
    'm': 'm',
    'f': 'f',
    '1': 'm',
    '2': 'f',
    '0': 'n',
}


def split_values(value):
    return [part.strip() for part in (value or '').split(DELIM)]


def find_suffix_index(logins, suffix):
    """Index of the first login that ends with the suffix, or None"""
    if not suffix:
        return None

    for index, login in enumerate(logins):
        if len(login) > len(suffix) and login.endswith(suffix):
            return index

    return None


class ShibAuthData:
    """
    The identity of the authenticated user, extracted from the federation attributes.

    Attributes may hold the data of several identity providers separated by
    semicolon (aggregation). The values belonging to the relevant login are
    selected: a login of the own institution has priority, then the login
    issued by vhb, otherwise the first one.
    """

    def __init__(self, context, catalog):
        self._context = context
        self._catalog = catalog
        self._data = {}
        self._local_user_name = ''
        self._index = 0
        self.entitlements = []

        self._configure()

    def _configure(self):
        attribute_map = settings.SHIBBOLETH_ATTRIBUTE_MAP

        # LOCAL USER MATCH
        logins = split_values(self._context.get(attribute_map['login']))
        suffix = self._catalog.get('local_user_suffix')

        index = find_suffix_index(logins, suffix)
        if index is not None:
            self._local_user_name = logins[index][:-len(suffix)]
        else:
            # prevent the de-aggregation from taking the data of an unrelated institution
            index = find_suffix_index(logins, settings.VHB_LOGIN_SUFFIX)

        self._index = index or 0

        # DE-AGGREGATION
        resolve = self._catalog.get('resolve_aggregation')
        for field, attribute in attribute_map.items():
            values = split_values(self._context.get(attribute))

            if len(values) > 1:
                if not resolve:
                    logger.error('Aggregated values for %s: %s', field, values)
                    raise ConfigAmbiguity(field, values)

                value = values[self._index] if self._index < len(values) else values[0]
            else:
                value = values[0]

            self._data[field] = value

        self.entitlements = [
            entitlement
            for entitlement in split_values(self._context.get(settings.SHIBBOLETH_ENTITLEMENT_ATTRIBUTE))
            if entitlement
        ]

    @property
    def login(self):
        return self._data.get('login', '')

    @property
    def first_name(self):
        return self._data.get('first_name', '')

    @property
    def last_name(self):
        return self._data.get('last_name', '')

    @property
    def email(self):
        return self._data.get('email', '')

    @property
    def title(self):
        return self._data.get('title', '')

    @property
    def institution(self):
        return self._data.get('institution', '')

    @property
    def aggregation_index(self):
        return self._index

    @property
    def is_local(self):
        return bool(self._local_user_name)

    @property
    def local_user_name(self):
        """
        Name of the local user account without suffix, e.g. 'vhbtest'
        for the login 'vhbtest@uni-erlangen.de'
        """
        return self._local_user_name

    @property
    def gender(self):
        """Decode a numeric gender if provided by vhb"""
        return GENDER_MAP.get(self._data.get('gender', '').lower(), 'n')

    @property
    def matriculation(self):
        if not self.is_local and self._catalog.get('external_user_matriculation'):
            login = self.login
            suffix = settings.VHB_LOGIN_SUFFIX

            if len(login) > len(suffix) and login.endswith(suffix):
                number = login[:-len(suffix)]
                if number.isdigit():
                    return number

        return self._data.get('matriculation', '')

    def get_data(self):
        """The de-aggregated data, e.g. for logging"""
        data = dict(self._data)
        data['entitlements'] = list(self.entitlements)
        return data
