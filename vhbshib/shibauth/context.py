import logging

from django.conf import settings


logger = logging.getLogger(__name__)


# test values of the catalog replacing attributes of the federation
TEST_ATTRIBUTES = (
    ('first_name', 'test_firstname'),
    ('last_name', 'test_lastname'),
    ('email', 'test_email'),
    ('login', 'test_login'),
)


class RequestContext:
    """
    Everything the login components may read from a request.

    :param attributes: federation attribute name => value (the SP environment)
    :param query: query parameters of the request
    :param session: the session store of the request
    """

    def __init__(self, attributes, query=None, session=None):
        self.attributes = dict(attributes)
        self.query = query if query is not None else {}
        self.session = session if session is not None else {}

    @classmethod
    def from_request(cls, request, catalog):
        context = cls(request.META, request.GET, request.session)

        if context.is_test_mode(catalog):
            context.apply_test_values(catalog)

        return context

    def get(self, name, default=''):
        value = self.attributes.get(name)
        if value is None:
            return default
        return value

    def is_test_mode(self, catalog):
        if not getattr(settings, 'SHIBBOLETH_ALLOW_TEST_MODE', False):
            return False

        activation = catalog.get('test_activation')
        return bool(activation) and activation in self.query

    def apply_test_values(self, catalog):
        attribute_map = settings.SHIBBOLETH_ATTRIBUTE_MAP

        replacements = [(attribute_map[field], catalog.get(name)) for field, name in TEST_ATTRIBUTES]
        replacements.append((settings.SHIBBOLETH_ENTITLEMENT_ATTRIBUTE, catalog.get('test_entitlement')))

        for attribute, value in replacements:
            if value:
                self.attributes[attribute] = value

        logger.warning('Test values applied to the federation attributes')
