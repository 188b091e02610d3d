import logging
from collections import OrderedDict

from . import kinds
from .models import ConfigParam


logger = logging.getLogger(__name__)


AUTH_MODE_OPTIONS = (
    ('', 'Federation default'),
    ('shibboleth', 'Shibboleth'),
    ('local', 'Local database'),
    ('ldap', 'LDAP'),
)


class Parameter:
    """A single configuration parameter of the catalog"""

    def __init__(self, name, title, description='', kind=kinds.TEXT, value=None, options=(), min_value=None):
        self.name = name
        self.title = title
        self.description = description
        self.kind = kind
        self.options = tuple(options)
        self.min_value = min_value
        self.value = value

    def set(self, raw):
        if raw is None:
            self.value = None
        else:
            self.value = self.kind.coerce(raw, self)

    def serialize(self):
        return self.kind.serialize(self.value)

    def __repr__(self):
        return f'<Parameter {self.name} ({self.kind.name})={self.value!r}>'


def build_parameters():
    """The fixed catalog of parameters, in display order"""

    return [
        Parameter(
            'auth_settings',
            'Authentication settings',
            'Settings for creating and finding user accounts',
            kinds.HEADING,
        ),
        Parameter(
            'local_user_suffix',
            'Local user suffix',
            'A login ending with this suffix belongs to a user authenticated at the own institution, '
            'e.g. "@uni-erlangen.de".',
            kinds.TEXT,
            '@uni-erlangen.de',
        ),
        Parameter(
            'local_user_short_external',
            'Short external account for local users',
            'Store and match the external account of local users without the suffix.',
            kinds.BOOLEAN,
            False,
        ),
        Parameter(
            'local_user_take_login',
            'Take the local login',
            'New local users get their login name without the suffix.',
            kinds.BOOLEAN,
            False,
        ),
        Parameter(
            'local_user_auth_mode',
            'Authentication mode of local users',
            'Authentication mode set for new local users.',
            kinds.SELECT,
            '',
            AUTH_MODE_OPTIONS,
        ),
        Parameter(
            'external_user_login_prefix',
            'Login prefix of external users',
            'If set, new external users get a generated login: this prefix followed by a number.',
            kinds.TEXT,
            '',
        ),
        Parameter(
            'external_user_auth_mode',
            'Authentication mode of external users',
            'Authentication mode set for new external users.',
            kinds.SELECT,
            '',
            AUTH_MODE_OPTIONS,
        ),
        Parameter(
            'external_user_matriculation',
            'Matriculation of external users',
            'Use the numeric part of the vhb login as matriculation number of external users.',
            kinds.BOOLEAN,
            False,
        ),
        Parameter(
            'resolve_aggregation',
            'Resolve aggregated attributes',
            'Attributes may contain several values separated by semicolon if the service provider '
            'is misconfigured. If enabled, the values belonging to the relevant login are taken. '
            'If disabled, aggregated attributes abort the login.',
            kinds.BOOLEAN,
            True,
        ),
        Parameter(
            'entitle_settings',
            'Course assignment settings',
            'The attribute "eduPersonEntitlement" may contain several entries separated by semicolon, '
            'e.g. "urn:mace:vhb.org:entitlement:lms:student:uni-erlangen.de:LV_463_1227_1_67_1". '
            '"student" is the role, "uni-erlangen.de" the scope of the offering institution and '
            '"LV_463_1227_1_67_1" the course number. A matching course needs an identifier with catalog '
            '"vhb" or a keyword starting with "LV_" that matches this number.',
            kinds.HEADING,
        ),
        Parameter(
            'local_scope',
            'Local scope',
            'Scope of the own institution in the entitlements. Only entitlements with this scope are assigned.',
            kinds.TEXT,
            '',
        ),
        Parameter(
            'entitlement_role_index',
            'Position of the role',
            'Position of the role in the colon separated entitlement (counted from 0).',
            kinds.INTEGER,
            5,
            min_value=0,
        ),
        Parameter(
            'entitlement_scope_index',
            'Position of the scope',
            'Position of the scope in the colon separated entitlement (counted from 0).',
            kinds.INTEGER,
            6,
            min_value=0,
        ),
        Parameter(
            'entitlement_course_index',
            'Position of the course number',
            'Position of the course number in the colon separated entitlement (counted from 0).',
            kinds.INTEGER,
            7,
            min_value=0,
        ),
        Parameter(
            'evaluator_role',
            'Evaluator role',
            'Pattern for the title of the course role given to users with the role "evaluation". '
            'May contain "?" or "*" as wildcards.',
            kinds.TEXT,
            'Kursgast*',
        ),
        Parameter(
            'guest_role',
            'Guest role',
            'Pattern for the title of the course role given to users with the role "appr". '
            'May contain "?" or "*" as wildcards.',
            kinds.TEXT,
            'Kursgast*',
        ),
        Parameter(
            'check_vhb_access',
            'Check platform access',
            'Only allow users whose entitlements carry the access marker. '
            'New users without any course entitlement are rejected, too.',
            kinds.BOOLEAN,
            False,
        ),
        Parameter(
            'vhb_access_marker',
            'Access marker',
            'Entitlement segment that grants access to the platform.',
            kinds.TEXT,
            'vhb-access',
        ),
        Parameter(
            'test_settings',
            'Test settings',
            'Replace attributes with fixed values for testing. Has no effect unless test mode is allowed '
            'in the server settings.',
            kinds.HEADING,
        ),
        Parameter(
            'test_activation',
            'Activation parameter',
            'Name of the query parameter of the login request that activates the test values.',
            kinds.TEXT,
            '',
        ),
        Parameter('test_firstname', 'Test first name', '', kinds.TEXT, ''),
        Parameter('test_lastname', 'Test last name', '', kinds.TEXT, ''),
        Parameter('test_email', 'Test email', '', kinds.TEXT, ''),
        Parameter('test_login', 'Test login', '', kinds.TEXT, ''),
        Parameter('test_entitlement', 'Test entitlement', '', kinds.TEXT, ''),
    ]


class ParameterCatalog:
    """Typed key/value configuration, persisted in `ConfigParam`"""

    def __init__(self, parameters=None):
        if parameters is None:
            parameters = build_parameters()

        self._params = OrderedDict((param.name, param) for param in parameters)

    @classmethod
    def load_current(cls):
        """Build the catalog and hydrate it from the database"""
        catalog = cls()
        catalog.load()
        return catalog

    def __contains__(self, name):
        return name in self._params

    def params(self):
        return list(self._params.values())

    def sections(self):
        """Group the parameters under their headings.

        Returns a list of `(heading, [parameters])`; parameters defined before
        the first heading are grouped under `None`.
        """
        sections = []
        heading, members = None, []

        for param in self._params.values():
            if param.kind.is_heading:
                if heading or members:
                    sections.append((heading, members))
                heading, members = param, []
            else:
                members.append(param)

        if heading or members:
            sections.append((heading, members))

        return sections

    def get(self, name):
        param = self._params.get(name)
        if param is None:
            return None
        return param.value

    def set(self, name, raw=None):
        param = self._params.get(name)
        if param is None:
            logger.debug('Ignoring unknown parameter %s', name)
            return
        param.set(raw)

    def load(self):
        for row in ConfigParam.objects.all():
            self.set(row.param_name, row.param_value)

    def save(self):
        for param in self._params.values():
            ConfigParam.objects.update_or_create(
                param_name=param.name,
                defaults={'param_value': param.serialize()},
            )
