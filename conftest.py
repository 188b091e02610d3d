import pytest

from vhbshib.params.catalog import ParameterCatalog
from vhbshib.tests.utils import LOCAL_SCOPE


@pytest.fixture
def catalog():
    """Pytest fixture for a parameter catalog with the local scope configured, not persisted."""
    catalog = ParameterCatalog()
    catalog.set('local_scope', LOCAL_SCOPE)
    return catalog


@pytest.fixture
def shib_env():
    """Pytest fixture building the environment the service provider passes to the login view."""

    def _env(login='stud1@uni-erlangen.de', entitlements=(), **attributes):
        env = {
            'eduPersonPrincipalName': login,
            'givenName': 'Erika',
            'sn': 'Mustermann',
            'mail': 'erika@example.com',
            'gender': '2',
        }
        if entitlements:
            env['eduPersonEntitlement'] = ';'.join(entitlements)
        env.update(attributes)
        return env

    return _env
