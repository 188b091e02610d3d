import pytest

from vhbshib.shibauth.context import RequestContext
from vhbshib.shibauth.data import ShibAuthData, find_suffix_index, split_values
from vhbshib.shibauth.exceptions import ConfigAmbiguity

from .utils import VHB_ACCESS, entitlement


def get_data(catalog, attributes):
    return ShibAuthData(RequestContext(attributes), catalog)


class TestHelpers:
    def test_split_values(self):
        assert split_values('a; b ;c') == ['a', 'b', 'c']
        assert split_values('') == ['']
        assert split_values(None) == ['']

    def test_find_suffix_index(self):
        logins = ['a@tum.de', 'b@uni-erlangen.de', 'c@uni-erlangen.de']

        assert find_suffix_index(logins, '@uni-erlangen.de') == 1
        assert find_suffix_index(logins, '@vhb.org') is None
        assert find_suffix_index(logins, '') is None

    def test_find_suffix_index_needs_a_name_before_the_suffix(self):
        assert find_suffix_index(['@uni-erlangen.de'], '@uni-erlangen.de') is None


class TestShibAuthData:
    def test_local_user(self, catalog, shib_env):
        data = get_data(catalog, shib_env(login='vhbtest@uni-erlangen.de'))

        assert data.is_local
        assert data.local_user_name == 'vhbtest'
        assert data.login == 'vhbtest@uni-erlangen.de'
        assert data.first_name == 'Erika'
        assert data.last_name == 'Mustermann'
        assert data.email == 'erika@example.com'
        assert data.aggregation_index == 0

    def test_external_user(self, catalog, shib_env):
        data = get_data(catalog, shib_env(login='1234@vhb.org'))

        assert not data.is_local
        assert data.local_user_name == ''

    def test_missing_attributes_are_empty(self, catalog):
        data = get_data(catalog, {})

        assert data.login == ''
        assert data.title == ''
        assert data.institution == ''
        assert data.entitlements == []

    def test_aggregated_values_follow_the_local_login(self, catalog, shib_env):
        data = get_data(
            catalog,
            shib_env(
                login='x@tum.de;y@uni-erlangen.de',
                givenName='Max;Erika',
                sn='Muster;Mustermann',
                mail='max@tum.de;erika@uni-erlangen.de',
            ),
        )

        assert data.aggregation_index == 1
        assert data.login == 'y@uni-erlangen.de'
        assert data.local_user_name == 'y'
        assert data.first_name == 'Erika'
        assert data.last_name == 'Mustermann'
        assert data.email == 'erika@uni-erlangen.de'

    def test_aggregated_values_follow_the_vhb_login(self, catalog, shib_env):
        data = get_data(
            catalog,
            shib_env(login='x@tum.de;4711@vhb.org', givenName='Max;Erika'),
        )

        assert not data.is_local
        assert data.aggregation_index == 1
        assert data.login == '4711@vhb.org'
        assert data.first_name == 'Erika'

    def test_aggregated_values_default_to_the_first_one(self, catalog, shib_env):
        data = get_data(catalog, shib_env(login='x@tum.de;y@lmu.de', givenName='Max;Erika'))

        assert data.aggregation_index == 0
        assert data.login == 'x@tum.de'
        assert data.first_name == 'Max'

    def test_shorter_attribute_falls_back_to_its_first_value(self, catalog, shib_env):
        data = get_data(
            catalog,
            shib_env(login='a@tum.de;b@lmu.de;c@uni-erlangen.de', givenName='Max;Erika'),
        )

        assert data.aggregation_index == 2
        assert data.first_name == 'Max'

    def test_aggregation_aborts_when_resolving_is_disabled(self, catalog, shib_env):
        catalog.set('resolve_aggregation', False)

        with pytest.raises(ConfigAmbiguity) as excinfo:
            get_data(catalog, shib_env(login='x@tum.de;y@uni-erlangen.de'))

        assert excinfo.value.field == 'login'
        assert excinfo.value.values == ['x@tum.de', 'y@uni-erlangen.de']
        assert '2 values' in excinfo.value.message

    def test_single_values_pass_when_resolving_is_disabled(self, catalog, shib_env):
        catalog.set('resolve_aggregation', False)

        data = get_data(catalog, shib_env())

        assert data.login == 'stud1@uni-erlangen.de'

    def test_entitlements_are_not_deaggregated(self, catalog, shib_env):
        catalog.set('resolve_aggregation', False)
        entitlements = (entitlement('student', 'LV_1_1_1'), VHB_ACCESS)

        data = get_data(catalog, shib_env(entitlements=entitlements))

        assert data.entitlements == list(entitlements)

    def test_empty_entitlements_are_dropped(self, catalog, shib_env):
        data = get_data(catalog, shib_env(eduPersonEntitlement=f';{VHB_ACCESS};;'))

        assert data.entitlements == [VHB_ACCESS]

    @pytest.mark.parametrize(
        'raw, expected',
        [
            ('1', 'm'),
            ('2', 'f'),
            ('0', 'n'),
            ('m', 'm'),
            ('F', 'f'),
            ('', 'n'),
            ('9', 'n'),
        ],
    )
    def test_gender(self, catalog, shib_env, raw, expected):
        data = get_data(catalog, shib_env(gender=raw))

        assert data.gender == expected

    def test_matriculation_from_the_attribute(self, catalog, shib_env):
        data = get_data(catalog, shib_env(login='4711@vhb.org', matriculation='22334455'))

        assert data.matriculation == '22334455'

    def test_matriculation_from_the_vhb_login(self, catalog, shib_env):
        catalog.set('external_user_matriculation', True)

        data = get_data(catalog, shib_env(login='4711@vhb.org', matriculation='22334455'))

        assert data.matriculation == '4711'

    def test_matriculation_needs_a_numeric_vhb_login(self, catalog, shib_env):
        catalog.set('external_user_matriculation', True)

        data = get_data(catalog, shib_env(login='abc@vhb.org', matriculation='22334455'))

        assert data.matriculation == '22334455'

    def test_matriculation_of_local_users_is_not_derived(self, catalog, shib_env):
        catalog.set('external_user_matriculation', True)

        data = get_data(catalog, shib_env(matriculation='22334455'))

        assert data.matriculation == '22334455'

    def test_get_data(self, catalog, shib_env):
        data = get_data(catalog, shib_env(entitlements=[VHB_ACCESS]))

        result = data.get_data()

        assert result['login'] == 'stud1@uni-erlangen.de'
        assert result['entitlements'] == [VHB_ACCESS]


class TestRequestContext:
    def test_get(self):
        context = RequestContext({'mail': 'a@b.de', 'empty': None})

        assert context.get('mail') == 'a@b.de'
        assert context.get('empty') == ''
        assert context.get('missing', 'x') == 'x'

    def test_test_mode_needs_the_server_setting(self, settings, catalog):
        settings.SHIBBOLETH_ALLOW_TEST_MODE = False
        catalog.set('test_activation', 'vhbtest')

        context = RequestContext({}, query={'vhbtest': ''})

        assert not context.is_test_mode(catalog)

    def test_test_mode_needs_the_activation_parameter(self, settings, catalog):
        settings.SHIBBOLETH_ALLOW_TEST_MODE = True
        catalog.set('test_activation', 'vhbtest')

        assert RequestContext({}, query={'vhbtest': ''}).is_test_mode(catalog)
        assert not RequestContext({}, query={'other': ''}).is_test_mode(catalog)

    def test_test_mode_needs_a_configured_activation(self, settings, catalog):
        settings.SHIBBOLETH_ALLOW_TEST_MODE = True

        assert not RequestContext({}, query={'': ''}).is_test_mode(catalog)

    def test_apply_test_values(self, catalog, shib_env):
        catalog.set('test_login', 'tester@uni-erlangen.de')
        catalog.set('test_firstname', 'Theo')
        catalog.set('test_entitlement', entitlement('student', 'LV_9_9_9'))

        context = RequestContext(shib_env())
        context.apply_test_values(catalog)

        assert context.get('eduPersonPrincipalName') == 'tester@uni-erlangen.de'
        assert context.get('givenName') == 'Theo'
        assert context.get('sn') == 'Mustermann'
        assert context.get('eduPersonEntitlement') == entitlement('student', 'LV_9_9_9')
