import pytest
from django.urls import reverse

from vhbshib.params import kinds
from vhbshib.params.catalog import Parameter, ParameterCatalog
from vhbshib.params.models import ConfigParam
from vhbshib.shibauth.entitlements import EntitlementParser

from .factories.user import UserFactory


SETTINGS_URL = reverse('params:settings')


class TestParameterKinds:
    @pytest.mark.parametrize(
        'raw, expected',
        [
            (True, True),
            (False, False),
            ('1', True),
            ('', False),
            ('0', False),
            ('false', False),
            ('yes', True),
            (0, False),
        ],
    )
    def test_boolean_coercion(self, raw, expected):
        param = Parameter('flag', 'Flag', kind=kinds.BOOLEAN)
        param.set(raw)

        assert param.value is expected

    def test_integer_coercion(self):
        param = Parameter('number', 'Number', kind=kinds.INTEGER)

        param.set('42')
        assert param.value == 42

        param.set('')
        assert param.value is None

        param.set('abc')
        assert param.value is None

    def test_number_below_minimum(self):
        param = Parameter('position', 'Position', kind=kinds.INTEGER, min_value=0)

        param.set('0')
        assert param.value == 0

        param.set('-1')
        assert param.value is None

    def test_float_coercion(self):
        param = Parameter('ratio', 'Ratio', kind=kinds.FLOAT)

        param.set('0.25')
        assert param.value == 0.25

        param.set(3)
        assert param.value == 3.0
        assert isinstance(param.value, float)

    def test_text_coercion(self):
        param = Parameter('name', 'Name', kind=kinds.TEXT)
        param.set(12)

        assert param.value == '12'

    def test_select_keeps_known_option(self):
        param = Parameter('mode', 'Mode', kind=kinds.SELECT, options=(('a', 'A'), ('b', 'B')))
        param.set('b')

        assert param.value == 'b'

    def test_select_falls_back_to_first_option(self):
        param = Parameter('mode', 'Mode', kind=kinds.SELECT, options=(('a', 'A'), ('b', 'B')))
        param.set('c')

        assert param.value == 'a'

    def test_none_is_kept(self):
        param = Parameter('number', 'Number', kind=kinds.INTEGER, value=5)
        param.set(None)

        assert param.value is None

    def test_heading_has_no_value(self):
        param = Parameter('section', 'Section', kind=kinds.HEADING)
        param.set('anything')

        assert param.value is None

    def test_boolean_serialization(self):
        assert kinds.BOOLEAN.serialize(True) == '1'
        assert kinds.BOOLEAN.serialize(False) == ''
        assert kinds.BOOLEAN.serialize(None) is None


class TestParameterCatalog:
    def test_defaults(self):
        catalog = ParameterCatalog()

        assert catalog.get('evaluator_role') == 'Kursgast*'
        assert catalog.get('resolve_aggregation') is True
        assert catalog.get('entitlement_course_index') == 7

    def test_get_unknown_parameter(self):
        assert ParameterCatalog().get('no_such_param') is None

    def test_set_unknown_parameter_is_ignored(self):
        catalog = ParameterCatalog()
        catalog.set('no_such_param', 'value')

        assert 'no_such_param' not in catalog
        assert catalog.get('no_such_param') is None

    def test_set_coerces_by_kind(self):
        catalog = ParameterCatalog()

        catalog.set('check_vhb_access', '1')
        catalog.set('entitlement_role_index', '4')

        assert catalog.get('check_vhb_access') is True
        assert catalog.get('entitlement_role_index') == 4

    def test_negative_entitlement_position_is_rejected(self):
        catalog = ParameterCatalog()

        catalog.set('entitlement_course_index', -1)

        assert catalog.get('entitlement_course_index') is None
        assert EntitlementParser.from_catalog(catalog).course_index == 7

    def test_params_keep_catalog_order(self):
        names = [param.name for param in ParameterCatalog().params()]

        assert names[0] == 'auth_settings'
        assert names.index('local_user_suffix') < names.index('entitle_settings') < names.index('local_scope')

    def test_sections_are_grouped_by_heading(self):
        sections = ParameterCatalog().sections()

        headings = [heading.name for heading, _ in sections]
        assert headings == ['auth_settings', 'entitle_settings', 'test_settings']

        auth_members = [param.name for param in sections[0][1]]
        assert 'local_user_suffix' in auth_members
        assert 'local_scope' not in auth_members

    def test_sections_without_leading_heading(self):
        catalog = ParameterCatalog([
            Parameter('first', 'First'),
            Parameter('head', 'Head', kind=kinds.HEADING),
            Parameter('second', 'Second'),
        ])

        sections = catalog.sections()

        assert sections[0][0] is None
        assert [param.name for param in sections[0][1]] == ['first']
        assert sections[1][0].name == 'head'


@pytest.mark.django_db
class TestParameterPersistence:
    def test_load_overwrites_present_keys_only(self):
        ConfigParam.objects.create(param_name='local_scope', param_value='uni-passau.de')

        catalog = ParameterCatalog.load_current()

        assert catalog.get('local_scope') == 'uni-passau.de'
        assert catalog.get('evaluator_role') == 'Kursgast*'

    def test_load_ignores_unknown_keys(self):
        ConfigParam.objects.create(param_name='removed_param', param_value='x')

        catalog = ParameterCatalog.load_current()

        assert 'removed_param' not in catalog

    def test_load_coerces_values(self):
        ConfigParam.objects.create(param_name='check_vhb_access', param_value='1')
        ConfigParam.objects.create(param_name='resolve_aggregation', param_value='')
        ConfigParam.objects.create(param_name='entitlement_scope_index', param_value='3')

        catalog = ParameterCatalog.load_current()

        assert catalog.get('check_vhb_access') is True
        assert catalog.get('resolve_aggregation') is False
        assert catalog.get('entitlement_scope_index') == 3

    def test_save_writes_every_parameter(self):
        catalog = ParameterCatalog()
        catalog.save()

        assert ConfigParam.objects.count() == len(catalog.params())
        assert ConfigParam.objects.get(param_name='resolve_aggregation').param_value == '1'
        assert ConfigParam.objects.get(param_name='auth_settings').param_value is None

    def test_save_is_an_upsert(self):
        catalog = ParameterCatalog()
        catalog.save()

        catalog.set('local_scope', 'tum.de')
        catalog.save()

        assert ConfigParam.objects.filter(param_name='local_scope').count() == 1
        assert ConfigParam.objects.get(param_name='local_scope').param_value == 'tum.de'

    def test_round_trip(self):
        catalog = ParameterCatalog()
        catalog.set('local_scope', 'uni-erlangen.de')
        catalog.set('local_user_take_login', True)
        catalog.set('resolve_aggregation', False)
        catalog.set('entitlement_course_index', 8)
        catalog.set('local_user_auth_mode', 'ldap')
        catalog.save()

        loaded = ParameterCatalog.load_current()

        for param in catalog.params():
            assert loaded.get(param.name) == param.value


@pytest.mark.django_db
class TestSettingsView:
    def get_post_data(self, **overrides):
        data = {
            'local_user_suffix': '@uni-erlangen.de',
            'local_user_auth_mode': '',
            'external_user_login_prefix': '',
            'external_user_auth_mode': 'shibboleth',
            'resolve_aggregation': 'on',
            'local_scope': 'uni-erlangen.de',
            'entitlement_role_index': '5',
            'entitlement_scope_index': '6',
            'entitlement_course_index': '7',
            'evaluator_role': 'Evaluator*',
            'guest_role': 'Kursgast*',
            'vhb_access_marker': 'vhb-access',
            'test_activation': '',
            'test_firstname': '',
            'test_lastname': '',
            'test_email': '',
            'test_login': '',
            'test_entitlement': '',
        }
        data.update(overrides)
        return data

    def test_requires_staff(self, client):
        client.force_login(UserFactory())

        response = client.get(SETTINGS_URL)

        assert response.status_code == 302
        assert '/admin/login/' in response.url

    def test_shows_one_input_per_parameter(self, client):
        client.force_login(UserFactory(is_staff=True))

        response = client.get(SETTINGS_URL)

        content = response.content.decode('utf-8')
        assert response.status_code == 200
        assert 'name="local_scope"' in content
        assert 'name="check_vhb_access"' in content
        assert 'name="entitlement_role_index"' in content
        assert 'Course assignment settings' in content

    def test_save_settings(self, client):
        client.force_login(UserFactory(is_staff=True))

        response = client.post(SETTINGS_URL, self.get_post_data(check_vhb_access='on'))

        assert response.status_code == 302
        assert response.url == SETTINGS_URL

        catalog = ParameterCatalog.load_current()
        assert catalog.get('evaluator_role') == 'Evaluator*'
        assert catalog.get('check_vhb_access') is True
        assert catalog.get('local_user_take_login') is False
        assert catalog.get('external_user_auth_mode') == 'shibboleth'

    def test_invalid_input_is_redisplayed(self, client):
        client.force_login(UserFactory(is_staff=True))

        response = client.post(SETTINGS_URL, self.get_post_data(entitlement_role_index='five'))

        assert response.status_code == 200
        assert response.context['form'].errors['entitlement_role_index']
        assert not ConfigParam.objects.exists()

    def test_negative_position_is_redisplayed(self, client):
        client.force_login(UserFactory(is_staff=True))

        response = client.post(SETTINGS_URL, self.get_post_data(entitlement_scope_index='-2'))

        assert response.status_code == 200
        assert response.context['form'].errors['entitlement_scope_index']
        assert not ConfigParam.objects.exists()
