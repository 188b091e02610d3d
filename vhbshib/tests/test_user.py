import pytest

from vhbshib.user.models import User

from .factories.user import UserFactory


pytestmark = [
    pytest.mark.django_db
]


class TestUser:
    def test_full_name(self):
        user = UserFactory(first_name='Erika', last_name='Mustermann')

        assert user.get_full_name() == 'Erika Mustermann'
        assert user.get_short_name() == 'Erika Mustermann'

    def test_full_name_falls_back_to_the_login(self):
        user = UserFactory(login='stud1', first_name='', last_name='')

        assert user.get_full_name() == 'stud1'

    def test_preferences(self):
        user = UserFactory()

        assert user.get_pref('language') is None
        assert user.get_pref('language', 'en') == 'en'

        user.write_pref('language', 'de')
        user.write_pref('language', 'en')

        assert user.get_pref('language') == 'en'
        assert user.preferences.count() == 1

    def test_create_superuser(self):
        user = User.objects.create_superuser('admin', 'secret')

        assert user.is_staff
        assert user.is_superuser
        assert user.check_password('secret')

    def test_create_user_needs_a_login(self):
        with pytest.raises(ValueError):
            User.objects.create_user('')

    def test_external_account_lookup(self):
        user = UserFactory(external_account='4711@vhb.org')

        assert User.objects.get_by_external_account('4711@vhb.org') == user

        with pytest.raises(User.DoesNotExist):
            User.objects.get_by_external_account('4712@vhb.org')
