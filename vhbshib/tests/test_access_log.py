import json

import pytest
from freezegun import freeze_time

from vhbshib.core.logging import create_x_access_log
from vhbshib.tests.factories.user import UserFactory


class TestAppAccessLog:
    @freeze_time('2017-06-22 15:50:00.000000+00:00')
    def test_anonymous_request(self, rf, mocker):
        mock_logger = mocker.patch('vhbshib.core.logging.logger')

        request = rf.get('/whatever/')

        create_x_access_log(request, 200)

        mock_logger.info.assert_called_once()
        assert json.loads(mock_logger.info.call_args[0][0]) == \
            {
                "request_time": "2017-06-22 15:50:00+00:00",
                "login": None,
                "local_user_id": None,
                "path": "/whatever/",
                "url": {"domain": "testserver"},
                "status": 200,
                "ip": "127.0.0.1",
                "message": "",
                "service": "vhbshib test"
            }

    @pytest.mark.django_db
    @freeze_time('2017-06-22 15:50:00.000000+00:00')
    def test_user_info_is_logged(self, rf, mocker):
        mock_logger = mocker.patch('vhbshib.core.logging.logger')

        request = rf.get('/whatever/', HTTP_X_FORWARDED_FOR='10.1.1.1, 10.2.2.2')
        user = UserFactory()
        request.user = user

        create_x_access_log(request, 403, message='test message', external_account='4711@vhb.org')

        mock_logger.info.assert_called_once()
        assert json.loads(mock_logger.info.call_args[0][0]) == \
            {
                "request_time": "2017-06-22 15:50:00+00:00",
                "login": user.login,
                "local_user_id": user.pk,
                "path": "/whatever/",
                "url": {"domain": "testserver"},
                "status": 403,
                "ip": "10.1.1.1",
                "message": "test message",
                "external_account": "4711@vhb.org",
                "service": "vhbshib test"
            }
