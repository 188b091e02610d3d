import datetime as dt
import json
import logging

from django.conf import settings

from .ip_filter import get_client_ip


logger = logging.getLogger("x-auth")


def create_x_access_log(request, status_code, message="", **extra_fields):
    """
    Create a x-application access log, one JSON object per line.
    """

    user = getattr(request, "user", None)
    authenticated = bool(user and user.is_authenticated)

    log = {
        "request_time": str(dt.datetime.now(dt.timezone.utc)),
        "login": user.login if authenticated else None,
        "local_user_id": user.pk if authenticated else None,
        "path": request.path,
        "url": {"domain": request.get_host()},
        "status": status_code,
        "ip": get_client_ip(request),
        "message": message,
        "service": "vhbshib {}".format(settings.ENV_NAME),
    }

    log.update(**extra_fields)

    logger.info(json.dumps(log))
