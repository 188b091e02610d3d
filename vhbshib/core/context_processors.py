from django.conf import settings


def template_settings(request):
    return {
        'PLATFORM_NAME': getattr(settings, 'PLATFORM_NAME', None)
    }
