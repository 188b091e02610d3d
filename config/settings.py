import os
import sys

import dj_database_url
import environ

# Build paths inside the project like this: os.path.join(BASE_DIR, ...)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


# Set up .env
ENV_FILE = os.path.join(BASE_DIR, '.env')
if os.path.exists(ENV_FILE):
    environ.Env.read_env(ENV_FILE)
env = environ.Env(
    DEBUG=(bool, False),
    SHIBBOLETH_ALLOW_TEST_MODE=(bool, False),
)

SECRET_KEY = env('SECRET_KEY', default='insecure-development-key')
DEBUG = env('DEBUG', default=False)
ENV_NAME = env('ENV_NAME', default='test')  # 'test', 'staging' or 'prod'

ALLOWED_HOSTS = env('ALLOWED_HOSTS', default='localhost,testserver').split(',')

PLATFORM_NAME = env('PLATFORM_NAME', default='vhb')

# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    'vhbshib.core',
    'vhbshib.user',
    'vhbshib.params',
    'vhbshib.courses',
    'vhbshib.shibauth',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [
            os.path.join(BASE_DIR, 'vhbshib', 'templates'),
        ],
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'vhbshib.core.context_processors.template_settings',
            ],
            'loaders': [
                'django.template.loaders.filesystem.Loader',
                'django.template.loaders.app_directories.Loader',
            ]
        }
    }
]

WSGI_APPLICATION = 'config.wsgi.application'

# Database
DATABASES = {
    'default': dj_database_url.config(
        default='sqlite:///' + os.path.join(BASE_DIR, 'db.sqlite3')
    )
}

DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'

# Internationalization

LANGUAGE_CODE = 'de'

TIME_ZONE = 'Europe/Berlin'

USE_I18N = True

USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_ROOT = os.path.join(BASE_DIR, 'staticfiles')
STATIC_URL = '/static/'

# Auth / Shibboleth
AUTH_USER_MODEL = 'user.user'
LOGIN_URL = 'shibauth:start'
LOGIN_REDIRECT_URL = 'shibauth:logged-in'
LOGOUT_REDIRECT_URL = 'shibauth:start'

AUTHENTICATION_BACKENDS = (
    'django.contrib.auth.backends.ModelBackend',
    'vhbshib.shibauth.backends.ShibbolethBackend',
)

# user field => attribute name in the environment of the service provider
SHIBBOLETH_ATTRIBUTE_MAP = {
    'login': env('SHIB_LOGIN_ATTRIBUTE', default='eduPersonPrincipalName'),
    'first_name': env('SHIB_FIRSTNAME_ATTRIBUTE', default='givenName'),
    'last_name': env('SHIB_LASTNAME_ATTRIBUTE', default='sn'),
    'email': env('SHIB_EMAIL_ATTRIBUTE', default='mail'),
    'gender': env('SHIB_GENDER_ATTRIBUTE', default='gender'),
    'matriculation': env('SHIB_MATRICULATION_ATTRIBUTE', default='matriculation'),
    'title': env('SHIB_TITLE_ATTRIBUTE', default='personalTitle'),
    'institution': env('SHIB_INSTITUTION_ATTRIBUTE', default='o'),
}
SHIBBOLETH_ENTITLEMENT_ATTRIBUTE = env('SHIB_ENTITLEMENT_ATTRIBUTE', default='eduPersonEntitlement')

# fields of existing users refreshed on every login
SHIBBOLETH_UPDATE_FIELDS = env.list(
    'SHIB_UPDATE_FIELDS', default=['first_name', 'last_name', 'email', 'gender', 'title', 'institution']
)

SHIBBOLETH_DEFAULT_AUTH_MODE = 'shibboleth'

# preferences written for new users
SHIBBOLETH_DEFAULT_PREFERENCES = {
    'language': LANGUAGE_CODE,
    'public_profile': 'n',
}

# login parameter with a vhb course number to open after login
SHIBBOLETH_DEEP_LINK_PARAM = 'id'

# never enable in production: allows the test values of the settings form
SHIBBOLETH_ALLOW_TEST_MODE = env('SHIBBOLETH_ALLOW_TEST_MODE')

# suffix of the logins issued by vhb
VHB_LOGIN_SUFFIX = env('VHB_LOGIN_SUFFIX', default='@vhb.org')

# canonical url of a course of the learning platform
COURSE_URL_TEMPLATE = env('COURSE_URL_TEMPLATE', default='/goto.php?target=crs_{ref_id}')


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'stream': sys.stdout,
        }
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
    'loggers': {
        'x-auth': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'vhbshib': {
            'handlers': ['console'],
            'level': env('VHBSHIB_LOG_LEVEL', default='INFO'),
            'propagate': False,
        },
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
}

# session settings
SESSION_EXPIRE_AT_BROWSER_CLOSE = False
SESSION_COOKIE_AGE = env.int('SESSION_COOKIE_AGE_SECONDS', default=60 * 60 * 8)
SESSION_COOKIE_SAMESITE = 'Lax'
SESSION_COOKIE_SECURE = env.bool('SESSION_COOKIE_SECURE', default=not DEBUG)
SESSION_SAVE_EVERY_REQUEST = True

SECURE_CONTENT_TYPE_NOSNIFF = env.bool('SECURE_CONTENT_TYPE_NOSNIFF', True)
