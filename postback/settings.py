"""
Settings for the postback ingest Django service
"""

import os

PROJ_ROOT = os.path.dirname(os.path.realpath(__file__))

DEBUG = os.getenv('DEBUG', 'False') == 'True'

ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')
SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-placeholder-change-me')

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'postback.ingest',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'postback.urls'
WSGI_APPLICATION = 'postback.wsgi.application'

# Postbacks are never persisted; the in-memory database only satisfies the
# test runner.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

USE_TZ = True
TIME_ZONE = 'UTC'

# Placeholder delimiters used in endpoint URL templates
POSTBACK_PARAM_START_DELIMITER = os.getenv('POSTBACK_PARAM_START_DELIMITER', '{')
POSTBACK_PARAM_END_DELIMITER = os.getenv('POSTBACK_PARAM_END_DELIMITER', '}')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': os.getenv('POSTBACK_LOG_LEVEL', 'INFO'),
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': os.getenv('DJANGO_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
