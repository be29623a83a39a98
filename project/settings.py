"""Django settings for the concurrent-indexes project

Everything environment-specific is read from environment variables.
"""
import os

from project.utils import here


BASE_DIR = here('..')

SECRET_KEY = os.environ.get('SECRET_KEY', 'c1^zl%*i9b-h@f6)_dxjm(tm#r5zt!y@ohe3q3h3da4c@v&9(x')

DEBUG = os.environ.get('DEBUG', 'true').lower() in ('1', 'true', 'yes')

ALLOWED_HOSTS = [h for h in os.environ.get('ALLOWED_HOSTS', '').split(' ') if h]

INSTALLED_APPS = [
    'django.contrib.postgres',
    'indexing',
    'catalog',
]

DATABASES = {
    'default': {
        'ENGINE': 'db.backends.postgresql',
        'NAME': os.environ.get('DATABASE_NAME', 'concurrent_indexes'),
        'USER': os.environ.get('DATABASE_USER', 'postgres'),
        'PASSWORD': os.environ.get('DATABASE_PASSWORD', ''),
        'HOST': os.environ.get('DATABASE_HOST', 'localhost'),
        'PORT': os.environ.get('DATABASE_PORT', '5432'),
        'CONN_MAX_AGE': int(os.environ.get('CONN_MAX_AGE', 0)),
        'TEST': {
            'SERIALIZE': False,
        },
    },
}

DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'

USE_TZ = True
TIME_ZONE = 'UTC'

# milliseconds to wait for the brief locks a concurrent build still takes; 0 waits forever
CONCURRENT_INDEX_LOCK_TIMEOUT = int(os.environ.get('CONCURRENT_INDEX_LOCK_TIMEOUT', 0))

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
LOG_FORMATTER = os.environ.get('LOG_FORMATTER', 'console')

LOGGING_CONFIG = 'project.log.configure'

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
        'json': {
            '()': 'project.logging_formatter.JsonLogFormatter',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': LOG_FORMATTER,
            'level': LOG_LEVEL,
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
        'db': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'indexing': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
}
