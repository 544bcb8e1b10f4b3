import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent
# Try root project .env (one directory up from BASE_DIR) first, then local
root_env = (BASE_DIR.parent / '.env')
local_env = (BASE_DIR / '.env')
if root_env.exists():
    load_dotenv(root_env)
elif local_env.exists():
    load_dotenv(local_env)

# ---------------------------------------------------------------------------
# SECRET KEY HANDLING
# Prefer DJANGO_SECRET_KEY, fall back to SECRET_KEY.
# In production (DEBUG=False) we require a non-default, non-empty key.
# ---------------------------------------------------------------------------
_candidate_key = (
    os.getenv('DJANGO_SECRET_KEY')
    or os.getenv('SECRET_KEY')
    or ''
)

SECRET_KEY = _candidate_key if _candidate_key else 'dev-secret-key'
DEBUG = os.getenv('DEBUG', 'True') == 'True'
ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', '*').split(',')

if (not SECRET_KEY or SECRET_KEY == 'dev-secret-key') and not DEBUG:
    raise ImproperlyConfigured(
        'SECRET_KEY is missing or using insecure default. Set DJANGO_SECRET_KEY or SECRET_KEY env var.'
    )

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'apps.common',
    'apps.stores',
    'apps.users',
    'apps.catalog',
    'apps.carts',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': os.getenv('POSTGRES_DB', 'storefront'),
        'USER': os.getenv('POSTGRES_USER', 'storefront'),
        'PASSWORD': os.getenv('POSTGRES_PASSWORD', 'storefront'),
        'HOST': os.getenv('POSTGRES_HOST', 'db'),
        'PORT': os.getenv('POSTGRES_PORT', '5432'),
    }
}

# Caching (Redis by default). Availability ranges and other rarely changing
# catalog lookups are read through this cache; cache outages fail open.
REDIS_URL = os.getenv('REDIS_URL', 'redis://redis:6379/1')
CACHE_TTL = int(os.getenv('CACHE_TTL', '300'))  # seconds

CACHES = {
    'default': {
        'BACKEND': 'django_redis.cache.RedisCache',
        'LOCATION': REDIS_URL,
        'OPTIONS': {
            'CLIENT_CLASS': 'django_redis.client.DefaultClient',
            'IGNORE_EXCEPTIONS': True,
        },
        'KEY_PREFIX': os.getenv('CACHE_KEY_PREFIX', 'storefront'),
        'TIMEOUT': CACHE_TTL,
    }
}

# Use SQLite for tests to simplify CI/dev without Postgres
USING_PYTEST = (
    os.getenv('PYTEST_CURRENT_TEST') is not None
    or any(os.path.basename(arg).startswith('pytest') for arg in sys.argv)
    # `python -m pytest` leaves only the module path in argv
    or 'pytest' in sys.modules
)

if 'test' in sys.argv or USING_PYTEST:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'storefront-test-cache',
            'TIMEOUT': 60,
        }
    }

LANGUAGE_CODE = 'en-us'
LANGUAGES = [
    ('en', 'English'),
    ('de', 'German'),
    ('tr', 'Turkish'),
]
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

AUTH_USER_MODEL = 'users.User'

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'plain': {'format': '%(asctime)s %(levelname)s %(name)s %(message)s'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'plain'},
    },
    'loggers': {
        'apps': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}

# Store served when a request does not name one (apps.stores.context.WorkContext)
CURRENT_STORE_ID = int(os.getenv('CURRENT_STORE_ID', '1'))

# ---------------------------------------------------------------------------
# SHOPPING CART
# Read by apps.carts.conf.get_cart_settings(); every key can be overridden
# through the environment so deployments do not need a settings fork.
# ---------------------------------------------------------------------------
SHOPPING_CART = {
    'STORE_TIME_ZONE': os.getenv('CART_STORE_TIME_ZONE', TIME_ZONE),
    'MAXIMUM_SHOPPING_CART_ITEMS': int(os.getenv('CART_MAX_ITEMS', '1000')),
    'MAXIMUM_WISHLIST_ITEMS': int(os.getenv('CART_MAX_WISHLIST_ITEMS', '1000')),
    'ALLOW_OUT_OF_STOCK_ITEMS_TO_BE_ADDED_TO_WISHLIST': os.getenv(
        'CART_ALLOW_OUT_OF_STOCK_WISHLIST', 'False'
    ) == 'True',
    'ALLOW_ADMINS_TO_BUY_CALL_FOR_PRICE_PRODUCTS': os.getenv(
        'CART_ADMINS_BUY_CALL_FOR_PRICE', 'True'
    ) == 'True',
    'REMOVE_REQUIRED_PRODUCTS': os.getenv('CART_REMOVE_REQUIRED_PRODUCTS', 'False') == 'True',
    'USE_LINKS_IN_REQUIRED_PRODUCT_WARNINGS': os.getenv(
        'CART_REQUIRED_PRODUCT_LINKS', 'True'
    ) == 'True',
    'PRODUCT_URL_TEMPLATE': os.getenv('CART_PRODUCT_URL_TEMPLATE', '/{slug}'),
    'PUBLIC_PERMISSIONS': ['enable_shopping_cart', 'enable_wishlist'],
    'CURRENCY_SYMBOL': os.getenv('CART_CURRENCY_SYMBOL', '$'),
    'EXPIRED_ITEMS_DAYS': int(os.getenv('CART_EXPIRED_ITEMS_DAYS', '30')),
}
