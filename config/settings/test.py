from .base import *

DEBUG = False

SECRET_KEY = "test-secret-key-for-testing-only"
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY

# DB_ENGINE=postgres runs the suite against PostgreSQL. SQLite tests use a
# file database so threads in transactional tests share one real database.
if DB_ENGINE != "postgres":
    DATABASES["default"]["TEST"] = {"NAME": str(BASE_DIR / "test_school.db")}

CACHES = {"default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}}

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = False
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {**REST_FRAMEWORK, "DEFAULT_THROTTLE_CLASSES": ()}

ADMIN_PASSWORD = "admin123"
ADMIN_EMAIL = "admin@musabmemorial.edu.ng"
