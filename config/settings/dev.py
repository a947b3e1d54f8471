from .base import *

DEBUG = True

ACCESS_TOKEN_COOKIE_SECURE = False

ALLOWED_HOSTS = os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

EMAIL_BACKEND = os.getenv("EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend")

SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"] = timedelta(minutes=300)
