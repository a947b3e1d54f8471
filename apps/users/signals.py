import logging

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS
from django.db.models import Q

from .models import ROLE_SUPER_ADMIN, AdminUser

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"


def create_default_admin(sender, using=DEFAULT_DB_ALIAS, **kwargs):
    """Create the first super admin once, never overwrite it."""
    manager = AdminUser.objects.db_manager(using)
    if manager.filter(Q(username=DEFAULT_ADMIN_USERNAME) | Q(email=settings.ADMIN_EMAIL)).exists():
        return

    manager.create_superuser(
        username=DEFAULT_ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        password=settings.ADMIN_PASSWORD,
        role=ROLE_SUPER_ADMIN,
    )
    logger.info("Default admin user '%s' created", DEFAULT_ADMIN_USERNAME)
