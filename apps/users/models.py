from django.contrib.auth.base_user import BaseUserManager
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.db.models import Q

from apps.common.models import BaseModel

ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super_admin"
ROLE_CHOICES = [(ROLE_ADMIN, "Admin"), (ROLE_SUPER_ADMIN, "Super Admin")]


class AdminUserManager(BaseUserManager):
    def get_by_login(self, login):
        """Admins may sign in with either their username or their email."""
        return self.filter(Q(username=login) | Q(email=login)).first()

    def create_user(self, username, email, password, **extra_fields):
        if not username:
            raise ValueError("Username is required.")
        if not email:
            raise ValueError("Email is required.")
        if not password:
            raise ValueError("Password is required.")
        email = self.normalize_email(email)
        user = self.model(username=username, email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, username, email, password, **extra_fields):
        extra_fields.setdefault("role", ROLE_SUPER_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        return self.create_user(username, email, password, **extra_fields)


class AdminUser(BaseModel, AbstractBaseUser, PermissionsMixin):
    username = models.CharField(max_length=50, unique=True)
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=128, db_column="password_hash")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_ADMIN)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=True)  # every admin may use the Django admin site

    USERNAME_FIELD = "username"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["email"]

    objects = AdminUserManager()

    class Meta:
        db_table = "admin_users"

    def __str__(self):
        return f"{self.username} ({self.role})"
