from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class UserRole(models.TextChoices):
    USER = 'USER', 'User'
    ADMIN = 'ADMIN', 'Administrator'
    SUPERADMIN = 'SUPERADMIN', 'Super administrator'


class UserManager(BaseUserManager):
    """Custom user manager for login-based authentication."""

    def create_user(self, login, email, password=None, **extra_fields):
        if not login:
            raise ValueError('Login is required')
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        extra_fields.setdefault('name', login)
        user = self.model(login=login, email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, login, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', UserRole.SUPERADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(login, email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Portal user: tourists, content administrators and super administrators."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    login = models.CharField(unique=True, max_length=150, db_index=True)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    name = models.CharField(max_length=150, blank=True)
    avatar = models.CharField(max_length=500, blank=True, null=True)

    role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.USER)
    is_banned = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Free-form profile data edited by the user
    user_information = models.JSONField(default=dict, blank=True)

    # Favorites hold entity ids as strings
    favorite_route_ids = models.JSONField(default=list, blank=True)
    favorite_place_ids = models.JSONField(default=list, blank=True)
    favorite_service_ids = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'login'
    REQUIRED_FIELDS = ['email']

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['role'], name='users_role_idx'),
            models.Index(fields=['created_at'], name='users_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.login

    @property
    def is_admin(self):
        return self.role in (UserRole.ADMIN, UserRole.SUPERADMIN)

    @property
    def is_superadmin(self):
        return self.role == UserRole.SUPERADMIN

    def get_display_name(self):
        """Return name or login."""
        return self.name or self.login
