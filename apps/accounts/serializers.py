from rest_framework import serializers
from .models import User, UserRole


class UserSerializer(serializers.ModelSerializer):
    """User profile as returned to its owner."""

    class Meta:
        model = User
        fields = [
            'id',
            'login',
            'email',
            'name',
            'avatar',
            'role',
            'user_information',
            'favorite_route_ids',
            'favorite_place_ids',
            'favorite_service_ids',
            'created_at',
        ]
        read_only_fields = fields


class AdminUserSerializer(serializers.ModelSerializer):
    """User row in the administration list."""

    class Meta:
        model = User
        fields = [
            'id',
            'login',
            'email',
            'name',
            'avatar',
            'role',
            'is_banned',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    login = serializers.CharField(max_length=150)
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(
        write_only=True,
        style={'input_type': 'password'}
    )
    name = serializers.CharField(max_length=150, required=False, allow_blank=True)


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    login = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ProfileUpdateSerializer(serializers.Serializer):
    """Partial profile update, including an optional password change."""

    name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    email = serializers.EmailField(max_length=255, required=False)
    user_information = serializers.JSONField(required=False)
    current_password = serializers.CharField(required=False, write_only=True)
    new_password = serializers.CharField(required=False, write_only=True)

    def validate_user_information(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError('Must be an object')
        return value

    def validate(self, attrs):
        if 'new_password' in attrs and not attrs.get('current_password'):
            raise serializers.ValidationError({
                'current_password': 'Current password is required to set a new one'
            })
        return attrs


class AvatarUploadSerializer(serializers.Serializer):
    avatar = serializers.FileField()


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.CharField(max_length=20)


class UserListQuerySerializer(serializers.Serializer):
    """Query parameters for the administration user list."""

    search = serializers.CharField(required=False, allow_blank=True, default='')
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
    include_superadmin = serializers.BooleanField(required=False, default=False)
    sort_by = serializers.ChoiceField(
        choices=['email', 'login', 'name', 'role', 'created_at'],
        required=False,
        default='created_at',
    )
    sort_order = serializers.ChoiceField(choices=['asc', 'desc'], required=False, default='desc')
