from rest_framework import serializers
from django.contrib.auth import get_user_model
from core.serializers import StrictFieldsMixin
User = get_user_model()


# -------------------------------
# USER OUTPUT SERIALIZER
# -------------------------------
class UserSerializer(serializers.ModelSerializer):
    """Public view of an account; the password hash never leaves the server"""

    class Meta:
        model = User
        fields = ['id', 'username', 'role', 'name', 'email']
        read_only_fields = fields


# -------------------------------
# ACCOUNT CREATION SERIALIZERS
# -------------------------------
class AdminUserCreateSerializer(StrictFieldsMixin, serializers.Serializer):
    """Account creation by an admin; any role is allowed"""
    username = serializers.CharField(max_length=150, required=False, allow_blank=True)
    password = serializers.CharField(write_only=True, min_length=1)
    role = serializers.ChoiceField(choices=User.Role.choices)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField()
    studentId = serializers.CharField(max_length=150, required=False, allow_blank=True)

    def validate(self, attrs):
        role = attrs['role']
        if role == User.Role.STUDENT:
            if not attrs.get('name'):
                raise serializers.ValidationError({"name": ["Name is required for students."]})
            # Students sign in with their student ID
            if attrs.get('studentId'):
                attrs['username'] = attrs['studentId']
        attrs.pop('studentId', None)

        username = attrs.get('username')
        if not username:
            raise serializers.ValidationError({"username": ["This field is required."]})
        if self.context['storage'].get_user_by_username(username) is not None:
            raise serializers.ValidationError({"username": ["Username already exists."]})
        return attrs


class RegistrationSerializer(AdminUserCreateSerializer):
    """Self-registration; admin accounts cannot be created this way"""
    role = serializers.ChoiceField(choices=[
        (User.Role.STUDENT, "Student"),
        (User.Role.COMPANY, "Company"),
    ])


# -------------------------------
# AUTH SERIALIZERS
# -------------------------------
class LoginSerializer(StrictFieldsMixin, serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True)


class ResetPasswordSerializer(StrictFieldsMixin, serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True, min_length=1)


# -------------------------------
# ADMIN UPDATE SERIALIZER
# -------------------------------
class AdminUserUpdateSerializer(StrictFieldsMixin, serializers.Serializer):
    """Partial update of name/role/email; null keeps the stored value"""
    name = serializers.CharField(max_length=255, required=False, allow_null=True)
    role = serializers.ChoiceField(choices=User.Role.choices, required=False, allow_null=True)
    email = serializers.EmailField(required=False, allow_null=True)
