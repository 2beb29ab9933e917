import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import AccessToken

from fleetrent.exceptions import (
    Conflict, FailedPrecondition, InvalidArgument, NotFound, Unauthorized,
)
from .permissions import ensure_can_modify_user, is_admin

User = get_user_model()
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
DUPLICATE_EMAIL = 'User with this email already exists'
_ROLES = {choice for choice, _ in User.ROLE_CHOICES}


def public_profile(user):
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'phone': user.phone,
        'role': user.role,
    }


def issue_token(user):
    token = AccessToken.for_user(user)
    token['email'] = user.email
    token['role'] = user.role
    return str(token)


class UserService:

    @staticmethod
    def signup(name, email, password, phone='', role=None, actor=None):
        """Register a user. Only an authenticated admin may create another admin."""
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidArgument(
                f'Password must be at least {MIN_PASSWORD_LENGTH} characters long',
                message='User registration failed',
            )
        email = User.objects.normalize_email(email)
        if not email:
            raise InvalidArgument('Email is required', message='User registration failed')

        role = role or User.CUSTOMER
        if role not in _ROLES:
            raise InvalidArgument('Role must be admin or customer', message='User registration failed')
        if role == User.ADMIN and not is_admin(actor):
            raise InvalidArgument(
                'Only an admin can register another admin', message='User registration failed'
            )

        if User.objects.filter(email=email).exists():
            raise Conflict(DUPLICATE_EMAIL, message='User registration failed')

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    email=email, password=password, name=name, phone=phone or '', role=role
                )
        except IntegrityError:
            raise Conflict(DUPLICATE_EMAIL, message='User registration failed')

        logger.info("User %s registered as %s", user.pk, user.role)
        return user

    @staticmethod
    def signin(email, password):
        email = User.objects.normalize_email(email)
        user = User.objects.filter(email=email).first()
        if user is None or not user.is_active or not user.check_password(password or ''):
            raise Unauthorized('Invalid email or password', message='Login failed')
        return issue_token(user), user

    @staticmethod
    def list_users():
        return User.objects.all().order_by('id')

    @staticmethod
    def get_user(user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            raise NotFound('User not found', message='User not found')

    @staticmethod
    def update_user(user_id, changes, actor):
        """Partial update. ``role`` is honoured only when ``actor`` is an admin."""
        ensure_can_modify_user(actor, user_id)

        with transaction.atomic():
            try:
                user = User.objects.select_for_update().get(pk=user_id)
            except User.DoesNotExist:
                raise NotFound('User not found', message='User not found')

            email = changes.get('email')
            if email:
                email = User.objects.normalize_email(email)
                if email != user.email:
                    if User.objects.filter(email=email).exclude(pk=user.pk).exists():
                        raise Conflict(DUPLICATE_EMAIL, message='Failed to update user')
                    user.email = email

            if changes.get('name'):
                user.name = changes['name']
            if changes.get('phone'):
                user.phone = changes['phone']

            role = changes.get('role')
            if role and is_admin(actor):
                if role not in _ROLES:
                    raise InvalidArgument('Role must be admin or customer', message='Failed to update user')
                user.role = role

            password = changes.get('password')
            if password:
                if len(password) < MIN_PASSWORD_LENGTH:
                    raise InvalidArgument(
                        f'Password must be at least {MIN_PASSWORD_LENGTH} characters long',
                        message='Failed to update user',
                    )
                user.set_password(password)

            try:
                with transaction.atomic():
                    user.save()
            except IntegrityError:
                raise Conflict(DUPLICATE_EMAIL, message='Failed to update user')

        return user

    @staticmethod
    def delete_user(user_id):
        with transaction.atomic():
            try:
                user = User.objects.select_for_update().get(pk=user_id)
            except User.DoesNotExist:
                raise NotFound('User not found', message='User not found')

            if user.bookings.filter(status='active').exists():
                raise FailedPrecondition(
                    'Cannot delete user with active bookings', message='Cannot delete user'
                )
            user.delete()

        logger.info("User %s deleted", user_id)
