# users/permissions.py
"""
Access policy.

The permission classes gate whole routes; the ``ensure_*`` helpers gate
individual state transitions and raise ``PermissionDenied`` when the
authenticated actor (anything with ``id`` and ``role``) may not proceed.
"""
from rest_framework import permissions

from fleetrent.exceptions import PermissionDenied


def is_admin(actor):
    return getattr(actor, 'role', None) == 'admin'


class IsAdmin(permissions.BasePermission):
    message = 'Admin privileges required'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_admin(request.user))


class IsSelfOrAdmin(permissions.BasePermission):
    """
    The `pk` in the URL is the requester's own id, or the requester is an admin.

    Decided from the URL alone; the user row is not read.
    """
    message = 'You can only access your own profile'

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if is_admin(request.user):
            return True
        return str(view.kwargs.get('pk')) == str(request.user.pk)


def ensure_can_create_booking(actor, customer_id):
    if is_admin(actor):
        return
    if actor.id != customer_id:
        raise PermissionDenied('Customers can only create bookings for themselves')


def ensure_can_view_booking(actor, booking):
    if is_admin(actor):
        return
    if booking.customer_id != actor.id:
        raise PermissionDenied('You can only view your own bookings')


def ensure_can_change_booking(actor, booking, new_status):
    role = getattr(actor, 'role', None)
    if new_status == 'cancelled':
        if role not in ('admin', 'customer'):
            raise PermissionDenied('Unauthorized to cancel booking')
        if role == 'customer' and booking.customer_id != actor.id:
            raise PermissionDenied('Unauthorized! You can only cancel your own bookings')
    elif new_status == 'returned':
        if role != 'admin':
            raise PermissionDenied('Only admins can mark bookings as returned')


def ensure_can_modify_user(actor, user_id):
    if is_admin(actor) or actor.id == user_id:
        return
    raise PermissionDenied('You can only update your own profile')