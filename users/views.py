# users/views.py
import logging

from rest_framework import permissions, status, viewsets
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.response import Response

from fleetrent.exceptions import parse_id
from .authentication import OptionalJWTAuthentication
from .permissions import IsAdmin, IsSelfOrAdmin
from .serializers import SigninSerializer, SignupSerializer, UserSerializer, UserUpdateSerializer
from .services import UserService, public_profile

logger = logging.getLogger(__name__)


@api_view(['POST'])
@authentication_classes([OptionalJWTAuthentication])
@permission_classes([permissions.AllowAny])
def signup(request):
    serializer = SignupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    actor = request.user if request.user.is_authenticated else None
    user = UserService.signup(actor=actor, **serializer.validated_data)
    return Response({
        'success': True,
        'message': 'User registered successfully',
        'data': UserSerializer(user).data,
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([OptionalJWTAuthentication])
@permission_classes([permissions.AllowAny])
def signin(request):
    serializer = SigninSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    token, user = UserService.signin(**serializer.validated_data)
    return Response({
        'success': True,
        'message': 'Login successful',
        'data': {'token': token, 'user': public_profile(user)},
    })


class UserViewSet(viewsets.ViewSet):
    """User administration. Listing and deletion are admin-only; profile edits are self-or-admin."""

    def get_permissions(self):
        if self.action in ['list', 'destroy']:
            permission_classes = [permissions.IsAuthenticated, IsAdmin]
        else:
            permission_classes = [permissions.IsAuthenticated, IsSelfOrAdmin]
        return [permission() for permission in permission_classes]

    def list(self, request):
        users = UserService.list_users()
        return Response({
            'success': True,
            'message': 'Users retrieved successfully',
            'data': UserSerializer(users, many=True).data,
        })

    def retrieve(self, request, pk=None):
        user = UserService.get_user(parse_id(pk, 'user ID'))
        return Response({
            'success': True,
            'message': 'User retrieved successfully',
            'data': UserSerializer(user).data,
        })

    def update(self, request, pk=None):
        user_id = parse_id(pk, 'user ID')
        serializer = UserUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = UserService.update_user(user_id, serializer.validated_data, actor=request.user)
        return Response({
            'success': True,
            'message': 'User updated successfully',
            'data': UserSerializer(user).data,
        })

    partial_update = update

    def destroy(self, request, pk=None):
        UserService.delete_user(parse_id(pk, 'user ID'))
        return Response({
            'success': True,
            'message': 'User deleted successfully',
        })
