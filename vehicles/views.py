# vehicles/views.py
from rest_framework import permissions, status, viewsets
from rest_framework.response import Response

from fleetrent.exceptions import parse_id
from users.permissions import IsAdmin
from .serializers import VehicleSerializer
from .services import VehicleRegistry


class VehicleViewSet(viewsets.GenericViewSet):
    """Fleet inventory. Browsing is public; changes require an admin."""
    serializer_class = VehicleSerializer
    filterset_fields = ['type', 'availability_status']

    def get_queryset(self):
        return VehicleRegistry.list_vehicles()

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            permission_classes = [permissions.AllowAny]
        else:
            permission_classes = [permissions.IsAuthenticated, IsAdmin]
        return [permission() for permission in permission_classes]

    def list(self, request):
        vehicles = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(vehicles, many=True)
        return Response({
            'success': True,
            'message': 'Vehicles retrieved successfully' if serializer.data else 'No vehicles found',
            'data': serializer.data,
        })

    def retrieve(self, request, pk=None):
        vehicle = VehicleRegistry.get_vehicle(parse_id(pk, 'vehicle ID'))
        return Response({
            'success': True,
            'message': 'Vehicle retrieved successfully',
            'data': self.get_serializer(vehicle).data,
        })

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vehicle = VehicleRegistry.create_vehicle(**serializer.validated_data)
        return Response({
            'success': True,
            'message': 'Vehicle created successfully',
            'data': self.get_serializer(vehicle).data,
        }, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        vehicle_id = parse_id(pk, 'vehicle ID')
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        vehicle = VehicleRegistry.update_vehicle(vehicle_id, **serializer.validated_data)
        return Response({
            'success': True,
            'message': 'Vehicle updated successfully',
            'data': self.get_serializer(vehicle).data,
        })

    partial_update = update

    def destroy(self, request, pk=None):
        VehicleRegistry.delete_vehicle(parse_id(pk, 'vehicle ID'))
        return Response({
            'success': True,
            'message': 'Vehicle deleted successfully',
        })
