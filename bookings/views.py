# bookings/views.py
from rest_framework import permissions, status, viewsets
from rest_framework.response import Response

from fleetrent.exceptions import parse_id
from users.permissions import ensure_can_create_booking, is_admin
from .models import Booking
from .serializers import (
    AdminBookingSerializer, BookingCreateSerializer, BookingSerializer,
    BookingStatusSerializer, CreatedBookingSerializer, CustomerBookingSerializer,
    ReturnedBookingSerializer,
)
from .services import BookingEngine

# =============================================================================
# BOOKINGS
# =============================================================================

STATUS_MESSAGES = {
    Booking.CANCELLED: 'Booking cancelled successfully',
    Booking.RETURNED: 'Booking marked as returned. Vehicle is now available',
}


class BookingViewSet(viewsets.ViewSet):
    """Bookings - behaviour differs by role"""
    permission_classes = [permissions.IsAuthenticated]
    engine_class = BookingEngine

    def get_engine(self):
        return self.engine_class()

    def get_list_serializer_class(self):
        """Admins see who booked; customers only see their own bookings"""
        if is_admin(self.request.user):
            return AdminBookingSerializer
        return CustomerBookingSerializer

    def create(self, request):
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        customer_id = data.get('customer_id', request.user.id)
        ensure_can_create_booking(request.user, customer_id)

        booking = self.get_engine().create_booking(
            customer_id=customer_id,
            vehicle_id=data['vehicle_id'],
            rent_start_date=data['rent_start_date'],
            rent_end_date=data['rent_end_date'],
        )
        return Response({
            'success': True,
            'message': 'Booking created successfully',
            'data': CreatedBookingSerializer(booking).data,
        }, status=status.HTTP_201_CREATED)

    def list(self, request):
        bookings = self.get_engine().list_bookings(request.user)
        serializer_class = self.get_list_serializer_class()
        return Response({
            'success': True,
            'message': 'Bookings retrieved successfully' if is_admin(request.user)
            else 'Your bookings retrieved successfully',
            'data': serializer_class(bookings, many=True).data,
        })

    def retrieve(self, request, pk=None):
        booking = self.get_engine().get_booking(parse_id(pk, 'booking ID'), request.user)
        serializer_class = self.get_list_serializer_class()
        return Response({
            'success': True,
            'message': 'Booking retrieved successfully',
            'data': serializer_class(booking).data,
        })

    def update(self, request, pk=None):
        booking_id = parse_id(pk, 'booking ID')
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data['status']

        booking = self.get_engine().update_booking_status(booking_id, new_status, request.user)

        response_serializer = (
            ReturnedBookingSerializer if booking.status == Booking.RETURNED else BookingSerializer
        )
        return Response({
            'success': True,
            'message': STATUS_MESSAGES.get(booking.status, 'Booking updated successfully'),
            'data': response_serializer(booking).data,
        })

    partial_update = update
