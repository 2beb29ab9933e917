from django.http import JsonResponse
from rest_framework import permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

API_VERSION = '1.0.0'


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def api_root(request):
    return Response({
        'success': True,
        'message': 'Vehicle Rental System API',
        'version': API_VERSION,
    })


def route_not_found(request, exception=None):
    return JsonResponse({
        'success': False,
        'message': 'Route not found',
        'errors': f'Cannot {request.method} {request.path}',
    }, status=404)


def server_error(request):
    return JsonResponse({
        'success': False,
        'message': 'Internal server error',
        'errors': 'An unexpected error occurred',
    }, status=500)
