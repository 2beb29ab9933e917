"""
HTTP surface: routing, role gates and the success/error envelopes.
"""
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from bookings.models import Booking
from users.services import issue_token
from vehicles.models import Vehicle

pytestmark = pytest.mark.django_db


def _day(days):
    return timezone.localdate() + timedelta(days=days)


def _future(days):
    return _day(days).isoformat()


def test_api_root(api_client):
    response = api_client.get('/')

    assert response.status_code == 200
    assert response.json()['message'] == 'Vehicle Rental System API'


def test_unknown_route_uses_error_envelope(api_client):
    response = api_client.get('/api/v1/nowhere/')

    assert response.status_code == 404
    body = response.json()
    assert body['success'] is False
    assert body['errors'] == 'Cannot GET /api/v1/nowhere/'


# --- auth -------------------------------------------------------------------

def test_signup_then_signin(api_client):
    response = api_client.post('/api/v1/auth/signup/', {
        'name': 'Frank Fleet', 'email': 'Frank@Example.com', 'password': 'secret123',
    }, format='json')

    assert response.status_code == 201
    data = response.json()['data']
    assert data['email'] == 'frank@example.com'
    assert data['role'] == 'customer'
    assert 'password' not in data

    response = api_client.post('/api/v1/auth/signin/', {
        'email': 'frank@example.com', 'password': 'secret123',
    }, format='json')

    assert response.status_code == 200
    body = response.json()['data']
    assert body['token']
    assert body['user']['email'] == 'frank@example.com'


def test_signup_validation_error_envelope(api_client):
    response = api_client.post('/api/v1/auth/signup/', {'email': 'not-an-email'}, format='json')

    assert response.status_code == 400
    body = response.json()
    assert body['success'] is False
    assert body['message'] == 'Validation failed'
    assert 'email' in body['errors']
    assert 'password' in body['errors']


def test_signup_duplicate_email_is_conflict(api_client, customer):
    response = api_client.post('/api/v1/auth/signup/', {
        'name': 'Copy', 'email': 'carol@example.com', 'password': 'secret123',
    }, format='json')

    assert response.status_code == 409
    assert response.json()['success'] is False


def test_signup_ignores_stale_token(api_client):
    api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-real-token')

    response = api_client.post('/api/v1/auth/signup/', {
        'name': 'Gina Guest', 'email': 'gina@example.com', 'password': 'secret123',
    }, format='json')

    assert response.status_code == 201
    assert response.json()['data']['role'] == 'customer'


def test_signup_admin_role_with_admin_token(api_client, admin_user):
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(admin_user)}')

    response = api_client.post('/api/v1/auth/signup/', {
        'name': 'Hal Admin', 'email': 'hal@example.com', 'password': 'secret123', 'role': 'admin',
    }, format='json')

    assert response.status_code == 201
    assert response.json()['data']['role'] == 'admin'


def test_signup_admin_role_anonymous_is_rejected(api_client):
    response = api_client.post('/api/v1/auth/signup/', {
        'name': 'Ivan', 'email': 'ivan@example.com', 'password': 'secret123', 'role': 'admin',
    }, format='json')

    assert response.status_code == 400


def test_signin_wrong_password(api_client, customer):
    response = api_client.post('/api/v1/auth/signin/', {
        'email': 'carol@example.com', 'password': 'nope-nope',
    }, format='json')

    assert response.status_code == 401
    assert response.json()['errors'] == 'Invalid email or password'


def test_bearer_token_authenticates(api_client, customer):
    token = api_client.post('/api/v1/auth/signin/', {
        'email': 'carol@example.com', 'password': 'secret123',
    }, format='json').json()['data']['token']

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    response = client.get('/api/v1/bookings/')

    assert response.status_code == 200
    assert response.json()['data'] == []


# --- vehicles ---------------------------------------------------------------

def test_vehicle_list_is_public_and_filterable(api_client, make_vehicle):
    make_vehicle('CAR-1')
    make_vehicle('BIKE-1', type=Vehicle.BIKE, vehicle_name='Vespa')

    response = api_client.get('/api/v1/vehicles/')
    assert response.status_code == 200
    assert len(response.json()['data']) == 2

    response = api_client.get('/api/v1/vehicles/', {'type': 'bike'})
    data = response.json()['data']
    assert [v['registration_number'] for v in data] == ['BIKE-1']


def test_vehicle_list_empty_message(api_client):
    response = api_client.get('/api/v1/vehicles/')
    assert response.json()['message'] == 'No vehicles found'


def test_create_vehicle_requires_admin(api_client, customer_client, admin_client):
    payload = {
        'vehicle_name': 'Ford Transit', 'type': 'van',
        'registration_number': 'VAN-001', 'daily_rent_price': '80.00',
    }

    assert api_client.post('/api/v1/vehicles/', payload, format='json').status_code == 401
    assert customer_client.post('/api/v1/vehicles/', payload, format='json').status_code == 403

    response = admin_client.post('/api/v1/vehicles/', payload, format='json')
    assert response.status_code == 201
    data = response.json()['data']
    assert data['availability_status'] == 'available'
    assert data['daily_rent_price'] == '80.00'


def test_create_vehicle_duplicate_registration(admin_client, vehicle):
    response = admin_client.post('/api/v1/vehicles/', {
        'vehicle_name': 'Clone', 'type': 'car',
        'registration_number': vehicle.registration_number, 'daily_rent_price': '10.00',
    }, format='json')

    assert response.status_code == 409


def test_create_vehicle_rejects_non_positive_price(admin_client):
    response = admin_client.post('/api/v1/vehicles/', {
        'vehicle_name': 'Freebie', 'type': 'car',
        'registration_number': 'FREE-1', 'daily_rent_price': '0',
    }, format='json')

    assert response.status_code == 400
    assert 'daily_rent_price' in response.json()['errors']


def test_partial_vehicle_update(admin_client, vehicle):
    response = admin_client.put(
        f'/api/v1/vehicles/{vehicle.id}/', {'daily_rent_price': '150.00'}, format='json'
    )

    assert response.status_code == 200
    data = response.json()['data']
    assert data['daily_rent_price'] == '150.00'
    assert data['vehicle_name'] == 'Toyota Corolla'


def test_retrieve_vehicle_bad_id(api_client):
    response = api_client.get('/api/v1/vehicles/abc/')

    assert response.status_code == 400
    assert response.json()['success'] is False


def test_retrieve_missing_vehicle(api_client):
    response = api_client.get('/api/v1/vehicles/999/')

    assert response.status_code == 404
    assert response.json()['message'] == 'Vehicle not found'


def test_delete_vehicle_with_active_booking(admin_client, customer_client, vehicle):
    customer_client.post('/api/v1/bookings/', {
        'vehicle_id': vehicle.id, 'rent_start_date': _future(5), 'rent_end_date': _future(7),
    }, format='json')

    response = admin_client.delete(f'/api/v1/vehicles/{vehicle.id}/')

    assert response.status_code == 400
    assert response.json()['errors'] == 'Cannot delete vehicle with active bookings'


# --- users ------------------------------------------------------------------

def test_user_list_is_admin_only(admin_client, customer_client, customer):
    assert customer_client.get('/api/v1/users/').status_code == 403

    response = admin_client.get('/api/v1/users/')
    assert response.status_code == 200
    emails = {u['email'] for u in response.json()['data']}
    assert {'admin@example.com', 'carol@example.com'} <= emails


def test_customer_edits_only_own_profile(customer_client, customer, other_customer):
    response = customer_client.put(
        f'/api/v1/users/{customer.id}/', {'phone': '555-0111'}, format='json'
    )
    assert response.status_code == 200
    assert response.json()['data']['phone'] == '555-0111'

    response = customer_client.put(
        f'/api/v1/users/{other_customer.id}/', {'phone': '555-0111'}, format='json'
    )
    assert response.status_code == 403


def test_customer_cannot_view_other_profile(customer_client, other_customer):
    assert customer_client.get(f'/api/v1/users/{other_customer.id}/').status_code == 403


def test_other_profile_lookup_does_not_reveal_existence(customer_client, other_customer):
    existing = customer_client.get(f'/api/v1/users/{other_customer.id}/')
    missing = customer_client.get('/api/v1/users/99999/')

    assert existing.status_code == missing.status_code == 403
    assert existing.json() == missing.json()


def test_admin_missing_profile_is_not_found(admin_client):
    assert admin_client.get('/api/v1/users/99999/').status_code == 404


def test_admin_deletes_user(admin_client, other_customer):
    response = admin_client.delete(f'/api/v1/users/{other_customer.id}/')

    assert response.status_code == 200
    assert response.json()['success'] is True


# --- bookings ---------------------------------------------------------------

def test_customer_books_vehicle(customer_client, customer, vehicle):
    response = customer_client.post('/api/v1/bookings/', {
        'vehicle_id': vehicle.id, 'rent_start_date': _future(1), 'rent_end_date': _future(3),
    }, format='json')

    assert response.status_code == 201
    data = response.json()['data']
    assert data['customer_id'] == customer.id
    assert data['total_price'] == '200.00'
    assert data['status'] == 'active'
    assert data['vehicle'] == {'vehicle_name': 'Toyota Corolla', 'daily_rent_price': '100.00'}

    vehicle.refresh_from_db()
    assert vehicle.availability_status == Vehicle.BOOKED


def test_second_booking_on_booked_vehicle_conflicts(customer_client, admin_client, other_customer, vehicle):
    payload = {'vehicle_id': vehicle.id, 'rent_start_date': _future(1), 'rent_end_date': _future(3)}
    assert customer_client.post('/api/v1/bookings/', payload, format='json').status_code == 201

    response = admin_client.post(
        '/api/v1/bookings/', dict(payload, customer_id=other_customer.id), format='json'
    )
    assert response.status_code == 409


def test_customer_cannot_book_for_someone_else(customer_client, other_customer, vehicle):
    response = customer_client.post('/api/v1/bookings/', {
        'customer_id': other_customer.id, 'vehicle_id': vehicle.id,
        'rent_start_date': _future(1), 'rent_end_date': _future(3),
    }, format='json')

    assert response.status_code == 403
    assert not Booking.objects.exists()


def test_booking_rejects_bad_dates(customer_client, vehicle):
    response = customer_client.post('/api/v1/bookings/', {
        'vehicle_id': vehicle.id, 'rent_start_date': 'soon', 'rent_end_date': _future(3),
    }, format='json')
    assert response.status_code == 400

    response = customer_client.post('/api/v1/bookings/', {
        'vehicle_id': vehicle.id, 'rent_start_date': _future(3), 'rent_end_date': _future(1),
    }, format='json')
    assert response.status_code == 400


def test_booking_requires_authentication(api_client, vehicle):
    response = api_client.get('/api/v1/bookings/')

    assert response.status_code == 401
    assert response.json()['message'] == 'Authentication required'


def test_booking_lists_are_scoped_by_role(admin_client, customer_client, engine, customer,
                                          other_customer, make_vehicle):
    engine.create_booking(customer.id, make_vehicle('L-1').id, _day(1), _day(2))
    engine.create_booking(other_customer.id, make_vehicle('L-2').id, _day(1), _day(2))

    mine = customer_client.get('/api/v1/bookings/').json()
    assert mine['message'] == 'Your bookings retrieved successfully'
    assert len(mine['data']) == 1
    assert 'customer' not in mine['data'][0]
    assert mine['data'][0]['vehicle']['registration_number'] == 'L-1'

    everything = admin_client.get('/api/v1/bookings/').json()
    assert len(everything['data']) == 2
    assert everything['data'][0]['customer'] == {'name': 'Dave Driver', 'email': 'dave@example.com'}


def test_customer_cancels_and_admin_returns(admin_client, customer_client, make_vehicle):
    first = make_vehicle('C-1')
    second = make_vehicle('C-2')
    cancel_id = customer_client.post('/api/v1/bookings/', {
        'vehicle_id': first.id, 'rent_start_date': _future(2), 'rent_end_date': _future(4),
    }, format='json').json()['data']['id']
    return_id = customer_client.post('/api/v1/bookings/', {
        'vehicle_id': second.id, 'rent_start_date': _future(2), 'rent_end_date': _future(4),
    }, format='json').json()['data']['id']

    response = customer_client.put(f'/api/v1/bookings/{cancel_id}/', {'status': 'cancelled'}, format='json')
    assert response.status_code == 200
    assert response.json()['message'] == 'Booking cancelled successfully'
    assert response.json()['data']['status'] == 'cancelled'

    response = customer_client.put(f'/api/v1/bookings/{return_id}/', {'status': 'returned'}, format='json')
    assert response.status_code == 403

    response = admin_client.put(f'/api/v1/bookings/{return_id}/', {'status': 'returned'}, format='json')
    assert response.status_code == 200
    assert response.json()['data']['vehicle'] == {'availability_status': 'available'}


def test_status_update_requires_status(customer_client):
    response = customer_client.put('/api/v1/bookings/1/', {}, format='json')

    assert response.status_code == 400
    assert response.json()['errors']['status'] == ['Please provide a status']


def test_status_update_invalid_value(admin_client, engine, customer, vehicle):
    booking = engine.create_booking(customer.id, vehicle.id, _day(1), _day(2))

    response = admin_client.put(f'/api/v1/bookings/{booking.id}/', {'status': 'active'}, format='json')

    assert response.status_code == 400
    assert response.json()['errors'] == 'Invalid status update'


def test_customer_cannot_view_others_booking(customer_client, engine, other_customer, vehicle):
    booking = engine.create_booking(other_customer.id, vehicle.id, _day(1), _day(2))

    assert customer_client.get(f'/api/v1/bookings/{booking.id}/').status_code == 403
