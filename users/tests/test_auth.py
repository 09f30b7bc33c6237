from django.conf import settings
from django.core import mail
from rest_framework import status
from rest_framework.test import APITestCase

from users.models import CustomUser
from .factories import make_buyer, make_farmer, PASSWORD


class RegisterTests(APITestCase):
    url = '/api/auth/register'

    def test_buyer_registration_returns_token_and_cookie(self):
        resp = self.client.post(self.url, {
            'name': 'Asha', 'email': 'Asha@Example.com', 'password': 'supersecret', 'role': 'buyer',
        }, format='json')

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertIn('token', resp.data)
        self.assertIn(settings.JWT_COOKIE_NAME, resp.cookies)
        user = CustomUser.objects.get(email='asha@example.com')
        self.assertTrue(user.is_approved)
        self.assertNotIn('password', resp.data['user'])

    def test_farmer_requires_location_and_starts_unapproved(self):
        resp = self.client.post(self.url, {
            'name': 'Ravi', 'email': 'ravi@example.com', 'password': 'supersecret', 'role': 'farmer',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('location', resp.data)

        resp = self.client.post(self.url, {
            'name': 'Ravi', 'email': 'ravi@example.com', 'password': 'supersecret', 'role': 'farmer',
            'location': {'lat': 12.9, 'lng': 77.6, 'address': 'Mysuru'},
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        farmer = CustomUser.objects.get(email='ravi@example.com')
        self.assertFalse(farmer.is_approved)
        self.assertEqual(farmer.location['address'], 'Mysuru')
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn(settings.ADMIN_EMAIL, mail.outbox[0].to)

    def test_admin_cannot_self_register(self):
        resp = self.client.post(self.url, {
            'name': 'Eve', 'email': 'eve@example.com', 'password': 'supersecret', 'role': 'admin',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('role', resp.data)

    def test_non_object_body_rejected(self):
        resp = self.client.post(self.url, [1, 2], format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(CustomUser.objects.exists())

    def test_duplicate_email_and_short_password_rejected(self):
        make_buyer(email='taken@example.com')
        resp = self.client.post(self.url, {
            'name': 'X', 'email': 'taken@example.com', 'password': 'short', 'role': 'buyer',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', resp.data)
        self.assertIn('password', resp.data)


class LoginTests(APITestCase):
    url = '/api/auth/login'

    def test_login_success(self):
        buyer = make_buyer()
        resp = self.client.post(self.url, {'email': buyer.email, 'password': PASSWORD}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['user']['id'], buyer.id)

    def test_bad_credentials(self):
        buyer = make_buyer()
        resp = self.client.post(self.url, {'email': buyer.email, 'password': 'wrong-password'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_unapproved_farmer_is_refused(self):
        farmer = make_farmer(is_approved=False)
        resp = self.client.post(self.url, {'email': farmer.email, 'password': PASSWORD}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('pending admin approval', str(resp.data['detail']))

    def test_token_works_as_bearer_header_and_cookie(self):
        buyer = make_buyer()
        token = self.client.post(self.url, {'email': buyer.email, 'password': PASSWORD}, format='json').data['token']

        self.client.cookies.clear()
        resp = self.client.get('/api/auth/me', HTTP_AUTHORIZATION=f'Bearer {token}')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['email'], buyer.email)

        self.client.cookies[settings.JWT_COOKIE_NAME] = token
        resp = self.client.get('/api/auth/me')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

    def test_me_requires_authentication(self):
        resp = self.client.get('/api/auth/me')
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class ProfileTests(APITestCase):
    def setUp(self):
        self.user = make_buyer()
        self.client.force_authenticate(self.user)

    def test_update_name_and_location(self):
        resp = self.client.patch('/api/users/me', {
            'name': 'New Name', 'location': {'address': 'Pune'},
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.name, 'New Name')
        self.assertEqual(self.user.location['address'], 'Pune')

    def test_no_valid_fields(self):
        resp = self.client.patch('/api/users/me', {'role': 'admin'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, 'buyer')

    def test_logout_clears_cookie(self):
        resp = self.client.get('/api/auth/logout')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.cookies[settings.JWT_COOKIE_NAME].value, '')
