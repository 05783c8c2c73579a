from django.test import TestCase
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework import status

User = get_user_model()


class RegistrationTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_student_registration_uses_student_id_as_username(self):
        """Students sign up with a student ID which becomes their username"""
        response = self.client.post('/api/register', {
            'studentId': 'S1001',
            'password': 'secret123',
            'role': 'student',
            'name': 'Ada Student',
            'email': 'ada@example.com',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['username'], 'S1001')
        self.assertEqual(response.data['role'], 'student')
        self.assertIn('token', response.data)
        self.assertNotIn('password', response.data)
        self.assertTrue(User.objects.get(username='S1001').check_password('secret123'))

    def test_student_registration_requires_name(self):
        response = self.client.post('/api/register', {
            'studentId': 'S1002',
            'password': 'secret123',
            'role': 'student',
            'email': 'noname@example.com',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Name is required for students.')

    def test_company_registration(self):
        response = self.client.post('/api/register', {
            'username': 'acme',
            'password': 'secret123',
            'role': 'company',
            'email': 'hr@acme.test',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data['name'])

    def test_duplicate_username_rejected(self):
        User.objects.create_user(username='acme', password='x', role='company', email='a@acme.test')
        response = self.client.post('/api/register', {
            'username': 'acme',
            'password': 'secret123',
            'role': 'company',
            'email': 'b@acme.test',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('username', response.data['errors'])

    def test_cannot_self_register_as_admin(self):
        response = self.client.post('/api/register', {
            'username': 'root',
            'password': 'secret123',
            'role': 'admin',
            'email': 'root@example.com',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(username='root').exists())

    def test_unknown_fields_rejected(self):
        response = self.client.post('/api/register', {
            'username': 'acme',
            'password': 'secret123',
            'role': 'company',
            'email': 'hr@acme.test',
            'isSuperuser': True,
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('isSuperuser', response.data['errors'])


class LoginTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='acme', password='secret123', role='company', email='hr@acme.test'
        )
        self.client = APIClient()

    def test_login_returns_token(self):
        response = self.client.post('/api/login', {'username': 'acme', 'password': 'secret123'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], self.user.id)
        self.assertTrue(response.data['token'])

    def test_token_authenticates_requests(self):
        token = self.client.post('/api/login', {'username': 'acme', 'password': 'secret123'}).data['token']
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Token {token}')
        response = client.get('/api/user')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['username'], 'acme')

    def test_login_bad_password(self):
        response = self.client.post('/api/login', {'username': 'acme', 'password': 'wrong'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['message'], 'Invalid username or password')

    def test_current_user_unauthenticated(self):
        response = self.client.get('/api/user')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_session_login_and_logout(self):
        self.client.login(username='acme', password='secret123')
        self.assertEqual(self.client.get('/api/user').status_code, status.HTTP_200_OK)

        response = self.client.post('/api/logout')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get('/api/user').status_code, status.HTTP_401_UNAUTHORIZED)


class ResetPasswordTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='S1001', password='old-pass', role='student', email='s@example.com', name='Sam'
        )
        self.client = APIClient()

    def test_reset_password(self):
        response = self.client.post('/api/reset-password', {'username': 'S1001', 'password': 'new-pass'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('new-pass'))

    def test_reset_password_unknown_user(self):
        response = self.client.post('/api/reset-password', {'username': 'nobody', 'password': 'x'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
