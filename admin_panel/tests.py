from io import BytesIO
from unittest import mock
from django.test import TestCase
from django.contrib.auth import get_user_model
from openpyxl import load_workbook
from rest_framework.test import APIClient
from rest_framework import status
from applications.models import Application
from internships.models import Internship
from .utils import EXPORT_COLUMNS

User = get_user_model()


class AdminPanelTestCase(TestCase):
    def setUp(self):
        # Create admin user
        self.admin_user = User.objects.create_superuser(
            username='admin',
            email='admin@test.com',
            password='admin123'
        )
        self.company = User.objects.create_user(
            username='acme', password='pass', role='company', email='hr@acme.test'
        )
        self.student = User.objects.create_user(
            username='S1001', password='pass', role='student', email='s@example.com', name='Sam'
        )
        self.internship = Internship.objects.create(
            company_id=self.company.id,
            title='Backend Intern',
            description='Build APIs',
            requirements='Python',
            location='Remote',
            start_date='2025-06-01',
            end_date='2025-08-31',
        )
        self.client = APIClient()
        self.client.force_authenticate(user=self.admin_user)

    def add_application(self, student=None, status_value='pending'):
        return Application.objects.create(
            internship_id=self.internship.id,
            student_id=(student or self.student).id,
            resume_url='https://example.com/cv.pdf',
            status=status_value,
        )

    # ---------- Access ----------

    def test_admin_routes_unauthenticated(self):
        """Test admin endpoints without authentication"""
        response = APIClient().get('/api/admin/users')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_admin_routes_forbidden_for_other_roles(self):
        client = APIClient()
        for user in (self.company, self.student):
            client.force_authenticate(user=user)
            self.assertEqual(client.get('/api/admin/users').status_code, status.HTTP_403_FORBIDDEN)
            self.assertEqual(client.get('/api/admin/applications/export').status_code, status.HTTP_403_FORBIDDEN)

    # ---------- Users ----------

    def test_list_users_hides_passwords(self):
        response = self.client.get('/api/admin/users')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 3)
        self.assertNotIn('password', response.data[0])

    def test_create_user_any_role(self):
        response = self.client.post('/api/admin/users', {
            'username': 'admin2', 'password': 'pass', 'role': 'admin', 'email': 'a2@test.com',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['role'], 'admin')

    def test_update_user(self):
        response = self.client.patch(f'/api/admin/users/{self.student.id}', {'name': 'Samuel', 'role': 'company'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Samuel')
        self.assertEqual(response.data['role'], 'company')
        self.assertEqual(response.data['email'], 's@example.com')

    def test_update_user_rejects_password_field(self):
        response = self.client.patch(f'/api/admin/users/{self.student.id}', {'password': 'hacked'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_missing_user(self):
        response = self.client.patch('/api/admin/users/9999', {'name': 'x'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'User not found')

    def test_delete_user_leaves_orphans(self):
        application = self.add_application()
        self.assertEqual(self.client.delete(f'/api/admin/users/{self.company.id}').status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.delete(f'/api/admin/users/{self.student.id}').status_code, status.HTTP_204_NO_CONTENT)

        self.assertTrue(Internship.objects.filter(id=self.internship.id).exists())
        internships = self.client.get('/api/internships').data
        self.assertIsNone(internships[0]['companyName'])

        applications = self.client.get('/api/admin/applications').data
        self.assertEqual(applications[0]['id'], application.id)
        self.assertIsNone(applications[0]['studentName'])

    # ---------- Internships ----------

    def test_admin_create_internship_for_company(self):
        response = self.client.post('/api/admin/internships', {
            'companyId': self.company.id,
            'title': 'Ops Intern',
            'description': 'Keep things running',
            'requirements': 'Linux',
            'location': 'Lagos',
            'startDate': '2025-01-01',
            'endDate': '2025-06-01',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['companyId'], self.company.id)

    def test_admin_create_internship_requires_company_id(self):
        """No silent fallback to the admin's own id"""
        data = {
            'title': 'Ops Intern',
            'description': 'Keep things running',
            'requirements': 'Linux',
            'location': 'Lagos',
            'startDate': '2025-01-01',
            'endDate': '2025-06-01',
        }
        response = self.client.post('/api/admin/internships', data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('companyId', response.data['errors'])

        for company_id in (self.student.id, self.admin_user.id, 9999):
            response = self.client.post('/api/admin/internships', {**data, 'companyId': company_id})
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Internship.objects.count(), 1)

    def test_admin_updates_any_internship(self):
        response = self.client.patch(f'/api/admin/internships/{self.internship.id}', {'location': 'Abuja'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['location'], 'Abuja')
        self.assertEqual(response.data['title'], 'Backend Intern')

    def test_admin_update_missing_internship(self):
        response = self.client.patch('/api/admin/internships/9999', {'location': 'Abuja'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Internship not found')

    def test_admin_delete_internship_orphans_applications(self):
        """Both applications survive and show "Unknown"/null for the title"""
        first = self.add_application()
        other = User.objects.create_user(
            username='S2002', password='pass', role='student', email='o@example.com', name='Olu'
        )
        second = self.add_application(student=other)

        response = self.client.delete(f'/api/admin/internships/{self.internship.id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        applications = self.client.get('/api/admin/applications').data
        self.assertEqual({item['id'] for item in applications}, {first.id, second.id})
        self.assertTrue(all(item['internshipTitle'] is None for item in applications))

        workbook = load_workbook(BytesIO(self.client.get('/api/admin/applications/export').content))
        rows = list(workbook['Applications'].iter_rows(values_only=True))
        title_index = EXPORT_COLUMNS.index('internshipTitle')
        self.assertEqual([row[title_index] for row in rows[1:]], ['Unknown', 'Unknown'])

    def test_admin_lists_applications_for_internship(self):
        self.add_application()
        response = self.client.get(f'/api/admin/internships/{self.internship.id}/applications')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['studentName'], 'S1001')

        response = self.client.get('/api/admin/internships/9999/applications')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    # ---------- Applications ----------

    def test_list_all_applications_joined(self):
        self.add_application()
        response = self.client.get('/api/admin/applications')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['internshipTitle'], 'Backend Intern')
        self.assertEqual(response.data[0]['studentName'], 'S1001')

    def test_admin_status_update(self):
        application = self.add_application()
        url = f'/api/admin/applications/{application.id}/status'

        response = self.client.patch(url, {'status': 'rejected'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'rejected')

        response = self.client.patch(url, {'status': 'accepted'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.patch('/api/admin/applications/9999/status', {'status': 'accepted'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_application(self):
        application = self.add_application(status_value='accepted')
        response = self.client.delete(f'/api/admin/applications/{application.id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Application.objects.exists())

    def test_delete_missing_application(self):
        response = self.client.delete('/api/admin/applications/9999')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Application not found')

    # ---------- Export ----------

    def test_export_one_row_per_application(self):
        self.add_application()
        ghost = Application.objects.create(
            internship_id=self.internship.id, student_id=9999, resume_url='https://example.com/g.pdf'
        )
        response = self.client.get('/api/admin/applications/export')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response['Content-Type'],
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        self.assertEqual(response['Content-Disposition'], 'attachment; filename=applications.xlsx')

        rows = list(load_workbook(BytesIO(response.content))['Applications'].iter_rows(values_only=True))
        self.assertEqual(list(rows[0]), EXPORT_COLUMNS)
        self.assertEqual(len(rows), 3)
        by_id = {row[0]: dict(zip(EXPORT_COLUMNS, row)) for row in rows[1:]}
        self.assertEqual(by_id[ghost.id]['studentName'], 'Unknown')
        self.assertEqual(by_id[ghost.id]['internshipTitle'], 'Backend Intern')

    def test_export_with_no_applications(self):
        response = self.client.get('/api/admin/applications/export')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        rows = list(load_workbook(BytesIO(response.content))['Applications'].iter_rows(values_only=True))
        self.assertEqual(rows, [tuple(EXPORT_COLUMNS)])

    def test_export_failure_returns_generic_error(self):
        self.add_application()
        with mock.patch('admin_panel.views.build_applications_workbook', side_effect=ValueError('boom')), \
                self.assertLogs('admin_panel.views', level='ERROR'):
            response = self.client.get('/api/admin/applications/export')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'message': 'Failed to export applications'})
        self.assertFalse(response.has_header('Content-Disposition'))

    def test_router_only_maps_implemented_methods(self):
        self.assertEqual(self.client.get(f'/api/admin/users/{self.student.id}').status_code,
                         status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertEqual(self.client.get('/api/admin/internships').status_code,
                         status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertEqual(self.client.get('/api/admin/users/abc').status_code, status.HTTP_404_NOT_FOUND)
