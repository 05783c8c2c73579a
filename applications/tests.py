from django.test import TestCase
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework import status
from internships.models import Internship
from .models import Application

User = get_user_model()


class ApplicationTestCase(TestCase):
    def setUp(self):
        self.company = User.objects.create_user(
            username='acme', password='pass', role='company', email='hr@acme.test'
        )
        self.other_company = User.objects.create_user(
            username='globex', password='pass', role='company', email='hr@globex.test'
        )
        self.student = User.objects.create_user(
            username='S1001', password='pass', role='student', email='s@example.com', name='Sam'
        )
        self.admin_user = User.objects.create_superuser(
            username='admin', password='pass', email='admin@example.com'
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

    def apply(self, **extra):
        self.client.force_authenticate(user=self.student)
        return self.client.post('/api/applications', {
            'internshipId': self.internship.id,
            'resumeUrl': 'https://example.com/cv.pdf',
            **extra,
        })

    # ---------- Create ----------

    def test_new_application_is_pending(self):
        response = self.apply()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')
        self.assertEqual(response.data['studentId'], self.student.id)
        self.assertIsNotNone(response.data['appliedAt'])

    def test_client_status_and_applied_at_are_ignored(self):
        response = self.apply(status='accepted', appliedAt='2001-01-01T00:00:00Z')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')
        self.assertFalse(response.data['appliedAt'].startswith('2001'))
        self.assertEqual(Application.objects.get().status, 'pending')

    def test_student_id_cannot_be_supplied(self):
        response = self.apply(studentId=self.company.id)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_apply_requires_valid_resume_url(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/applications', {
            'internshipId': self.internship.id, 'resumeUrl': 'not a url',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('resumeUrl', response.data['errors'])

    def test_apply_to_missing_internship(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/applications', {
            'internshipId': 9999, 'resumeUrl': 'https://example.com/cv.pdf',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_only_students_apply(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.post('/api/applications', {
            'internshipId': self.internship.id, 'resumeUrl': 'https://example.com/cv.pdf',
        })
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_apply_unauthenticated(self):
        response = self.client.post('/api/applications', {
            'internshipId': self.internship.id, 'resumeUrl': 'https://example.com/cv.pdf',
        })
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    # ---------- Listing ----------

    def test_student_lists_own_applications_with_title(self):
        self.apply()
        other = User.objects.create_user(
            username='S2002', password='pass', role='student', email='o@example.com', name='Olu'
        )
        Application.objects.create(
            internship_id=self.internship.id, student_id=other.id, resume_url='https://example.com/o.pdf'
        )
        response = self.client.get('/api/applications/student')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['internshipTitle'], 'Backend Intern')

    def test_owner_lists_applicants_with_student_name(self):
        self.apply()
        self.client.force_authenticate(user=self.company)
        response = self.client.get(f'/api/applications/internship/{self.internship.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['studentName'], 'S1001')

    def test_non_owner_cannot_list_applicants(self):
        self.client.force_authenticate(user=self.other_company)
        response = self.client.get(f'/api/applications/internship/{self.internship.id}')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_applicants_missing_internship(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.get('/api/applications/internship/9999')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    # ---------- Status ----------

    def test_status_scenario(self):
        """Company B is refused, company A accepts, re-accepting is refused"""
        application_id = self.apply().data['id']

        self.client.force_authenticate(user=self.other_company)
        response = self.client.patch(f'/api/applications/{application_id}/status', {'status': 'accepted'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Application.objects.get(id=application_id).status, 'pending')

        self.client.force_authenticate(user=self.company)
        response = self.client.patch(f'/api/applications/{application_id}/status', {'status': 'accepted'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'accepted')

        response = self.client.patch(f'/api/applications/{application_id}/status', {'status': 'accepted'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Application is already accepted')

        response = self.client.patch(f'/api/applications/{application_id}/status', {'status': 'rejected'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Application.objects.get(id=application_id).status, 'accepted')

    def test_invalid_status_value(self):
        application_id = self.apply().data['id']
        self.client.force_authenticate(user=self.company)
        for value in ('pending', 'approved', ''):
            response = self.client.patch(f'/api/applications/{application_id}/status', {'status': value})
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data['message'], 'Invalid status')

    def test_status_update_missing_application(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.patch('/api/applications/9999/status', {'status': 'rejected'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_status_update_on_orphaned_application_is_forbidden(self):
        application_id = self.apply().data['id']
        self.internship.delete()
        self.client.force_authenticate(user=self.company)
        response = self.client.patch(f'/api/applications/{application_id}/status', {'status': 'rejected'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_refused_on_company_status_route(self):
        application_id = self.apply().data['id']
        self.client.force_authenticate(user=self.admin_user)
        response = self.client.patch(f'/api/applications/{application_id}/status', {'status': 'accepted'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
