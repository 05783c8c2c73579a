from django.test import TestCase
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework import status
from .models import Internship

User = get_user_model()


INTERNSHIP_DATA = {
    'title': 'Backend Intern',
    'description': 'Build APIs',
    'requirements': 'Python',
    'location': 'Remote',
    'startDate': '2025-06-01',
    'endDate': '2025-08-31',
}


class InternshipTestCase(TestCase):
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
            title='Data Intern',
            description='Dashboards',
            requirements='SQL',
            location='Berlin',
            start_date='2025-01-01',
            end_date='2025-03-01',
        )
        self.client = APIClient()

    # ---------- Listing ----------

    def test_list_is_public_and_includes_company_name(self):
        response = self.client.get('/api/internships')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['companyName'], 'acme')
        self.assertEqual(response.data[0]['companyId'], self.company.id)
        self.assertEqual(response.data[0]['startDate'], '2025-01-01')

    def test_list_ignores_stale_token(self):
        self.client.credentials(HTTP_AUTHORIZATION='Token stale')
        response = self.client.get('/api/internships')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

        response = self.client.post('/api/internships', INTERNSHIP_DATA)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_search_is_case_insensitive_substring(self):
        Internship.objects.create(
            company_id=self.other_company.id, title='Backend Intern', description='APIs',
            requirements='Go', location='Paris', start_date='2025-01-01', end_date='2025-02-01',
        )
        response = self.client.get('/api/internships', {'search': 'backend'})
        self.assertEqual([item['title'] for item in response.data], ['Backend Intern'])

        response = self.client.get('/api/internships', {'location': 'berl'})
        self.assertEqual([item['title'] for item in response.data], ['Data Intern'])

    def test_company_lists_only_own_internships(self):
        Internship.objects.create(
            company_id=self.other_company.id, title='Other', description='d',
            requirements='r', location='l', start_date='2025-01-01', end_date='2025-02-01',
        )
        self.client.force_authenticate(user=self.company)
        response = self.client.get('/api/internships/company')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['id'] for item in response.data], [self.internship.id])

    # ---------- Create ----------

    def test_company_create_forces_owner(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.post('/api/internships', INTERNSHIP_DATA)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['companyId'], self.company.id)
        self.assertEqual(response.data['companyName'], 'acme')

    def test_company_cannot_supply_company_id(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.post('/api/internships', {**INTERNSHIP_DATA, 'companyId': self.other_company.id})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('companyId', response.data['errors'])

    def test_create_requires_every_field(self):
        self.client.force_authenticate(user=self.company)
        data = dict(INTERNSHIP_DATA)
        del data['requirements']
        response = self.client.post('/api/internships', data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('requirements', response.data['errors'])

    def test_create_rejects_malformed_date(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.post('/api/internships', {**INTERNSHIP_DATA, 'startDate': '01/06/2025'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_end_date_is_not_checked_against_start_date(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.post('/api/internships', {**INTERNSHIP_DATA, 'endDate': '2024-01-01'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_create_unauthenticated(self):
        response = self.client.post('/api/internships', INTERNSHIP_DATA)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_wrong_role(self):
        """Students and admins are both refused on the company route"""
        for user in (self.student, self.admin_user):
            self.client.force_authenticate(user=user)
            response = self.client.post('/api/internships', INTERNSHIP_DATA)
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    # ---------- Update ----------

    def test_owner_partial_update_keeps_other_fields(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.patch(f'/api/internships/{self.internship.id}', {'title': 'Senior Data Intern'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'Senior Data Intern')
        self.assertEqual(response.data['location'], 'Berlin')
        self.assertEqual(response.data['endDate'], '2025-03-01')

    def test_non_owner_update_forbidden(self):
        self.client.force_authenticate(user=self.other_company)
        response = self.client.patch(f'/api/internships/{self.internship.id}', {'title': 'Hijacked'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['message'], "You don't have permission to edit this internship")
        self.internship.refresh_from_db()
        self.assertEqual(self.internship.title, 'Data Intern')

    def test_update_missing_internship(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.patch('/api/internships/9999', {'title': 'Ghost'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'Internship not found')

    def test_admin_refused_on_company_update_route(self):
        self.client.force_authenticate(user=self.admin_user)
        response = self.client.patch(f'/api/internships/{self.internship.id}', {'title': 'x'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_rejects_unknown_fields(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.patch(f'/api/internships/{self.internship.id}', {'companyId': self.other_company.id})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.internship.refresh_from_db()
        self.assertEqual(self.internship.company_id, self.company.id)

    # ---------- Delete ----------

    def test_owner_delete(self):
        self.client.force_authenticate(user=self.company)
        response = self.client.delete(f'/api/internships/{self.internship.id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Internship.objects.filter(id=self.internship.id).exists())

    def test_non_owner_delete_forbidden(self):
        self.client.force_authenticate(user=self.other_company)
        response = self.client.delete(f'/api/internships/{self.internship.id}')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Internship.objects.filter(id=self.internship.id).exists())

    def test_delete_missing_internship(self):
        self.client.force_authenticate(user=self.other_company)
        response = self.client.delete('/api/internships/9999')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
