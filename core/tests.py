from unittest import mock
from django.test import SimpleTestCase, TestCase
from django.contrib.auth import get_user_model
from rest_framework.exceptions import NotFound, PermissionDenied
from applications.models import Application
from internships.models import Internship
from . import lifecycle
from .apps import get_storage
from .exceptions import InvalidStatus, StoreError
from .storage import PortalStorage

User = get_user_model()


class LifecycleTestCase(SimpleTestCase):
    def test_pending_can_be_accepted_or_rejected(self):
        self.assertEqual(lifecycle.check_transition('pending', 'accepted'), 'accepted')
        self.assertEqual(lifecycle.check_transition('pending', 'rejected'), 'rejected')

    def test_terminal_states_are_terminal(self):
        for current in ('accepted', 'rejected'):
            self.assertTrue(lifecycle.is_terminal(current))
            for requested in ('accepted', 'rejected'):
                with self.assertRaises(InvalidStatus):
                    lifecycle.check_transition(current, requested)

    def test_unknown_current_status_cannot_move(self):
        self.assertTrue(lifecycle.is_terminal('withdrawn'))
        with self.assertRaises(InvalidStatus):
            lifecycle.check_transition('withdrawn', 'accepted')

    def test_pending_cannot_be_requested(self):
        self.assertFalse(lifecycle.is_terminal('pending'))
        with self.assertRaises(InvalidStatus):
            lifecycle.parse_requested_status('pending')

    def test_unknown_values_rejected(self):
        for value in (None, '', 'ACCEPTED', 'approved'):
            with self.assertRaises(InvalidStatus):
                lifecycle.parse_requested_status(value)


class StorageCloseTestCase(SimpleTestCase):
    def test_close_is_silent_and_idempotent(self):
        """Runs from atexit, after logging handlers may already be closed"""
        storage = PortalStorage()
        storage.is_open = True
        with mock.patch('core.storage.connections') as connections, \
                self.assertNoLogs('core.storage', level='DEBUG'):
            storage.close()
            storage.close()
        connections.__getitem__.assert_called_once_with('default')
        connections.__getitem__.return_value.close.assert_called_once_with()
        self.assertFalse(storage.is_open)


class StorageTestCase(TestCase):
    def setUp(self):
        self.storage = get_storage()
        self.company = User.objects.create_user(
            username='acme', password='pass', role='company', email='hr@acme.test'
        )
        self.student = User.objects.create_user(
            username='S1001', password='pass', role='student', email='s@example.com', name='Sam'
        )
        self.internship = self.storage.create_internship(self.company.id, {
            'title': 'Backend Intern',
            'description': 'Build APIs',
            'requirements': 'Python',
            'location': 'Remote',
            'start_date': '2025-06-01',
            'end_date': '2025-08-31',
        })

    def test_storage_is_built_once_and_open(self):
        self.assertIs(get_storage(), self.storage)
        self.assertTrue(self.storage.is_open)

    def test_open_rejects_unknown_alias(self):
        with self.assertRaises(StoreError):
            PortalStorage(using='missing').open()

    def test_verify_internship_ownership(self):
        internship = self.storage.verify_internship_ownership(self.internship.id, self.company.id)
        self.assertEqual(internship.id, self.internship.id)
        with self.assertRaises(PermissionDenied):
            self.storage.verify_internship_ownership(self.internship.id, self.student.id)
        with self.assertRaises(NotFound):
            self.storage.verify_internship_ownership(9999, self.company.id)

    def test_verify_application_ownership_goes_through_internship(self):
        application = self.storage.create_application(self.internship.id, self.student.id, 'https://example.com/cv.pdf')
        with self.storage.atomic():
            found = self.storage.verify_application_ownership(application.id, self.company.id, lock=True)
        self.assertEqual(found.id, application.id)
        with self.assertRaises(PermissionDenied):
            self.storage.verify_application_ownership(application.id, self.student.id)
        with self.assertRaises(NotFound):
            self.storage.verify_application_ownership(9999, self.company.id)

    def test_update_internship_merges_fields(self):
        updated = self.storage.update_internship(self.internship.id, {'location': 'Lagos'})
        self.assertEqual(updated.location, 'Lagos')
        self.assertEqual(updated.title, 'Backend Intern')
        self.assertEqual(updated.company_name, 'acme')

    def test_update_user_keeps_fields_given_as_none(self):
        user = self.storage.update_user(self.student.id, {'name': None, 'email': 'new@example.com'})
        self.assertEqual(user.name, 'Sam')
        self.assertEqual(user.email, 'new@example.com')

    def test_missing_rows_raise_store_error(self):
        with self.assertRaises(StoreError):
            self.storage.update_internship(9999, {'title': 'x'})
        with self.assertRaises(StoreError):
            self.storage.delete_application(9999)
        with self.assertRaises(StoreError):
            self.storage.delete_user(9999)

    def test_joined_names_are_none_for_orphans(self):
        application = self.storage.create_application(self.internship.id, self.student.id, 'https://example.com/cv.pdf')
        Internship.objects.filter(id=self.internship.id).delete()
        User.objects.filter(id=self.student.id).delete()

        orphan = self.storage.get_application(application.id)
        self.assertIsNone(orphan.internship_title)
        self.assertIsNone(orphan.student_name)
        self.assertEqual(Application.objects.count(), 1)
