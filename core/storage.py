"""
Storage component shared by every view.

One ``PortalStorage`` is built by ``CoreConfig.ready()`` and handed to the views
through ``as_view(storage=...)`` or, for router-registered viewsets,
``with_storage(storage)``. It wraps all reads and writes on the users,
internships and applications tables, plus the ownership checks that guard
company-scoped mutations.

References between tables are plain ids, so joined display names are
computed with correlated subqueries and come back as ``None`` when the
referenced row has been deleted.
"""
import logging

from django.db import DatabaseError, connections, transaction
from django.db.models import OuterRef, Subquery
from rest_framework.exceptions import NotFound, PermissionDenied

from accounts.models import User
from applications.models import Application
from internships.models import Internship
from .exceptions import StoreError

logger = logging.getLogger(__name__)


INTERNSHIP_FIELDS = ("title", "description", "requirements", "location", "start_date", "end_date")
USER_FIELDS = ("name", "role", "email")


class PortalStorage:
    def __init__(self, using="default"):
        self.using = using
        self.is_open = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def open(self):
        if self.using not in connections:
            raise StoreError(f"Unknown database alias '{self.using}'")
        self.is_open = True
        logger.info(f"Storage bound to database '{self.using}'")
        return self

    def close(self):
        if not self.is_open:
            return
        connections[self.using].close()
        self.is_open = False

    def atomic(self):
        return transaction.atomic(using=self.using)

    # ------------------------------------------------------------------
    # Querysets with joined display names
    # ------------------------------------------------------------------
    def _users(self):
        return User.objects.using(self.using)

    def _username_of(self, ref):
        return Subquery(User.objects.filter(pk=OuterRef(ref)).values("username")[:1])

    def _internships(self):
        return Internship.objects.using(self.using).annotate(company_name=self._username_of("company_id"))

    def _applications(self, with_title=True, with_student=True):
        queryset = Application.objects.using(self.using)
        if with_title:
            queryset = queryset.annotate(
                internship_title=Subquery(
                    Internship.objects.filter(pk=OuterRef("internship_id")).values("title")[:1]
                )
            )
        if with_student:
            queryset = queryset.annotate(student_name=self._username_of("student_id"))
        return queryset

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def get_user(self, user_id):
        return self._users().filter(pk=user_id).first()

    def get_user_by_username(self, username):
        return self._users().filter(username=username).first()

    def create_user(self, username, password, role, email, name=None):
        try:
            user = User.objects.db_manager(self.using).create_user(
                username=username, password=password, role=role, email=email, name=name
            )
        except DatabaseError as e:
            raise StoreError(f"Failed to create user: {e}") from e
        logger.info(f"Created {role} account '{username}' (id={user.id})")
        return user

    def get_all_users(self):
        return self._users().all()

    def update_user(self, user_id, data):
        """Coalesce-merge name/role/email; fields that are absent or None keep their value."""
        user = self.get_user(user_id)
        if user is None:
            raise StoreError("User not found")
        changed = [field for field in USER_FIELDS if data.get(field) is not None]
        for field in changed:
            setattr(user, field, data[field])
        if changed:
            user.save(using=self.using, update_fields=changed)
        return user

    def update_user_password(self, user_id, raw_password):
        user = self.get_user(user_id)
        if user is None:
            raise StoreError("User not found")
        user.set_password(raw_password)
        user.save(using=self.using, update_fields=["password"])
        return user

    def delete_user(self, user_id):
        # Internships and applications keep pointing at the deleted id
        deleted, _ = self._users().filter(pk=user_id).delete()
        if not deleted:
            raise StoreError("User not found")

    # ------------------------------------------------------------------
    # Internships
    # ------------------------------------------------------------------
    def get_internships(self):
        return self._internships().all()

    def get_internships_by_company(self, company_id):
        return self._internships().filter(company_id=company_id)

    def get_internship(self, internship_id):
        return self._internships().filter(pk=internship_id).first()

    def create_internship(self, company_id, data):
        fields = {field: data[field] for field in INTERNSHIP_FIELDS}
        try:
            internship = Internship.objects.using(self.using).create(company_id=company_id, **fields)
        except DatabaseError as e:
            raise StoreError(f"Failed to create internship: {e}") from e
        logger.info(f"Internship {internship.id} created for company {company_id}")
        return self.get_internship(internship.id)

    def update_internship(self, internship_id, data):
        """Partial update: only the fields present in ``data`` change."""
        internship = Internship.objects.using(self.using).filter(pk=internship_id).first()
        if internship is None:
            raise StoreError("Internship not found")
        changed = [field for field in INTERNSHIP_FIELDS if field in data]
        for field in changed:
            setattr(internship, field, data[field])
        if changed:
            internship.save(using=self.using, update_fields=changed)
        logger.info(f"Internship {internship_id} updated ({', '.join(changed) or 'no changes'})")
        return self.get_internship(internship_id)

    def delete_internship(self, internship_id):
        # Applications for this internship are left behind as orphans
        deleted, _ = Internship.objects.using(self.using).filter(pk=internship_id).delete()
        if not deleted:
            raise StoreError("Internship not found")
        logger.info(f"Internship {internship_id} deleted")

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------
    def create_application(self, internship_id, student_id, resume_url):
        try:
            application = Application.objects.using(self.using).create(
                internship_id=internship_id,
                student_id=student_id,
                resume_url=resume_url,
                status=Application.Status.PENDING,
            )
        except DatabaseError as e:
            raise StoreError(f"Failed to create application: {e}") from e
        logger.info(f"Student {student_id} applied to internship {internship_id} (application {application.id})")
        return self._applications().get(pk=application.id)

    def get_application(self, application_id):
        return self._applications().filter(pk=application_id).first()

    def get_applications_by_student(self, student_id):
        return self._applications(with_student=False).filter(student_id=student_id)

    def get_applications_by_internship(self, internship_id):
        return self._applications(with_title=False).filter(internship_id=internship_id)

    def get_all_applications(self):
        return self._applications().all()

    def update_application_status(self, application_id, status):
        updated = Application.objects.using(self.using).filter(pk=application_id).update(status=status)
        if not updated:
            raise StoreError("Application not found")
        logger.info(f"Application {application_id} marked {status}")
        return self.get_application(application_id)

    def delete_application(self, application_id):
        deleted, _ = Application.objects.using(self.using).filter(pk=application_id).delete()
        if not deleted:
            raise StoreError("Application not found")
        logger.info(f"Application {application_id} deleted")

    # ------------------------------------------------------------------
    # Ownership verification
    # ------------------------------------------------------------------
    def _lockable(self, model, lock):
        queryset = model.objects.using(self.using)
        return queryset.select_for_update() if lock else queryset

    def verify_internship_ownership(self, internship_id, actor_id, action="modify", lock=False):
        """
        Return the internship if ``actor_id`` owns it.

        Raises NotFound when it does not exist and PermissionDenied when it
        belongs to another company. Pass ``lock=True`` inside ``atomic()`` to
        hold the row until the guarded mutation commits.
        """
        internship = self._lockable(Internship, lock).filter(pk=internship_id).first()
        if internship is None:
            raise NotFound("Internship not found")
        if internship.company_id != actor_id:
            logger.warning(f"User {actor_id} denied {action} on internship {internship_id} owned by {internship.company_id}")
            raise PermissionDenied(f"You don't have permission to {action} this internship")
        return internship

    def verify_application_ownership(self, application_id, actor_id, action="update", lock=False):
        """Same check as above, resolved through the application's internship."""
        application = self._lockable(Application, lock).filter(pk=application_id).first()
        if application is None:
            raise NotFound("Application not found")
        internship = self._lockable(Internship, lock).filter(pk=application.internship_id).first()
        if internship is None or internship.company_id != actor_id:
            logger.warning(f"User {actor_id} denied {action} on application {application_id}")
            raise PermissionDenied(f"You don't have permission to {action} this application")
        return application
