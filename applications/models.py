from django.db import models
from django.utils import timezone


class Application(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        ACCEPTED = "accepted", "Accepted"
        REJECTED = "rejected", "Rejected"

    # Ownership is derived through the internship's company_id
    internship_id = models.IntegerField(db_index=True)
    student_id = models.IntegerField(db_index=True)
    resume_url = models.URLField(max_length=500)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    applied_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"Application {self.id} - student {self.student_id} - {self.status}"
