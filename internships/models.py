from django.db import models


class Internship(models.Model):
    # Plain id reference; deleting the company leaves the internship in place
    company_id = models.IntegerField(db_index=True)
    title = models.CharField(max_length=255)
    description = models.TextField()
    requirements = models.TextField()
    location = models.CharField(max_length=255)
    start_date = models.DateField()
    end_date = models.DateField()

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.title} - company {self.company_id}"
