from django.db import models


class Store(models.Model):
    name = models.CharField(max_length=255)
    url = models.CharField(max_length=400, blank=True, default="")

    class Meta:
        db_table = "stores"

    def __str__(self):
        return self.name
