# wilayas/models.py
from django.db import models


class Wilaya(models.Model):
    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=100)

    latitude = models.FloatField()
    longitude = models.FloatField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Wilaya'
        verbose_name_plural = 'Wilayas'
        indexes = [models.Index(fields=['latitude', 'longitude'])]

    def __str__(self):
        return f"{self.code} - {self.name}"

    def save(self, *args, **kwargs):
        self.code = self.code.strip()
        self.name = self.name.strip()
        super().save(*args, **kwargs)


class BloodCenter(models.Model):
    wilaya = models.ForeignKey(Wilaya, on_delete=models.CASCADE, related_name='blood_centers')
    name = models.CharField(max_length=200)
    latitude = models.FloatField()
    longitude = models.FloatField()

    class Meta:
        ordering = ['name']
        verbose_name = 'Blood Center'
        verbose_name_plural = 'Blood Centers'

    def __str__(self):
        return self.name
