# hospitals/models.py
from django.db import models


class Hospital(models.Model):
    name = models.CharField(max_length=200)
    structure = models.CharField(max_length=200, blank=True)
    telephone = models.CharField(max_length=50, blank=True)
    fax = models.CharField(max_length=50, blank=True)

    # Region name as imported; region is resolved from it on save
    wilaya = models.CharField(max_length=100, db_index=True)
    region = models.ForeignKey(
        'wilayas.Wilaya',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='hospitals',
    )

    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Hospital'
        verbose_name_plural = 'Hospitals'
        indexes = [models.Index(fields=['latitude', 'longitude'])]

    def __str__(self):
        return f"{self.name} ({self.wilaya})"

    @property
    def wilaya_code(self):
        return self.region.code if self.region_id else None

    def save(self, *args, **kwargs):
        if self.wilaya:
            self.wilaya = self.wilaya.strip()
        if self.wilaya and self.region_id is None:
            from wilayas.models import Wilaya
            self.region = Wilaya.objects.filter(name__iexact=self.wilaya).first()
        super().save(*args, **kwargs)
