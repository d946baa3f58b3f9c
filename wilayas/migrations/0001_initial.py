import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Wilaya',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=10, unique=True)),
                ('name', models.CharField(max_length=100)),
                ('latitude', models.FloatField()),
                ('longitude', models.FloatField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Wilaya',
                'verbose_name_plural': 'Wilayas',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['latitude', 'longitude'], name='wilayas_wil_latitud_6f73f3_idx')],
            },
        ),
        migrations.CreateModel(
            name='BloodCenter',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('latitude', models.FloatField()),
                ('longitude', models.FloatField()),
                ('wilaya', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='blood_centers', to='wilayas.wilaya')),
            ],
            options={
                'verbose_name': 'Blood Center',
                'verbose_name_plural': 'Blood Centers',
                'ordering': ['name'],
            },
        ),
    ]
