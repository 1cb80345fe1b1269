# Generated manually for the inventory app

from django.db import migrations, models
import django.utils.timezone
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Asset',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('asset_name', models.CharField(max_length=255)),
                ('asset_type', models.CharField(blank=True, max_length=100)),
                ('unique_code', models.CharField(blank=True, db_index=True, max_length=50)),
                ('serial_number', models.CharField(blank=True, max_length=100)),
                ('assignment_type', models.CharField(blank=True, choices=[('individual', 'Individual'), ('department', 'Department'), ('office', 'Office')], help_text='Who the asset is issued to', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Asset',
                'verbose_name_plural': 'Assets',
                'db_table': 'assets',
                'ordering': ['asset_name'],
            },
        ),
        migrations.CreateModel(
            name='AssetAssignment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('asset_id', models.UUIDField(db_index=True)),
                ('assigned_to', models.UUIDField(blank=True, help_text='Profile id for individual assignments', null=True)),
                ('assignment_type', models.CharField(choices=[('individual', 'Individual'), ('department', 'Department'), ('office', 'Office')], default='individual', max_length=20)),
                ('department', models.CharField(blank=True, max_length=100)),
                ('office_location', models.CharField(blank=True, max_length=100)),
                ('is_current', models.BooleanField(db_index=True, default=True)),
                ('assigned_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'verbose_name': 'Asset Assignment',
                'verbose_name_plural': 'Asset Assignments',
                'db_table': 'asset_assignments',
                'ordering': ['-assigned_at'],
                'indexes': [models.Index(fields=['asset_id', 'is_current'], name='asset_assign_current_idx')],
            },
        ),
        migrations.CreateModel(
            name='Device',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('device_name', models.CharField(max_length=255)),
                ('serial_number', models.CharField(blank=True, max_length=100)),
                ('assigned_to', models.UUIDField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Device',
                'verbose_name_plural': 'Devices',
                'db_table': 'devices',
                'ordering': ['device_name'],
            },
        ),
    ]
