# Generated manually for the audit trail

from django.db import migrations, models
import django.utils.timezone
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('user_id', models.UUIDField(blank=True, db_index=True, help_text='Profile that performed the action', null=True)),
                ('action', models.CharField(blank=True, db_index=True, help_text='Semantic action (create, update, delete, assign...)', max_length=50)),
                ('entity_type', models.CharField(blank=True, db_index=True, help_text='Kind of entity affected (free-form)', max_length=100)),
                ('entity_id', models.CharField(blank=True, db_index=True, help_text='ID of the entity affected', max_length=64, null=True)),
                ('operation', models.CharField(blank=True, help_text='Raw SQL operation (INSERT/UPDATE/DELETE)', max_length=20)),
                ('table_name', models.CharField(blank=True, max_length=100)),
                ('record_id', models.CharField(blank=True, max_length=64, null=True)),
                ('old_values', models.JSONField(blank=True, help_text='State before the change', null=True)),
                ('new_values', models.JSONField(blank=True, help_text='State after the change', null=True)),
                ('metadata', models.JSONField(blank=True, help_text='Legacy wrapper holding old_values/new_values', null=True)),
                ('department', models.CharField(blank=True, help_text='Department snapshot at the time of the change', max_length=100, null=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
            ],
            options={
                'verbose_name': 'Audit Log',
                'verbose_name_plural': 'Audit Logs',
                'db_table': 'audit_logs',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user_id', '-created_at'], name='audit_log_user_idx'),
                    models.Index(fields=['entity_type', 'entity_id'], name='audit_log_entity_idx'),
                    models.Index(fields=['action', '-created_at'], name='audit_log_action_idx'),
                ],
            },
        ),
    ]
