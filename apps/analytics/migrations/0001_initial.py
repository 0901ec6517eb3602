# Generated manually for the tourism portal

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ViewTracking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('entity_type', models.CharField(choices=[('place', 'Place'), ('route', 'Route'), ('service', 'Service'), ('news', 'News')], max_length=20)),
                ('entity_id', models.UUIDField()),
                ('visitor_id', models.CharField(max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tracked_views', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'view_tracking',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='viewtracking',
            index=models.Index(fields=['entity_type', 'entity_id'], name='view_tracking_entity_idx'),
        ),
        migrations.AddConstraint(
            model_name='viewtracking',
            constraint=models.UniqueConstraint(fields=('entity_type', 'entity_id', 'visitor_id'), name='unique_view_per_visitor'),
        ),
    ]
