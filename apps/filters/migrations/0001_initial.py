# Generated manually for the tourism portal

import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='FilterConfig',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('family', models.CharField(db_index=True, max_length=32, unique=True)),
                ('fixed_groups', models.JSONField(blank=True, default=dict)),
                ('hidden_fixed_groups', models.JSONField(blank=True, default=list)),
                ('fixed_group_meta', models.JSONField(blank=True, default=dict)),
                ('extra_groups', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'filter_configs',
                'ordering': ['family'],
            },
        ),
    ]
