from django.db import migrations, models

from indexing.operations import AddConcurrentIndex


class Migration(migrations.Migration):
    atomic = False  # CREATE INDEX CONCURRENTLY cannot be run in a txn

    dependencies = [
        ('catalog', '0001_initial'),
    ]

    operations = [
        AddConcurrentIndex(
            model_name='product',
            index=models.Index(fields=['name'], name='name_idx'),
        ),
    ]
