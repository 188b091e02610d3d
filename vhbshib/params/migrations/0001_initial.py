from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ConfigParam',
            fields=[
                ('param_name', models.CharField(max_length=255, primary_key=True, serialize=False, verbose_name='parameter name')),
                ('param_value', models.CharField(blank=True, default=None, max_length=255, null=True, verbose_name='parameter value')),
            ],
            options={
                'db_table': 'vhbshib_config',
                'verbose_name': 'configuration parameter',
            },
        ),
    ]
