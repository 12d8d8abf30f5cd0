from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AccessLog",
            fields=[
                ("id", models.AutoField(primary_key=True, serialize=False)),
                ("epoch", models.BigIntegerField(db_index=True)),
                ("remote_addr", models.TextField(blank=True, null=True)),
                ("remote_user", models.TextField(blank=True, null=True)),
                ("status", models.IntegerField(blank=True, null=True)),
                ("method", models.TextField(blank=True, null=True)),
                ("path", models.TextField(blank=True, null=True)),
                ("version", models.TextField(blank=True, null=True)),
                ("body_bytes_sent", models.IntegerField(blank=True, null=True)),
                ("referer", models.TextField(blank=True, null=True)),
                ("user_agent", models.TextField(blank=True, null=True)),
                ("host", models.TextField()),
            ],
            options={
                "db_table": "logs",
                "indexes": [
                    models.Index(fields=["host", "epoch"], name="logs_host_epoch_idx"),
                ],
            },
        ),
    ]
