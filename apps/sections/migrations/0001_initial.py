from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Section",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=100, unique=True)),
                ("description", models.TextField(blank=True, default="")),
                ("capacity", models.PositiveIntegerField(default=50)),
                ("current_enrollment", models.PositiveIntegerField(default=0)),
                ("fee_termly", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("fee_annual", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("age_min", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("age_max", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "sections",
                "ordering": ("name",),
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("current_enrollment__lte", models.F("capacity"))),
                        name="section_enrollment_within_capacity",
                    )
                ],
            },
        ),
    ]
