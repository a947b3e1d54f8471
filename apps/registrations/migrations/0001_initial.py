import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("sections", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("student_name", models.CharField(max_length=100)),
                ("student_age", models.PositiveSmallIntegerField()),
                ("parent_name", models.CharField(max_length=100)),
                ("phone", models.CharField(max_length=20)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                (
                    "payment_plan",
                    models.CharField(
                        choices=[("Termly Plan", "Termly Plan"), ("Annual Plan", "Annual Plan")], max_length=20
                    ),
                ),
                ("comments", models.TextField(blank=True, null=True)),
                ("registration_date", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")],
                        default="pending",
                        max_length=10,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[("unpaid", "Unpaid"), ("partial", "Partial"), ("paid", "Paid")],
                        default="unpaid",
                        max_length=10,
                    ),
                ),
                (
                    "section",
                    models.ForeignKey(
                        db_column="section",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="students",
                        to="sections.section",
                        to_field="name",
                    ),
                ),
            ],
            options={
                "db_table": "students",
                "ordering": ("-created_at", "-id"),
                "indexes": [
                    models.Index(fields=["status"], name="students_status_idx"),
                    models.Index(fields=["-created_at"], name="students_created_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("student_name", "parent_name", "phone"), name="unique_student_parent_phone"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=10)),
                ("payment_method", models.CharField(blank=True, max_length=50, null=True)),
                ("payment_reference", models.CharField(blank=True, max_length=100, null=True)),
                ("payment_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("academic_term", models.CharField(blank=True, max_length=50, null=True)),
                ("status", models.CharField(default="pending", max_length=20)),
                ("notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="registrations.student",
                    ),
                ),
            ],
            options={
                "db_table": "payments",
                "ordering": ("-payment_date",),
            },
        ),
    ]
