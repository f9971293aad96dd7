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
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("student_number", models.CharField(blank=True, max_length=20, null=True, unique=True)),
                ("program", models.CharField(max_length=100)),
                ("year_level", models.CharField(choices=[("1st Year", "1st Year"), ("2nd Year", "2nd Year"), ("3rd Year", "3rd Year"), ("4th Year", "4th Year"), ("5th Year", "5th Year")], max_length=16)),
                ("section", models.CharField(blank=True, max_length=20)),
                ("status", models.CharField(choices=[("Active", "Active"), ("Inactive", "Inactive"), ("Graduated", "Graduated"), ("Dropped", "Dropped"), ("LOA", "Leave of absence")], default="Active", max_length=16)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="student", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["student_number"],
            },
        ),
    ]
