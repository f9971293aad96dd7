from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("subjects", "0001_initial"),
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Quiz",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("duration", models.PositiveIntegerField()),
                ("total_points", models.PositiveIntegerField(default=0)),
                ("status", models.CharField(choices=[("draft", "Draft"), ("published", "Published")], default="draft", max_length=16)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("offering", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="quizzes", to="subjects.subjectoffering")),
                ("subject", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="quizzes", to="subjects.subject")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order", models.PositiveSmallIntegerField(default=0)),
                ("text", models.TextField()),
                ("type", models.CharField(choices=[("multiple-choice", "Multiple choice"), ("true-false", "True/False")], max_length=20)),
                ("options", models.JSONField(default=list)),
                ("correct_answer", models.CharField(max_length=500)),
                ("points", models.PositiveIntegerField(default=1)),
                ("quiz", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="questions", to="quizzes.quiz")),
            ],
            options={
                "ordering": ["order", "id"],
                "unique_together": {("quiz", "order")},
            },
        ),
        migrations.CreateModel(
            name="Submission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("score", models.PositiveIntegerField(default=0)),
                ("submitted_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("quiz", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="submissions", to="quizzes.quiz")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="quiz_submissions", to="students.student")),
            ],
            options={
                "ordering": ["-submitted_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="submission",
            constraint=models.UniqueConstraint(fields=("quiz", "student"), name="unique_submission_per_student"),
        ),
        migrations.CreateModel(
            name="GradedAnswer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("question_index", models.PositiveSmallIntegerField()),
                ("student_answer", models.TextField(blank=True)),
                ("correct_answer", models.CharField(max_length=500)),
                ("is_correct", models.BooleanField(default=False)),
                ("points", models.PositiveIntegerField(default=0)),
                ("submission", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="answers", to="quizzes.submission")),
            ],
            options={
                "ordering": ["question_index"],
                "unique_together": {("submission", "question_index")},
            },
        ),
    ]
