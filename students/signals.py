"""Student number assignment.

Numbers look like `2025-00042`: the current year and a five-digit
sequence derived from the number of student records.
"""
from django.db.models.signals import pre_save
from django.dispatch import receiver
from django.utils import timezone

from .models import Student


def next_student_number() -> str:
    year = timezone.now().year
    seq = Student.objects.count() + 1
    candidate = f"{year}-{seq:05d}"
    # Deleted records leave gaps in the count; skip numbers already taken
    while Student.objects.filter(student_number=candidate).exists():
        seq += 1
        candidate = f"{year}-{seq:05d}"
    return candidate


@receiver(pre_save, sender=Student)
def assign_student_number(sender, instance: Student, **kwargs):  # noqa: D401
    """Give new students a number unless one was set explicitly."""
    if instance.pk is None and not instance.student_number:
        instance.student_number = next_student_number()
