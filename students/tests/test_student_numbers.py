from __future__ import annotations

import pytest
from django.utils import timezone

from students.models import Student


@pytest.mark.django_db
def test_new_students_get_sequential_numbers(make_student):
    year = timezone.now().year
    first = make_student("s1")
    second = make_student("s2")
    assert first.student_number == f"{year}-00001"
    assert second.student_number == f"{year}-00002"


@pytest.mark.django_db
def test_explicit_number_is_kept(make_user):
    user = make_user("manual")
    s = Student.objects.create(user=user, student_number="2019-12345", program="BSIT", year_level="4th Year")
    assert s.student_number == "2019-12345"


@pytest.mark.django_db
def test_numbers_taken_after_a_deletion_are_skipped(make_student):
    year = timezone.now().year
    first = make_student("s1")
    make_student("s2")
    first.delete()
    third = make_student("s3")
    assert third.student_number == f"{year}-00003"


@pytest.mark.django_db
def test_display_name_uses_user_names(student):
    assert "Juan" in student.display_name and "Cruz" in student.display_name
