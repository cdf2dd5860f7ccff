"""Seed demo courses, students, questions and responses.

Everything goes through the stores and services so the demo data obeys
the same rules as real traffic (notifications included). Re-running
reuses existing courses and students and adds the questions again.
"""
from __future__ import annotations

from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.db import transaction

from accounts import students
from courses import registry
from forum import services

COURSES = [
    {
        "code": "CS545",
        "name": "Human Computer Interaction",
        "section": "A",
        "department": "Computer Science",
        "instructor_name": "Ada Lovelace",
        "instructor_email": "ada.lovelace@example.edu",
        "term": "Fall 2025",
    },
    {
        "code": "CS546",
        "name": "Web Programming I",
        "section": "B",
        "department": "Computer Science",
        "instructor_name": "Alan Turing",
        "instructor_email": "alan.turing@example.edu",
        "term": "Fall 2025",
    },
]

STUDENTS = [
    ("Aditi", "Sharma", "Computer Science", 22),
    ("Marco", "Rossi", "Software Engineering", 23),
    ("Lena", "Fischer", "Data Science", 21),
]

QUESTIONS = [
    # (course index, student index, title, content, anonymous)
    (0, 0, "How do I run a usability study?", "What is the minimum number of participants we need?", False),
    (0, 1, "Wireframe fidelity for milestone 2", "Are low-fidelity sketches acceptable?", True),
    (1, 2, "Session cookies vs tokens", "Which approach should the final project use?", False),
]

RESPONSES = [
    # (question index, student index, content)
    (0, 1, "Five participants usually surface most usability issues."),
    (0, 2, "The syllabus mentions at least five, ideally eight."),
    (2, 0, "Session cookies; the starter code already sets them up."),
]


class Command(BaseCommand):
    help = "Create demo courses, students, questions and responses."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="password123", help="Password for every seeded student.")

    @transaction.atomic
    def handle(self, *args, **options):
        credential_hash = make_password(options["password"])
        domain = settings.COURSEHUB_EMAIL_DOMAIN

        courses = [registry.get_course_by_code(c["code"]) or registry.create_course(c) for c in COURSES]
        course_ids = [c.pk for c in courses]

        people = []
        for first, last, major, age in STUDENTS:
            email = f"{first}.{last}@{domain}".lower()
            student = students.find_by_email(email)
            if student is None:
                student = students.create_student(
                    {
                        "first_name": first,
                        "last_name": last,
                        "email": email,
                        "credential_hash": credential_hash,
                        "major": major,
                        "age": age,
                        "enrolled_course_ids": course_ids,
                    }
                )
            people.append(student)

        asked = []
        for course_idx, student_idx, title, content, anonymous in QUESTIONS:
            question = services.ask_question(people[student_idx].pk, course_ids[course_idx], title, content, anonymous)
            asked.append(question)

        for question_idx, student_idx, content in RESPONSES:
            services.answer_question(people[student_idx].pk, asked[question_idx].pk, content)

        self.stdout.write(self.style.SUCCESS("Seeding completed."))
        self.stdout.write(f"  Courses: {len(courses)}")
        self.stdout.write(f"  Students: {len(people)}")
        self.stdout.write(f"  Questions: {len(asked)}")
        self.stdout.write(f"  Example login: {people[0].email}")
