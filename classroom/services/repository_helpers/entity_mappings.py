# /classroom/services/repository_helpers/entity_mappings.py

"""
The mapping descriptors for the five backend tables.

Column names follow the hosted backend's convention of a `_c` suffix on
custom columns; `Id` and `Name` are system columns present on every table.
"""

from .field_mapping import EntityMapping, FieldKind, FieldSpec, order_descending
from ...models.assignment_model import Assignment
from ...models.attendance_model import Attendance, AttendanceStatus
from ...models.communication_model import Communication, CommunicationType
from ...models.grade_model import Grade
from ...models.student_model import Student, StudentStatus

DEFAULT_PAGE_SIZE = 100
ATTENDANCE_LIST_PAGE_SIZE = 200


def _text(domain: str, external: str, **kwargs) -> FieldSpec:
    return FieldSpec(domain=domain, external=external, **kwargs)


def _reference(domain: str, external: str, required: bool = True) -> FieldSpec:
    return FieldSpec(domain=domain, external=external, kind=FieldKind.REFERENCE, default=None, required=required)


STUDENT_MAPPING = EntityMapping(
    entity="Student",
    table="student_c",
    domain_model=Student,
    columns=(
        _text("firstName", "first_name_c"),
        _text("lastName", "last_name_c"),
        _text("grade", "grade_c"),
        _text("dateOfBirth", "date_of_birth_c"),
        _text("email", "email_c"),
        _text("phone", "phone_c"),
        _text("parentName", "parent_name_c"),
        _text("parentEmail", "parent_email_c"),
        _text("parentPhone", "parent_phone_c"),
        _text("address", "address_c"),
        _text("enrollmentDate", "enrollment_date_c"),
        _text(
            "status", "status_c",
            default=StudentStatus.ACTIVE.value,
            choices=tuple(s.value for s in StudentStatus),
        ),
    ),
    display_name=lambda values: f"{values['firstName']} {values['lastName']}",
    page_size=DEFAULT_PAGE_SIZE,
)

ASSIGNMENT_MAPPING = EntityMapping(
    entity="Assignment",
    table="assignment_c",
    domain_model=Assignment,
    columns=(
        _text("title", "title_c"),
        _text("category", "category_c"),
        FieldSpec(domain="totalPoints", external="total_points_c", kind=FieldKind.INTEGER, default=0, required=True),
        _text("dueDate", "due_date_c"),
        _text("classId", "class_id_c"),
    ),
    display_name=lambda values: values["title"],
    page_size=DEFAULT_PAGE_SIZE,
)

GRADE_MAPPING = EntityMapping(
    entity="Grade",
    table="grade_c",
    domain_model=Grade,
    columns=(
        FieldSpec(domain="score", external="score_c", kind=FieldKind.NUMBER, default=0.0, required=True),
        _text("submittedDate", "submitted_date_c"),
        _text("comments", "comments_c"),
        _reference("studentId", "student_id_c"),
        _reference("assignmentId", "assignment_id_c"),
    ),
    display_name=lambda values: f"Grade for Student {values['studentId']}",
    page_size=DEFAULT_PAGE_SIZE,
)

ATTENDANCE_MAPPING = EntityMapping(
    entity="Attendance",
    table="attendance_c",
    domain_model=Attendance,
    columns=(
        _text("date", "date_c"),
        _text(
            "status", "status_c",
            default=AttendanceStatus.UNMARKED.value,
            choices=tuple(s.value for s in AttendanceStatus),
            # "unmarked" is what the UI shows before anything is recorded; never stored.
            write_choices=tuple(s.value for s in AttendanceStatus if s != AttendanceStatus.UNMARKED),
        ),
        _text("reason", "reason_c"),
        _reference("studentId", "student_id_c"),
    ),
    display_name=lambda values: f"Attendance for {values['date']}",
    page_size=DEFAULT_PAGE_SIZE,
    list_page_size=ATTENDANCE_LIST_PAGE_SIZE,
)

COMMUNICATION_MAPPING = EntityMapping(
    entity="Communication",
    table="communication_c",
    domain_model=Communication,
    columns=(
        _text("teacherName", "teacher_name_c"),
        _text("date", "date_c"),
        _text("type", "type_c", default=None, choices=tuple(t.value for t in CommunicationType)),
        _text("subject", "subject_c"),
        _text("notes", "notes_c"),
        FieldSpec(domain="followUpRequired", external="follow_up_required_c", kind=FieldKind.BOOLEAN, default=False),
        FieldSpec(domain="createdAt", external="created_at_c", kind=FieldKind.TIMESTAMP, immutable=True),
        _reference("studentId", "student_id_c"),
        _reference("teacherId", "teacher_id_c", required=False),
    ),
    display_name=lambda values: values["subject"],
    page_size=DEFAULT_PAGE_SIZE,
    student_order=order_descending("date"),
)

ALL_MAPPINGS = (
    STUDENT_MAPPING,
    ASSIGNMENT_MAPPING,
    GRADE_MAPPING,
    ATTENDANCE_MAPPING,
    COMMUNICATION_MAPPING,
)
