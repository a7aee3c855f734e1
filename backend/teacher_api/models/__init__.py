"""ORM Models — SQLAlchemy declarative models for the school schema.

Invariants:
    - All models inherit from Base (db/base.py)
    - Table and column names match the deployed schema; Python attributes are English

Design Decisions:
    - Small files grouped by concern (a table plus its satellite, e.g. Evaluation + Grade)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references and Base.metadata is complete before create_all/autogenerate
"""

from teacher_api.models.school import School, Role  # noqa: F401
from teacher_api.models.person import Person, Contact  # noqa: F401
from teacher_api.models.vinculo import Vinculo  # noqa: F401
from teacher_api.models.course import Course  # noqa: F401
from teacher_api.models.subject import Subject  # noqa: F401
from teacher_api.models.course_subject import CourseSubject  # noqa: F401
from teacher_api.models.teacher_subject import TeacherSubject  # noqa: F401
from teacher_api.models.enrollment import Enrollment  # noqa: F401
from teacher_api.models.lesson import Lesson  # noqa: F401
from teacher_api.models.schedule import Schedule, Room  # noqa: F401
from teacher_api.models.evaluation import Evaluation, Grade  # noqa: F401
from teacher_api.models.attendance import DailyAttendance  # noqa: F401
from teacher_api.models.observation import Observation  # noqa: F401
from teacher_api.models.notification import Notification, NotificationRecipient  # noqa: F401
