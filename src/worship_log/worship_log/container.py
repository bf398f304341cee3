from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .database.connection import DBConfig, DatabaseConnection
from .offerings.mysql_offering_repository import MySQLOfferingRepository
from .offerings.repository import OfferingRepository
from .offerings.service import OfferingService
from .reports.service import WorshipSnapshotService
from .roster.service import RosterService
from .stats.service import AttendanceStatsService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.repository import TeacherRepository
from .teachers.service import TeacherService
from .worship_logs.mysql_worship_log_repository import MySQLWorshipLogRepository
from .worship_logs.repository import WorshipLogRepository
from .worship_logs.service import WorshipLogService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    classes_repo: ClassRepository
    teachers_repo: TeacherRepository
    logs_repo: WorshipLogRepository
    attendance_repo: AttendanceRepository
    offerings_repo: OfferingRepository

    student_service: StudentService
    roster_service: RosterService
    class_service: ClassService
    teacher_service: TeacherService
    worship_log_service: WorshipLogService
    attendance_service: AttendanceService
    offering_service: OfferingService
    stats_service: AttendanceStatsService
    snapshot_service: WorshipSnapshotService


def wire_services(
    *,
    students_repo: StudentRepository,
    classes_repo: ClassRepository,
    teachers_repo: TeacherRepository,
    logs_repo: WorshipLogRepository,
    attendance_repo: AttendanceRepository,
    offerings_repo: OfferingRepository,
) -> Container:
    roster_service = RosterService(students_repo, attendance_repo)
    offering_service = OfferingService(offerings_repo)

    return Container(
        students_repo=students_repo,
        classes_repo=classes_repo,
        teachers_repo=teachers_repo,
        logs_repo=logs_repo,
        attendance_repo=attendance_repo,
        offerings_repo=offerings_repo,
        student_service=StudentService(students_repo),
        roster_service=roster_service,
        class_service=ClassService(classes_repo),
        teacher_service=TeacherService(teachers_repo),
        worship_log_service=WorshipLogService(logs_repo),
        attendance_service=AttendanceService(attendance_repo, logs_repo),
        offering_service=offering_service,
        stats_service=AttendanceStatsService(logs_repo, students_repo, attendance_repo),
        snapshot_service=WorshipSnapshotService(
            logs_repo,
            classes_repo,
            teachers_repo,
            attendance_repo,
            roster_service,
            offering_service,
        ),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        students_repo=MySQLStudentRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        teachers_repo=MySQLTeacherRepository(conn),
        logs_repo=MySQLWorshipLogRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        offerings_repo=MySQLOfferingRepository(conn),
    )
