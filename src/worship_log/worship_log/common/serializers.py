"""JSON shapes returned by the HTTP layer."""
from __future__ import annotations

from .datetime_utils import format_iso


def student_to_dict(s) -> dict:
    return {
        "student_id": s.student_id,
        "name": s.name,
        "class_id": s.class_id,
        "placement": s.placement_label,
        "tags": list(s.tags),
        "first_visit_date": format_iso(s.first_visit_date),
        "class_assigned_date": format_iso(s.class_assigned_date),
        "is_active": s.is_active,
    }


def class_to_dict(c) -> dict:
    return {
        "class_id": c.class_id,
        "grade": c.grade.value,
        "name": c.name,
        "label": c.short_label,
        "teacher_id": c.teacher_id,
        "teacher_name": c.teacher_name,
    }


def teacher_to_dict(t) -> dict:
    return {"teacher_id": t.teacher_id, "name": t.name, "role": t.role.value}


def log_to_dict(log) -> dict:
    return {
        "log_id": log.log_id,
        "date": format_iso(log.log_date),
        "prayer": log.prayer,
        "prayer_role": log.prayer_role,
        "sermon_title": log.sermon_title,
        "sermon_text": log.sermon_text,
        "preacher": log.preacher,
        "coupon_recipient_count": log.coupon_recipient_count,
        "coupons_per_person": log.coupons_per_person,
        "coupon_total_won": log.coupon_total_won,
        "online_attendance_count": log.online_attendance_count,
        "online_attendance_names": log.online_attendance_names,
    }


def offering_to_dict(o) -> dict:
    return {"type": o.offering_type, "amount": o.amount, "memo": o.memo or ""}


def changes_to_dict(changes: dict) -> dict:
    out = {}
    for key, value in changes.items():
        if key in ("first_visit_date", "class_assigned_date"):
            value = format_iso(value)
        elif key == "tags":
            value = list(value)
        out[key] = value
    return out
