"""
Tests for status, compliance, exception and payroll report endpoints
"""
import csv
import io

import pytest
from fastapi import status

from app.models.audit_log import AuditLog
from app.tests.conftest import auth_headers

WEEK = {"start_date": "2025-11-24", "end_date": "2025-11-28"}


@pytest.fixture
def week_of_attendance(client, make_employee, admin_headers):
    """
    Default 09:00-17:00 / 8h schedule, week of Mon 2025-11-24:
    Mon on time 8.5h, Tue 20 minutes late 6.67h, Wed still open, Thu and Fri absent.
    """
    employee = make_employee(name="Report Subject", code="EMP500")
    for clock_in, clock_out in [
        ("2025-11-24T09:00:00", "2025-11-24T17:30:00"),
        ("2025-11-25T09:20:00", "2025-11-25T16:00:00"),
        ("2025-11-26T09:00:00", None),
    ]:
        client.post(
            "/api/v1/attendance/manual",
            json={"employee_id": employee.id, "clock_in": clock_in, "clock_out": clock_out},
            headers=admin_headers,
        )
    return employee


def test_status_report(client, week_of_attendance):
    response = client.get(
        f"/api/v1/attendance/status-report/{week_of_attendance.id}",
        params=WEEK,
        headers=auth_headers(week_of_attendance.id),
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["schedule"]["is_default"] is True
    summary = data["summary"]
    assert summary["total_records"] == 3
    assert summary["late_count"] == 1
    assert summary["total_late_minutes"] == 20
    assert summary["undertime_count"] == 1
    assert summary["total_undertime_hours"] == 1.33
    assert summary["overtime_count"] == 1
    assert summary["total_overtime_hours"] == 0.5
    open_record = [r for r in data["records"] if r["status"]["is_incomplete"]]
    assert len(open_record) == 1
    assert open_record[0]["status"]["is_undertime"] is False


def test_status_report_uses_configured_schedule(client, week_of_attendance, admin_headers):
    client.put(
        f"/api/v1/schedules/{week_of_attendance.id}",
        json={"start_time": "09:30", "end_time": "15:30", "expected_hours": 6},
        headers=admin_headers,
    )

    summary = client.get(
        f"/api/v1/attendance/status-report/{week_of_attendance.id}",
        params=WEEK,
        headers=admin_headers,
    ).json()["summary"]

    assert summary["late_count"] == 0
    assert summary["undertime_count"] == 0
    assert summary["overtime_count"] == 2


def test_detection_ignores_open_records(client, week_of_attendance, admin_headers):
    response = client.get("/api/v1/attendance/detection", params=WEEK, headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["summary"]["total_records"] == 2
    assert [a["record"]["clock_in"] for a in data["late"]] == ["2025-11-25T09:20:00"]
    assert len(data["undertime"]) == 1
    assert len(data["overtime"]) == 1
    assert data["late"][0]["record"]["employee_name"] == "Report Subject"


def test_detection_requires_admin(client, week_of_attendance):
    response = client.get(
        "/api/v1/attendance/detection", params=WEEK, headers=auth_headers(week_of_attendance.id)
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_schedule_comparison(client, week_of_attendance, admin_headers):
    response = client.get(
        f"/api/v1/reports/schedule-comparison/{week_of_attendance.id}",
        params=WEEK,
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [d["work_date"] for d in data["days"]] == ["2025-11-24", "2025-11-25"]
    monday, tuesday = data["days"]
    assert monday["on_time"] is True
    assert monday["overall_compliant"] is True
    assert tuesday["start_variance_minutes"] == 20
    assert tuesday["actual_start"] == "09:20"
    assert tuesday["meets_expected_hours"] is False
    assert data["summary"]["on_time_percentage"] == 50
    assert data["summary"]["full_compliance_percentage"] == 50
    assert data["summary"]["average_start_variance_minutes"] == 10


def test_exceptions_report(client, week_of_attendance, admin_headers):
    response = client.get("/api/v1/reports/exceptions", params=WEEK, headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["summary"] == {
        "expected_work_days": 5,
        "total_incomplete_records": 1,
        "total_missing_days": 2,
        "employees_with_issues": 1,
    }
    assert data["incomplete_records"][0]["work_date"] == "2025-11-26"
    assert [m["day_of_week"] for m in data["missing_days"]] == ["Thursday", "Friday"]


def test_exceptions_csv_export_is_audited(client, db, week_of_attendance, admin_headers):
    response = client.get("/api/v1/reports/exceptions.csv", params=WEEK, headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/csv")
    assert "exceptions_20251124_20251128.csv" in response.headers["content-disposition"]
    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert [r["issue_type"] for r in rows] == ["missing_clock_out", "absent", "absent"]
    assert rows[1]["record_id"] == ""

    audit = db.query(AuditLog).filter(AuditLog.action == "REPORT_EXPORT").one()
    assert audit.meta_json["report_type"] == "exceptions"
    assert audit.meta_json["row_count"] == 3


def test_employee_payroll(client, week_of_attendance):
    response = client.get(
        f"/api/v1/reports/payroll/{week_of_attendance.id}",
        params={**WEEK, "hourly_rate": 20},
        headers=auth_headers(week_of_attendance.id),
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_hours"] == 15.17
    assert data["payroll_amount"] == 303.4
    assert data["days_worked"] == 3
    assert data["late_count"] == 1
    assert [d["amount"] for d in data["daily_breakdown"]] == [170.0, 133.4, 0.0]


def test_payroll_rejects_negative_rate(client, week_of_attendance, admin_headers):
    response = client.get(
        "/api/v1/reports/payroll", params={**WEEK, "hourly_rate": -5}, headers=admin_headers
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.parametrize("rate", ["nan", "inf", "-inf"])
def test_payroll_rejects_non_finite_rate(client, week_of_attendance, admin_headers, rate):
    one = client.get(
        f"/api/v1/reports/payroll/{week_of_attendance.id}",
        params={**WEEK, "hourly_rate": rate},
        headers=admin_headers,
    )
    everyone = client.get(
        "/api/v1/reports/payroll", params={**WEEK, "hourly_rate": rate}, headers=admin_headers
    )

    assert one.status_code == status.HTTP_400_BAD_REQUEST
    assert everyone.status_code == status.HTTP_400_BAD_REQUEST
    assert "finite" in one.json()["detail"]


def test_payroll_all_employees(client, week_of_attendance, make_employee, admin_headers):
    make_employee(name="Absent All Week")

    response = client.get(
        "/api/v1/reports/payroll", params={**WEEK, "hourly_rate": 20}, headers=admin_headers
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    lines = {line["employee_name"]: line for line in data["employees"]}
    assert lines["Report Subject"]["attendance_rate"] == 60
    assert lines["Report Subject"]["missing_days"] == 2
    assert lines["Absent All Week"]["attendance_rate"] == 0
    assert lines["Absent All Week"]["payroll_amount"] == 0.0
    assert data["totals"]["employees"] == 2
    assert data["totals"]["total_payroll"] == 303.4
    assert data["totals"]["total_missing_days"] == 7
    assert data["totals"]["average_attendance_rate"] == 30


def test_payroll_csv_export(client, week_of_attendance, admin_headers):
    response = client.get(
        "/api/v1/reports/payroll.csv", params={**WEEK, "hourly_rate": 20}, headers=admin_headers
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert len(rows) == 1
    assert rows[0]["employee_code"] == "EMP500"
    assert rows[0]["payroll_amount"] == "303.4"


def test_reports_reject_inverted_range(client, week_of_attendance, admin_headers):
    response = client.get(
        "/api/v1/reports/exceptions",
        params={"start_date": "2025-11-28", "end_date": "2025-11-24"},
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
