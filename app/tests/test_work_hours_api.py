"""
Tests for work-hours endpoints
"""
import pytest
from fastapi import status

from app.tests.conftest import auth_headers


@pytest.fixture
def worked_week(client, make_employee, admin_headers):
    """Employee with 8.5h on Mon 2025-11-24, 7h on Tue 2025-11-25 and an open record that evening"""
    employee = make_employee(name="Weekly Worker")
    for clock_in, clock_out in [
        ("2025-11-24T09:00:00", "2025-11-24T17:30:00"),
        ("2025-11-25T09:00:00", "2025-11-25T16:00:00"),
        ("2025-11-25T18:00:00", None),
    ]:
        client.post(
            "/api/v1/attendance/manual",
            json={"employee_id": employee.id, "clock_in": clock_in, "clock_out": clock_out},
            headers=admin_headers,
        )
    return employee


def test_daily_hours(client, worked_week):
    response = client.get(
        f"/api/v1/work-hours/daily/{worked_week.id}",
        params={"date": "2025-11-25"},
        headers=auth_headers(worked_week.id),
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["work_date"] == "2025-11-25"
    assert data["total_hours"] == 7.0
    assert data["total_records"] == 2
    assert data["completed_records"] == 1
    assert data["incomplete_records"] == 1


def test_weekly_hours_defaults_to_seven_days(client, worked_week, admin_headers):
    response = client.get(
        f"/api/v1/work-hours/weekly/{worked_week.id}",
        params={"start_date": "2025-11-24"},
        headers=admin_headers,
    )

    data = response.json()
    assert data["end_date"] == "2025-11-30"
    assert data["total_hours"] == 15.5
    assert data["days_worked"] == 2
    assert data["avg_hours_per_day"] == 7.75
    assert data["expected_total_hours"] == 16.0
    assert data["hours_variance"] == -0.5
    assert [d["work_date"] for d in data["daily_breakdown"]] == ["2025-11-24", "2025-11-25"]


def test_weekly_hours_inverted_range(client, worked_week, admin_headers):
    response = client.get(
        f"/api/v1/work-hours/weekly/{worked_week.id}",
        params={"start_date": "2025-11-24", "end_date": "2025-11-20"},
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_monthly_hours_week_buckets(client, worked_week, admin_headers):
    response = client.get(
        f"/api/v1/work-hours/monthly/{worked_week.id}",
        params={"year": 2025, "month": 11},
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["month_name"] == "November"
    assert data["start_date"] == "2025-11-01"
    assert data["end_date"] == "2025-11-30"
    assert data["weekly_summary"] == [{"week": "Week 4", "days": 2, "hours": 15.5}]


def test_monthly_hours_invalid_month(client, worked_week, admin_headers):
    response = client.get(
        f"/api/v1/work-hours/monthly/{worked_week.id}",
        params={"year": 2025, "month": 13},
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_window_dispatches_by_granularity(client, worked_week, admin_headers):
    monthly = client.get(
        f"/api/v1/work-hours/window/{worked_week.id}",
        params={"start_date": "2025-11-10", "granularity": "monthly"},
        headers=admin_headers,
    )
    unknown = client.get(
        f"/api/v1/work-hours/window/{worked_week.id}",
        params={"start_date": "2025-11-10", "granularity": "yearly"},
        headers=admin_headers,
    )

    assert monthly.status_code == status.HTTP_200_OK
    assert monthly.json()["month"] == 11
    assert monthly.json()["total_hours"] == 15.5
    assert unknown.status_code == status.HTTP_400_BAD_REQUEST


def test_summary_lists_active_employees(client, worked_week, make_employee, admin_headers):
    idle = make_employee(name="Idle Worker")
    make_employee(name="Former Worker", active=False)

    response = client.get(
        "/api/v1/work-hours/summary",
        params={"start_date": "2025-11-24", "end_date": "2025-11-30", "period_type": "week"},
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["period_type"] == "week"
    rows = {row["employee_id"]: row for row in data["employees"]}
    assert set(rows) == {worked_week.id, idle.id}
    assert rows[worked_week.id]["compliance_percentage"] == 97
    assert rows[worked_week.id]["incomplete_records"] == 1
    assert rows[idle.id]["total_hours"] == 0.0
    assert rows[idle.id]["compliance_percentage"] == 0


def test_summary_requires_admin(client, worked_week):
    response = client.get(
        "/api/v1/work-hours/summary",
        params={"start_date": "2025-11-24", "end_date": "2025-11-30"},
        headers=auth_headers(worked_week.id),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_other_employees_hours_forbidden(client, worked_week, make_employee):
    other = make_employee()

    response = client.get(
        f"/api/v1/work-hours/daily/{worked_week.id}",
        params={"date": "2025-11-25"},
        headers=auth_headers(other.id),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
