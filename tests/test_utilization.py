from datetime import datetime
from types import SimpleNamespace

from inkstudio.domain.scheduling.utilization_service import (
    UtilizationService,
    appointment_minutes,
    compute_master_utilization,
)

START = datetime(2024, 3, 4)
END = datetime(2024, 3, 4, 23, 59, 59, 999000)


def master(master_id=1, name="Anna", working_days=None):
    return SimpleNamespace(id=master_id, full_name=name, working_days=working_days or [])


def monday_nine_to_five():
    return [SimpleNamespace(weekday=1, start_time="09:00", end_time="17:00", is_day_off=False)]


def appointment(owner, starts_at, ends_at, status="APPROVED"):
    return SimpleNamespace(
        master_id=owner.id, master=owner, status=status, starts_at=starts_at, ends_at=ends_at
    )


def test_one_hour_booked_on_an_eight_hour_monday():
    anna = master(working_days=monday_nine_to_five())
    visit = appointment(anna, datetime(2024, 3, 4, 10), datetime(2024, 3, 4, 11))

    rows = compute_master_utilization([anna], {}, [visit], START, END)

    assert rows == [
        {
            "masterId": 1,
            "masterName": "Anna",
            "appointmentsCount": 1,
            "bookedMinutes": 60,
            "availableMinutes": 480,
            "utilization": 0.125,
        }
    ]


def test_only_approved_and_completed_appointments_are_booked():
    anna = master(working_days=monday_nine_to_five())
    visits = [
        appointment(anna, datetime(2024, 3, 4, 9), datetime(2024, 3, 4, 10), "PENDING"),
        appointment(anna, datetime(2024, 3, 4, 10), datetime(2024, 3, 4, 11), "CANCELLED"),
        appointment(anna, datetime(2024, 3, 4, 11), datetime(2024, 3, 4, 13), "COMPLETED"),
    ]

    row = compute_master_utilization([anna], {}, visits, START, END)[0]

    assert row["appointmentsCount"] == 1
    assert row["bookedMinutes"] == 120


def test_no_available_hours_means_zero_utilization():
    anna = master()
    visit = appointment(anna, datetime(2024, 3, 4, 10), datetime(2024, 3, 4, 11))

    row = compute_master_utilization([anna], {}, [visit], START, END)[0]

    assert row["availableMinutes"] == 0
    assert row["bookedMinutes"] == 60
    assert row["utilization"] == 0


def test_day_off_override_removes_the_template_hours():
    anna = master(working_days=monday_nine_to_five())
    day_off = SimpleNamespace(date=START.date(), start_time="", end_time="", is_day_off=True)

    row = compute_master_utilization([anna], {1: [day_off]}, [], START, END)[0]

    assert row["availableMinutes"] == 0
    assert row["utilization"] == 0


def test_master_known_only_from_appointments_still_gets_a_row():
    ghost = SimpleNamespace(id=7, full_name="Ghost")
    visit = appointment(ghost, datetime(2024, 3, 4, 10), datetime(2024, 3, 4, 10, 30))

    rows = compute_master_utilization([master()], {}, [visit], START, END)

    assert [r["masterId"] for r in rows] == [1, 7]
    assert rows[1]["masterName"] == "Ghost"
    assert rows[1]["bookedMinutes"] == 30


def test_appointment_minutes_rounds_and_never_goes_negative():
    owner = master()
    assert appointment_minutes(appointment(owner, datetime(2024, 1, 1, 10), datetime(2024, 1, 1, 10, 0, 40))) == 1
    assert appointment_minutes(appointment(owner, datetime(2024, 1, 1, 11), datetime(2024, 1, 1, 10))) == 0


def test_service_over_a_full_week(db_session, make_master, make_client, make_appointment):
    anna = make_master(weekly={1: ("09:00", "17:00"), 2: ("10:00", "14:00")})
    alice = make_client()
    make_appointment(alice, anna, datetime(2024, 3, 5, 10), datetime(2024, 3, 5, 12), status="APPROVED")

    rows = UtilizationService(db_session).master_utilization(
        datetime(2024, 3, 3), datetime(2024, 3, 9, 23, 59, 59, 999000)
    )

    assert len(rows) == 1
    assert rows[0]["availableMinutes"] == 480 + 240
    assert rows[0]["bookedMinutes"] == 120
    assert rows[0]["utilization"] == 120 / 720
