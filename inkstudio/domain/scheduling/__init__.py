"""
Scheduling Domain

Working-hours resolution and capacity calculations for masters.

MODULES:
- repository.py           # Weekly template, per-date overrides, booked appointments
- availability_service.py # Which hours a master works on a given date
- utilization_service.py  # Booked vs. available minutes per master over a range

RESOLUTION ORDER for one master and one calendar date:
1. MasterDayAvailability row for that date (a day-off override also wins)
2. MasterWorkingDay row for the weekday (0 = Sunday ... 6 = Saturday)
3. Nothing configured: day off, zero minutes

Working hours are not enforced when an appointment is created; only the
overlap check in the appointments domain runs server-side.
"""
