"""Master domain - staff records, weekly schedule and per-date availability"""
