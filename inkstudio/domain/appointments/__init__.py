"""Appointment domain - booking CRUD guarded against double-booking a master"""
