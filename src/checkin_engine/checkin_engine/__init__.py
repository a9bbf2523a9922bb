"""Attendance check-in engine.

This package is organized by feature modules (geo, locations, checkin,
reminders, ...) with a thin Flask controller layer over service and
repository layers.
"""
