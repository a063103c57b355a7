"""Timesheet System package.

This package is organized by feature modules (timesheets, reports) around a
pure time-accounting engine, with a thin Flask controller layer and
service/repository layers on top.
"""
