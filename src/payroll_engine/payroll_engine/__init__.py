"""Payroll Engine package.

Organized by feature modules (employees, attendance, leave, payroll) with a
thin Flask controller layer over service/repository layers, plus a Celery
task for the nightly attendance closure.
"""
