"""Workforce Records package.

Organized by feature modules (users, attendance, timeoff, payroll, ...) with a
thin Flask controller layer over service/repository layers that share one
injected record repository.
"""
