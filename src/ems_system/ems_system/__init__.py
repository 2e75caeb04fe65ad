"""EMS core package.

Attendance, leave and payroll ledgers organized by feature module, with a thin
Flask controller layer on top of service/repository layers.
"""
