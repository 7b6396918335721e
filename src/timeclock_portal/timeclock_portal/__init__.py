"""Time Portal package.

Organized by feature modules (clock, audit, employees, reporting, ...) with a
thin Flask controller layer on top of service/repository layers.
"""
