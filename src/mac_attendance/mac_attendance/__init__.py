"""MAC Attendance package.

Attendance is derived from Bluetooth MAC addresses reported by a scanner.
Feature modules (students, attendance) sit behind a thin Flask controller
layer with service/repository layers underneath.
"""
