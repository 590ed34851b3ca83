"""Time Tracker package.

Employees submit daily project time entries; HR reads monthly aggregated
reports. Organized by feature modules (employees, projects, reports, mail)
with a thin Flask controller layer over service/repository layers.
"""
