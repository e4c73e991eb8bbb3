"""Genba Attendance package.

Feature modules (workers, sites, attendance, store, reports, seed, narrative)
behind a thin Flask controller layer, wired together in `container.py`.
"""
