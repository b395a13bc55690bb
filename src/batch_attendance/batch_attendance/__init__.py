"""Batch attendance package.

Feature modules (attendance, reports, students) with a thin Flask
controller layer over service/repository layers.
"""
