"""Caregiver shift tracker - visit scheduling, check-in/check-out and care checklists"""

__version__ = "1.0.0"
