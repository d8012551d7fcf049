"""
Schools Module

Driving schools are created through the admin addSchool action and listed
by getSchools to populate the public form's selection list. Records live in
the spreadsheet backend; there is no update or delete path.
"""

from .schemas import DrivingSchool, SchoolCreate

__all__ = ["DrivingSchool", "SchoolCreate"]
