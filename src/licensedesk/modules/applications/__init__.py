"""
Applications Module

The driving license application record and the rules that decide when it
may be submitted. Applications are produced here and stored by the
spreadsheet backend; there is no edit or resubmit flow.
"""

from .rules import first_missing_requirement, required_document_fields, shows_back_side
from .schemas import DrivingLicenseApplication, Gender, LicenseClass

__all__ = [
    "DrivingLicenseApplication",
    "Gender",
    "LicenseClass",
    "first_missing_requirement",
    "required_document_fields",
    "shows_back_side",
]
