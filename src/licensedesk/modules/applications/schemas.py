"""
Driving License Application Schemas

Pydantic schema for the flat application record sent by submitApplication.
"""

import enum

from pydantic import Field, model_validator

from licensedesk.modules.applications.rules import first_missing_requirement
from licensedesk.modules.shared import CamelModel


class LicenseClass(str, enum.Enum):
    """Vehicle class applied for."""

    MOTORCYCLE = "M/C"
    LMV = "LMV"
    MOTORCYCLE_AND_LMV = "M/C,LMV"
    HEAVY = "Heavy"


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class DrivingLicenseApplication(CamelModel):
    """
    Request body for the submitApplication action.

    Applicant identity, contact and address fields plus references to the
    uploaded documents. Built once from a completed form and sent atomically.
    """

    institution_code: str

    # Identity
    name: str
    father_husband_name: str
    date_of_birth: str
    age: int | None = None
    place_of_birth: str = ""
    qualification: str = ""
    license_class: LicenseClass | None = Field(None, alias="class")
    blood_group: str = ""
    gender: Gender | None = None

    # Contact
    applicant_mobile: str = ""
    emergency_mobile: str = ""
    aadhar_no: str = ""
    email_id: str = ""

    identification_mark1: str = ""
    identification_mark2: str = ""

    # Address
    house: str = ""
    place: str = ""
    village: str = ""
    taluk: str = ""
    post_office: str = ""
    pin_code: str = ""
    district: str = ""

    # Documents
    signature_url: str = ""
    photo_url: str = ""
    sslc_url: str = ""
    license_url: str = ""
    license_back_url: str = ""
    aadhar_url: str = ""
    aadhar_back_url: str = ""
    license_file_type: str = ""
    aadhar_file_type: str = ""

    has_license: bool = False

    @model_validator(mode="after")
    def validate_application(self) -> "DrivingLicenseApplication":
        """Validate required fields and the conditional document set."""
        problem = first_missing_requirement(self)
        if problem:
            raise ValueError(problem)
        return self
