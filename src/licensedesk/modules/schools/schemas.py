"""
Driving School Schemas

Pydantic schemas for the school directory. Wire names are camelCase to match
the spreadsheet backend.
"""

from pydantic import EmailStr, Field, field_validator

from licensedesk.modules.shared import CamelModel


class DrivingSchool(CamelModel):
    """A registered driving school, as listed by the backend."""

    code: str
    name: str
    email: str = ""
    drive_folder_id: str = ""
    place: str = ""
    active: bool = True

    @property
    def display_name(self) -> str:
        """Label used in the school selection list."""
        return f"{self.name} – {self.place}" if self.place else self.name


class SchoolCreate(CamelModel):
    """Request body for the addSchool action."""

    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    drive_folder_id: str = Field(..., min_length=1)
    place: str = Field(..., min_length=1, max_length=200)

    @field_validator("code")
    @classmethod
    def uppercase_code(cls, value: str) -> str:
        return value.strip().upper()
