"""
Form State Containers

Owned, mutable state for each page of the intake UI. Views read the
attributes and call the explicit setters; async handlers perform the one
network call an action needs and record the outcome on the object.

Every failure leaves the entered data in place so the user can retry.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, fields

from pydantic import ValidationError

from licensedesk.client.api import IntakeClient
from licensedesk.client.cache import SessionCache
from licensedesk.client.errors import FormValidationError, IntakeClientError
from licensedesk.modules.applications import (
    DrivingLicenseApplication,
    first_missing_requirement,
    shows_back_side,
)
from licensedesk.modules.documents import DocumentType, LocalFile, Side, get_slot_config
from licensedesk.modules.schools import DrivingSchool, SchoolCreate

logger = logging.getLogger(__name__)

SCHOOL_CACHE_KEY = "driving_schools_cache"

UploadCallback = Callable[[str, str | None], None]
SchoolCodeSource = str | Callable[[], str]


def _first_validation_message(error: ValidationError) -> str:
    """Plain message of the first pydantic error (without the 'Value error, ' prefix)."""
    details = error.errors()
    if not details:
        return str(error)
    message = details[0].get("msg", str(error))
    return message.removeprefix("Value error, ")


@dataclass
class SubmissionOutcome:
    """What the user is told after pressing submit."""

    ok: bool
    message: str


# ============================================
# Upload widget
# ============================================


class UploadSlot:
    """
    State of one document upload widget.

    ``choose`` runs the gate, uploads, and reports the stored URL through
    ``on_complete(url, mime_type)``; ``remove`` clears the slot locally.

    ``institution_code`` may be a callable so the slot follows the school
    currently selected on its form.
    """

    def __init__(
        self,
        client: IntakeClient,
        document_type: DocumentType,
        institution_code: SchoolCodeSource,
        on_complete: UploadCallback | None = None,
        side: Side | None = None,
        current_url: str | None = None,
    ):
        self._client = client
        self._on_complete = on_complete
        self.document_type = DocumentType(document_type)
        self.side = side
        self._institution_code = institution_code
        self.uploading = False
        self.uploaded_url: str | None = current_url or None
        self.error: str | None = None

    @property
    def institution_code(self) -> str:
        if callable(self._institution_code):
            return self._institution_code()
        return self._institution_code

    @property
    def label(self) -> str:
        return get_slot_config(self.document_type).display_label(self.side)

    @property
    def accept(self) -> str:
        return get_slot_config(self.document_type).accept

    @property
    def size_label(self) -> str:
        return get_slot_config(self.document_type).size_label

    async def choose(self, file: LocalFile) -> str | None:
        """
        Upload a chosen file into this slot.

        Returns:
            The stored URL, or None if the upload failed (see ``error``)
        """
        if self.uploading:
            return None

        self.uploading = True
        self.error = None
        try:
            result = await self._client.upload_file(
                file,
                self.document_type,
                self.institution_code,
                self.side,
            )
        except IntakeClientError as e:
            self.error = e.message
            return None
        except Exception as e:
            logger.exception(f"Unexpected upload error: {e}")
            self.error = "Upload failed"
            return None
        finally:
            self.uploading = False

        self.uploaded_url = result.url
        if self._on_complete:
            self._on_complete(result.url, result.mime_type)
        return result.url

    def remove(self) -> None:
        """Forget the uploaded file. The stored object is not deleted."""
        self.uploaded_url = None
        if self._on_complete:
            self._on_complete("", None)


# ============================================
# Public application form
# ============================================


@dataclass
class ApplicationForm:
    """In-progress driving license application."""

    institution_code: str = ""

    name: str = ""
    father_husband_name: str = ""
    date_of_birth: str = ""
    age: str = ""
    place_of_birth: str = ""
    qualification: str = ""
    license_class: str = ""
    blood_group: str = ""
    gender: str = ""

    applicant_mobile: str = ""
    emergency_mobile: str = ""
    aadhar_no: str = ""
    email_id: str = ""

    identification_mark1: str = ""
    identification_mark2: str = ""

    house: str = ""
    place: str = ""
    village: str = ""
    taluk: str = ""
    post_office: str = ""
    pin_code: str = ""
    district: str = ""

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

    loading: bool = field(default=False, compare=False)

    def set(self, name: str, value: object) -> None:
        """Update one form field."""
        if name not in APPLICATION_FIELDS:
            raise KeyError(f"Unknown form field: {name}")
        setattr(self, name, value)

    def reset(self) -> None:
        """Clear every field back to its initial value."""
        for f in fields(self):
            if f.name != "loading":
                setattr(self, f.name, f.default)

    def validate(self) -> str | None:
        """First unmet submission rule, or None if the form can be submitted."""
        return first_missing_requirement(self)

    @property
    def shows_license_back(self) -> bool:
        return shows_back_side(self.license_url, self.license_file_type)

    @property
    def shows_aadhar_back(self) -> bool:
        return shows_back_side(self.aadhar_url, self.aadhar_file_type)

    def record_upload(
        self,
        document_type: DocumentType,
        side: Side | None,
        url: str,
        mime_type: str | None,
    ) -> None:
        """Store an upload result in the field for its slot."""
        document_type = DocumentType(document_type)
        back = side == Side.BACK

        if document_type == DocumentType.SIGNATURE:
            self.signature_url = url
        elif document_type == DocumentType.PHOTO:
            self.photo_url = url
        elif document_type == DocumentType.CERTIFICATE:
            self.sslc_url = url
        elif document_type == DocumentType.LICENSE:
            if back:
                self.license_back_url = url
            else:
                self.license_url = url
                self.license_file_type = mime_type or ""
        elif document_type == DocumentType.AADHAR:
            if back:
                self.aadhar_back_url = url
            else:
                self.aadhar_url = url
                self.aadhar_file_type = mime_type or ""

    def upload_slot(
        self,
        client: IntakeClient,
        document_type: DocumentType,
        side: Side | None = None,
    ) -> UploadSlot:
        """An upload widget bound to this form's selected school and fields."""

        def on_complete(url: str, mime_type: str | None) -> None:
            self.record_upload(document_type, side, url, mime_type)

        return UploadSlot(
            client,
            document_type,
            lambda: self.institution_code,
            on_complete=on_complete,
            side=side,
        )

    def to_application(self) -> DrivingLicenseApplication:
        """
        Build the submission record.

        Raises:
            FormValidationError: If a field cannot be converted
        """
        age = self.age.strip() if isinstance(self.age, str) else self.age
        if age in ("", None):
            age = None
        else:
            try:
                age = int(age)
            except (TypeError, ValueError) as e:
                raise FormValidationError("Age must be a number") from e

        data = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("loading", "age", "license_class", "gender")
        }
        try:
            return DrivingLicenseApplication(
                **data,
                age=age,
                license_class=self.license_class or None,
                gender=self.gender or None,
            )
        except ValidationError as e:
            raise FormValidationError(_first_validation_message(e)) from e

    async def submit(self, client: IntakeClient) -> SubmissionOutcome:
        """
        Validate and submit the application.

        A submit while another is pending is refused. On success the form
        is cleared; on failure every field is kept.
        """
        if self.loading:
            return SubmissionOutcome(ok=False, message="Submission already in progress")

        problem = self.validate()
        if problem:
            return SubmissionOutcome(ok=False, message=problem)

        self.loading = True
        try:
            await client.submit_application(self.to_application())
        except IntakeClientError as e:
            return SubmissionOutcome(ok=False, message=f"Submission failed: {e.message}")
        except Exception as e:
            logger.exception(f"Unexpected error submitting application: {e}")
            return SubmissionOutcome(ok=False, message="Submission failed: Unknown error")
        finally:
            self.loading = False

        self.reset()
        return SubmissionOutcome(ok=True, message="Application submitted successfully")


# Fields a view may set; loading is owned by submit()
APPLICATION_FIELDS = frozenset(f.name for f in fields(ApplicationForm)) - {"loading"}


# ============================================
# Admin school registration form
# ============================================


@dataclass
class SchoolRegistrationForm:
    """In-progress driving school registration on the admin page."""

    code: str = ""
    name: str = ""
    email: str = ""
    drive_folder_id: str = ""
    place: str = ""

    error: str = ""
    success: str = ""

    def set(self, name: str, value: str) -> None:
        """Update one form field. School codes are kept upper-case."""
        if name not in ("code", "name", "email", "drive_folder_id", "place"):
            raise KeyError(f"Unknown form field: {name}")
        if name == "code":
            value = value.upper()
        setattr(self, name, value)

    def clear(self) -> None:
        self.code = ""
        self.name = ""
        self.email = ""
        self.drive_folder_id = ""
        self.place = ""

    async def submit(self, client: IntakeClient) -> bool:
        """
        Register the school.

        Returns:
            True on success (form cleared, ``success`` set); False otherwise
            (form kept, ``error`` set)
        """
        self.error = ""
        self.success = ""

        try:
            school = SchoolCreate(
                code=self.code,
                name=self.name,
                email=self.email,
                drive_folder_id=self.drive_folder_id,
                place=self.place,
            )
            await client.add_school(school)
        except ValidationError as e:
            self.error = _first_validation_message(e)
            return False
        except IntakeClientError as e:
            self.error = e.message or "Failed to add school"
            return False
        except Exception as e:
            logger.exception(f"Unexpected error adding school: {e}")
            self.error = "Failed to add school"
            return False

        self.success = "School added successfully!"
        self.clear()
        return True


# ============================================
# School directory
# ============================================


class SchoolDirectory:
    """
    The school list shown in the form's selection control.

    Reads from the session cache when present; otherwise fetches once and
    fills the cache. A failed fetch leaves the list empty.
    """

    def __init__(self, client: IntakeClient, cache: SessionCache | None = None):
        self._client = client
        self._cache = cache
        self.schools: list[DrivingSchool] = []
        self.loading = True

    def _read_cache(self) -> list[DrivingSchool] | None:
        if self._cache is None:
            return None
        try:
            cached = self._cache.get_json(SCHOOL_CACHE_KEY)
            if cached is None:
                return None
            return [DrivingSchool.model_validate(item) for item in cached]
        except (ValueError, TypeError) as e:
            logger.warning(f"Discarding unreadable school cache: {e}")
            self._cache.remove_item(SCHOOL_CACHE_KEY)
            return None

    async def load(self) -> None:
        """Populate ``schools``. Never raises; ``loading`` is always cleared."""
        self.loading = True
        try:
            cached = self._read_cache()
            if cached is not None:
                self.schools = cached
                return

            schools = await self._client.fetch_schools()
            self.schools = schools
            if self._cache is not None:
                self._cache.set_json(SCHOOL_CACHE_KEY, [s.to_wire() for s in schools])
        except IntakeClientError as e:
            logger.warning(f"Could not load driving schools: {e.message}")
        except Exception as e:
            logger.exception(f"Unexpected error loading driving schools: {e}")
        finally:
            self.loading = False

    @property
    def placeholder(self) -> str:
        return "Loading driving schools..." if self.loading else "Select driving school"

    def options(self) -> list[tuple[str, str]]:
        """(code, label) pairs for the selection control."""
        return [(school.code, school.display_name) for school in self.schools]

    def find(self, code: str) -> DrivingSchool | None:
        return next((school for school in self.schools if school.code == code), None)
