"""
LicenseDesk - driving license application intake.

Server side: a FastAPI proxy (``licensedesk.main``) that relays form actions to
the spreadsheet script endpoint and uploads documents to the media host.

Client side: ``licensedesk.client`` holds the intake client, form state
containers, the upload gate and the school directory cache.
"""

__version__ = "0.1.0"
