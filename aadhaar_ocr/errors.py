class AadhaarOCRError(Exception):
    """Base class for errors raised by the extraction pipeline."""


class InvalidInputError(AadhaarOCRError, ValueError):
    """The request is missing data required before any OCR work can start."""


class OcrEngineError(AadhaarOCRError):
    """The OCR engine could not decode or recognize an image."""


class CleanupServiceError(AadhaarOCRError):
    """The external cleanup service failed or returned nothing usable.

    Only raised inside the cleanup client, which always recovers from it
    by falling back to local cleaning.
    """
