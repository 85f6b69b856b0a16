"""Custom exceptions for the PDF converter."""


class ConverterError(Exception):
    """Base exception for converter errors."""

    pass


class ExtractionError(ConverterError):
    """Raised when text cannot be extracted from a document."""

    pass


class EmptyInputError(ExtractionError):
    """Raised when the document buffer is empty or missing."""

    pass


class MultipartError(ConverterError):
    """Base exception for multipart/form-data parsing errors."""

    pass


class UnsupportedContentTypeError(MultipartError):
    """Raised when the request is not multipart/form-data."""

    pass


class MissingBoundaryError(MultipartError):
    """Raised when the content type declares no boundary."""

    pass


class MalformedPayloadError(MultipartError):
    """Raised when the opening boundary cannot be found in the body."""

    pass


class FileNotProvidedError(MultipartError):
    """Raised when no file part is present in the body."""

    pass


class UploadValidationError(MultipartError):
    """Base exception for rejected file attachments."""

    pass


class FileTooLargeError(UploadValidationError):
    """Raised when the uploaded file exceeds the size cap."""

    pass


class InvalidExtensionError(UploadValidationError):
    """Raised when the uploaded file name lacks the required extension."""

    pass


class InvalidMimeTypeError(UploadValidationError):
    """Raised when the declared MIME type is not acceptable."""

    pass


class BodyError(ConverterError):
    """Base exception for request body collection errors."""

    pass


class BodyTooLargeError(BodyError):
    """Raised when the request body grows past the size cap."""

    pass


class RequestAbortedError(BodyError):
    """Raised when the client disconnects before the body is complete."""

    pass


class TransportError(BodyError):
    """Raised on any other failure while reading the request body."""

    pass
