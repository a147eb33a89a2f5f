"""
Exceptions for pagefill.

Every failure of the pipeline surfaces as a DocumentError subclass. None of
them are retried internally: a partially paginated or partially merged
document is never returned.
"""

from typing import Optional, Any, Dict
import traceback


def _format_traceback(exception: BaseException) -> Optional[str]:
    if exception.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))


class DocumentError(Exception):
    """
    Base exception for pagefill errors.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None,
                 error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize document error.

        Args:
            message: Error message
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.error_code = error_code
        self.details = details or {}

    @property
    def traceback(self) -> Optional[str]:
        """Formatted traceback of the raise, or None while the error has not been raised."""
        return _format_traceback(self)

    def get_error_info(self) -> Dict[str, Any]:
        """
        Get error information.

        Returns:
            Dictionary with error information
        """
        return {
            'message': self.message,
            'cause': str(self.cause) if self.cause else None,
            'error_code': self.error_code,
            'details': self.details,
            'traceback': self.traceback
        }

    def __str__(self) -> str:
        """String representation of exception."""
        return f"{self.__class__.__name__}: {self.message}"


class ConfigurationError(DocumentError):
    """
    Invalid pagination configuration (non-positive capacity, negative units,
    unknown option names).
    """

    def __init__(self, message: str, option_name: Optional[str] = None,
                 option_value: Optional[Any] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration error.

        Args:
            message: Error message
            option_name: Name of the offending option
            option_value: Value of the offending option
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message, cause, error_code, details)
        self.option_name = option_name
        self.option_value = option_value

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            'option_name': self.option_name,
            'option_value': self.option_value
        })
        return info


class MalformedBlockError(DocumentError):
    """
    A block that cannot be paginated: unknown kind, missing fields, or a
    group that is not contiguous in the input order.
    """

    def __init__(self, message: str, block_index: Optional[int] = None,
                 block: Optional[Any] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize malformed block error.

        Args:
            message: Error message
            block_index: Position of the offending block in the input sequence
            block: The offending block
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message, cause, error_code, details)
        self.block_index = block_index
        self.block = block

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            'block_index': self.block_index,
            'block': repr(self.block) if self.block is not None else None
        })
        return info


class ParsingError(DocumentError):
    """
    Exception for spreadsheet parsing errors.
    """

    def __init__(self, message: str, file_path: Optional[str] = None,
                 sheet_name: Optional[str] = None, row_number: Optional[int] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize parsing error.

        Args:
            message: Error message
            file_path: File path where error occurred
            sheet_name: Worksheet where error occurred
            row_number: Row number where error occurred
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message, cause, error_code, details)
        self.file_path = file_path
        self.sheet_name = sheet_name
        self.row_number = row_number

    def get_error_info(self) -> Dict[str, Any]:
        """
        Get error information.

        Returns:
            Dictionary with error information
        """
        info = super().get_error_info()
        info.update({
            'file_path': self.file_path,
            'sheet_name': self.sheet_name,
            'row_number': self.row_number
        })
        return info


class RenderError(DocumentError):
    """
    Exception for rendering errors.
    """

    def __init__(self, message: str, render_type: Optional[str] = None,
                 output_path: Optional[str] = None, page_number: Optional[int] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize render error.

        Args:
            message: Error message
            render_type: Type of rendering causing error ('pdf', 'html')
            output_path: Output path where error occurred
            page_number: Page being rendered when the error occurred
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message, cause, error_code, details)
        self.render_type = render_type
        self.output_path = output_path
        self.page_number = page_number

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            'render_type': self.render_type,
            'output_path': self.output_path,
            'page_number': self.page_number
        })
        return info


class AssemblyError(DocumentError):
    """
    Exception raised when the attachment or generated document cannot be
    read or the merged document cannot be written.
    """

    def __init__(self, message: str, source: Optional[str] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, cause, error_code, details)
        self.source = source

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info['source'] = self.source
        return info


def handle_exception(exception: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Handle exception and return error information.

    Args:
        exception: Exception to handle
        context: Additional context

    Returns:
        Dictionary with error information
    """
    if isinstance(exception, DocumentError):
        error_info = exception.get_error_info()
    else:
        error_info = {
            'message': str(exception),
            'error_code': None,
            'details': {},
            'cause': None,
            'traceback': _format_traceback(exception)
        }

    if context:
        error_info['context'] = context

    return error_info

