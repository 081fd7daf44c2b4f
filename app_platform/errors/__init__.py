"""HTTP error responses shared by the console apps."""

from .api import ERRORS, make_error, make_text_error, register_error_handlers

__all__ = ["ERRORS", "make_error", "make_text_error", "register_error_handlers"]
