"""
Application errors

Services raise these; the handlers registered in main.py turn them into
``{"message": ...}`` JSON responses with the matching status code.
"""
from typing import Dict, Optional


class FTPlayerError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class ValidationError(FTPlayerError):
    """Missing or malformed input"""
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(FTPlayerError):
    """Missing/invalid/expired token or wrong credentials"""
    status_code = 401
    default_message = "Not authenticated"

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class NotFoundError(FTPlayerError):
    """Resource is absent or belongs to another user"""
    status_code = 404
    default_message = "Not found"


class ConflictError(FTPlayerError):
    """Uniqueness violation (duplicate email, duplicate source name, ...)"""
    status_code = 400
    default_message = "Already exists"


class UnknownServerTypeError(FTPlayerError):
    """Registry lookup for an identifier outside the known server types"""
    status_code = 500

    def __init__(self, server_type):
        self.server_type = server_type
        super().__init__(f"Unknown server type: {server_type}")
