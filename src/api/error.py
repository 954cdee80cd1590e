from typing import Dict, Optional

from fastapi import status
from libs.result import Error


class ClientError(Exception):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.headers = headers
        super().__init__(base_error.message)


class AuthenticationError(ClientError):
    """401 carrying the bearer challenge"""

    def __init__(self, base_error: Error):
        super().__init__(
            base_error,
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)
