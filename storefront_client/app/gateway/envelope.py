"""
Result envelope returned by every gateway operation.
"""

from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_SUCCESS_MESSAGE = "Success"
DEFAULT_ERROR_MESSAGE = "An error occurred"


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to text, None when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiResult(BaseModel):
    """Uniform success/failure wrapper.

    ``success=True`` carries the response body in ``data`` and no ``error``.
    ``success=False`` carries no ``data``; ``error`` holds the server error
    body when there is one, otherwise the exception itself.
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True, frozen=True)

    success: bool
    data: Any = None
    message: str
    error: Any = None
    status_code: Optional[int] = Field(default=None, alias="statusCode")

    @model_validator(mode="after")
    def check_outcome(self) -> "ApiResult":
        if self.success and self.error is not None:
            raise ValueError("a successful result cannot carry an error")
        if not self.success and self.data is not None:
            raise ValueError("a failed result cannot carry data")
        return self

    @classmethod
    def ok(cls, data: Any, message: str = DEFAULT_SUCCESS_MESSAGE) -> "ApiResult":
        return cls(success=True, data=data, message=message, error=None)

    @classmethod
    def failure(cls, exc: BaseException, default_message: str = DEFAULT_ERROR_MESSAGE) -> "ApiResult":
        """Build a failure envelope from a transport exception.

        Message priority: server ``message`` field, then the first line of the
        exception text, then ``default_message``.
        """
        response = exc.response if isinstance(exc, httpx.HTTPStatusError) else None
        body = decode_body(response) if response is not None else None

        server_message = body.get("message") if isinstance(body, dict) else None
        lines = str(exc).splitlines()
        message = server_message or (lines[0] if lines else "") or default_message

        return cls(
            success=False,
            data=None,
            message=str(message),
            error=body if body is not None else exc,
            status_code=response.status_code if response is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with camelCase keys; ``statusCode`` only on failure."""
        exclude = {"status_code"} if self.success else set()
        return self.model_dump(by_alias=True, exclude=exclude)

    def __bool__(self) -> bool:
        return self.success
