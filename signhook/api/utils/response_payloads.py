from typing import Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(status_code: int, message: str, data: Optional[dict] = None):
    """
    Create a standardized JSON response for successful requests.

    Args:
        status_code (int): HTTP status code to return (e.g. 200, 201).
        message (str): Human-readable description of the result.
        data (Optional[dict]): Optional payload data, omitted from the body when empty.

    Returns:
        JSONResponse: Contains:
            - success: true
            - message: same message passed
            - data: payload object (only when provided)
    """

    response_data = {
        "success": True,
        "message": message,
    }
    if data:
        response_data["data"] = data

    return JSONResponse(status_code=status_code, content=jsonable_encoder(response_data))


def error_response(
    *,
    status_code: int,
    message: str,
    error: Optional[str] = None,
) -> JSONResponse:
    """
    Create a standardized JSON response for failed requests.

    Args:
        status_code (int): HTTP status code representing the error (e.g. 400, 404, 500).
        message (str): High-level human-readable error description.
        error (Optional[str]): Machine-readable error code (e.g. "VALIDATION_ERROR").
            Omitted from the body when not given.

    Returns:
        JSONResponse: Standard error structure:
            {
                "success": false,
                "message": "<message>",
                "error": "<ERROR_CODE>"
            }
    """

    response_data = {
        "success": False,
        "message": message,
    }
    if error:
        response_data["error"] = error

    return JSONResponse(status_code=status_code, content=jsonable_encoder(response_data))
