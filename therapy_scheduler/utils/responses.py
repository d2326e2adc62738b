# therapy_scheduler/utils/responses.py

from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError


def format_error_response(exc, status_code=500):
    if isinstance(exc, RequestValidationError):
        # field-level errors, never the exception's str()
        detail = jsonable_encoder(exc.errors())
    else:
        detail = getattr(exc, "detail", None) or str(exc)
    return {
        "success": False,
        "error": {
            "type": exc.__class__.__name__,
            "detail": detail,
            "status_code": status_code
        }
    }
