from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError


def _sqlstate(e: IntegrityError):
    orig = getattr(e, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def integrity_to_http(e: IntegrityError, conflict_detail: str) -> HTTPException:
    """Maps a database integrity error to the HTTP status the client should see."""
    code = _sqlstate(e)
    detail = str(getattr(getattr(e, "orig", None), "diag", None) or getattr(e, "orig", None) or e)

    if code == "23505":  # unique_violation
        return HTTPException(status_code=409, detail=conflict_detail)
    if code == "23502":  # not_null_violation
        return HTTPException(status_code=400, detail="Missing required field (NOT NULL violation)")
    if code == "23503":  # foreign_key_violation
        return HTTPException(status_code=422, detail="Related entity not found (FK violation)")
    return HTTPException(status_code=500, detail=f"Integrity error: {detail}")


def value_error_to_http(e: ValueError) -> HTTPException:
    msg = str(e)
    if "not found" in msg:
        return HTTPException(status_code=404, detail=msg)
    if "already exists" in msg:
        return HTTPException(status_code=409, detail=msg)
    return HTTPException(status_code=400, detail=msg)
