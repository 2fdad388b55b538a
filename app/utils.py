from pydantic import ValidationError


def format_validation_error(e: ValidationError) -> str:
    """Flatten pydantic errors into `field: message; field: message`"""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
    )
