# server_timing/errors/config_error.py
from typing import List
from pydantic import ValidationError


class ConfigurationError(RuntimeError):
    """
    Raised when server timing or application configuration is invalid.
    """

    pass


def config_error_from_validation(
    exc: ValidationError, title: str = "Configuration validation failed"
) -> ConfigurationError:
    """Convert Pydantic errors to ConfigurationError with one line per field."""
    errors: List[str] = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error["loc"])
        errors.append(f"{field}: {error['msg']}")

    return ConfigurationError(f"{title}:\n" + "\n".join(f"  - {e}" for e in errors))


__all__ = ["ConfigurationError", "config_error_from_validation"]
