# triveast/version.py

SERVICE_NAME = "triveast-api"
SERVICE_VERSION = "0.1.0"


def service_version_payload() -> dict:
    """Used by /version endpoints."""
    return {
        "service": f"{SERVICE_NAME}:{SERVICE_VERSION}",
        "version": SERVICE_VERSION,
    }
