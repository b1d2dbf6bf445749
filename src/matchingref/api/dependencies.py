from matchingref.config import Settings, get_settings


def get_api_settings() -> Settings:
    """Read settings per request so environment changes apply without a restart."""
    return get_settings()
