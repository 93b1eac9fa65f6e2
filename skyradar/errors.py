class SkyRadarError(Exception):
    """Base exception for skyradar errors."""


class ConfigError(SkyRadarError):
    """Raised for configuration values that cannot be used."""


class CatalogError(SkyRadarError):
    """Raised for malformed landmark catalog data."""
