"""DigitalOcean provider client."""

from zoneshift.core.digitalocean.client import DEFAULT_API_URL, DigitalOceanClient

__all__ = ["DEFAULT_API_URL", "DigitalOceanClient"]
