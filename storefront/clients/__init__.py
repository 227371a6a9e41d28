"""Client singletons for external API interactions."""
from storefront.clients.vision_client import VisionClient
from storefront.clients.places_client import PlacesClient
from storefront.clients.serper_client import SerperClient

__all__ = ["VisionClient", "PlacesClient", "SerperClient"]
