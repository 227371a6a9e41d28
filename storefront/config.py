# storefront/config.py
from dotenv import load_dotenv
import os

load_dotenv()

# API Keys
GOOGLE_VISION_API_KEY = os.getenv("GOOGLE_VISION_API_KEY")
GOOGLE_PLACES_API_KEY = os.getenv("GOOGLE_PLACES_API_KEY")
SERPER_API_KEY = os.getenv("SERPER_API_KEY")

# Runtime parameters
BATCH_SIZE = 10
CONCURRENCY = 50
LOG_LEVEL = "DEBUG"
MAX_BUSINESS_NAMES = 3

# URLs
VISION_URL = "https://vision.googleapis.com/v1/images:annotate"
PLACES_TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
PLACES_DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"
SERPER_URL = "https://google.serper.dev/search"

# Image limits
MAX_IMAGE_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png", ".webp")

# File names
INPUT_CSV = "images.csv"
OUTPUT_CSV = "valuations.csv"
