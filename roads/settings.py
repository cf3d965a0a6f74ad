# roads/settings.py

import os

from dotenv import find_dotenv, load_dotenv

# ---------- ENV SETUP ----------
load_dotenv(find_dotenv(usecwd=True))

VERSION = "0.1.0"
USER_AGENT = f"roads/{VERSION}"

NOMINATIM_URL = os.getenv(
    "ROADS_NOMINATIM_URL", "https://nominatim.openstreetmap.org/search"
).rstrip("/")
OVERPASS_URL = os.getenv(
    "ROADS_OVERPASS_URL", "https://overpass-api.de/api/interpreter"
)

# Client-side guard only; Overpass gets its own [timeout:60] in the query
HTTP_TIMEOUT = float(os.getenv("ROADS_HTTP_TIMEOUT", "90"))

LOG_FILE = os.getenv("ROADS_LOG_FILE", "roads.log")
LOG_LEVEL = os.getenv("ROADS_LOG_LEVEL", "INFO").upper()
