import os
import logging
from dotenv import load_dotenv

load_dotenv()

# Configure logging
DEBUG_LOGGING = os.getenv("DEBUG_LOGGING", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = logging.DEBUG if DEBUG_LOGGING else logging.INFO

# Configure the logger
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("yt-search")

# YouTube endpoints
YOUTUBE_BASE_URL = os.getenv("YOUTUBE_BASE_URL", "https://www.youtube.com").rstrip("/")
THUMBNAIL_BASE_URL = os.getenv("THUMBNAIL_BASE_URL", "https://i.ytimg.com").rstrip("/")

# HTTP client configuration
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/139.0.0.0 Safari/537.36",
)
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

# Retry policy for callers of the search engine
SEARCH_MAX_ATTEMPTS = int(os.getenv("SEARCH_MAX_ATTEMPTS", "3"))
SEARCH_RETRY_DELAY = float(os.getenv("SEARCH_RETRY_DELAY", "1.0"))

# Innertube client used for continuation requests
INNERTUBE_CLIENT_NAME = os.getenv("INNERTUBE_CLIENT_NAME", "WEB")
INNERTUBE_CLIENT_VERSION = os.getenv("INNERTUBE_CLIENT_VERSION", "2.20240624.00.00")
INNERTUBE_API_KEY = os.getenv("INNERTUBE_API_KEY", "")
SEARCH_LANGUAGE = os.getenv("SEARCH_LANGUAGE", "en")
SEARCH_REGION = os.getenv("SEARCH_REGION", "US")

# Item sections nested deeper than this are skipped
MAX_SECTION_DEPTH = int(os.getenv("MAX_SECTION_DEPTH", "64"))
