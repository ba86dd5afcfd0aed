"""
Configuration settings for the Box filesystem adapter.
"""
import os
from pathlib import Path

# Box API endpoints
BOX_API_URL = os.getenv("BOX_API_URL", "https://api.box.com/2.0")
BOX_UPLOAD_URL = os.getenv("BOX_UPLOAD_URL", "https://upload.box.com/api/2.0")
BOX_ACCESS_TOKEN = os.getenv("BOX_ACCESS_TOKEN")

# Box addresses the top level of an account as folder "0"
DEFAULT_ROOT_FOLDER_ID = "0"
PATH_SEPARATOR = "/"

# Request settings
MAX_RETRIES = 3
RETRY_BACKOFF_FACTOR = 2  # For exponential backoff
REQUEST_TIMEOUT = 30  # Seconds

# Listing settings (a single page is fetched per folder)
LIST_ITEMS_LIMIT = 1000
ITEM_FIELDS = "id,name,type,size,modified_at"

# Logging
LOG_DIR = Path(os.getenv("BOXFS_LOG_DIR", Path.home() / ".boxfs" / "logs"))
LOG_FILE = LOG_DIR / "boxfs.log"
