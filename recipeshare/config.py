import os

# ================================
# SUPABASE
# ================================
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")

# ================================
# UPLOADS
# ================================
# Per-file cap for image_data / doc_data (25 MiB)
DEFAULT_MAX_UPLOAD_BYTES = 25 * 1024 * 1024


def max_upload_bytes() -> int:
    """
    Per-file upload limit in bytes. Read on every call so tests and
    deployments can override MAX_UPLOAD_BYTES without re-importing.
    """
    raw = os.getenv("MAX_UPLOAD_BYTES")
    if not raw:
        return DEFAULT_MAX_UPLOAD_BYTES
    return int(raw)


# ================================
# SERVER
# ================================
PORT = int(os.getenv("PORT", 3002))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s:%(message)s"
