# config.py
import os
from pathlib import Path

# ============================================================
# DATASET LOCATION
# ============================================================

# Directory that holds this file (backend/)
BASE_DIR = Path(__file__).resolve().parent

DATA_FILE_NAME = "environmental-samples.json"

# Explicit override. Read at load time (see dataset.resolve_data_file)
DATA_FILE_ENV = "DATA_FILE"

# ============================================================
# SERVER
# ============================================================

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))

# Frontend dev server by default; comma separated list to override
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

# ============================================================
# RATE LIMIT (per client, fixed window)
# ============================================================

RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(15 * 60)))
RATE_LIMIT_MAX_REQUESTS = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "200"))
