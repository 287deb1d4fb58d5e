import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Minimum face-match confidence (0-100, inclusive) accepted for marking
FACE_CONFIDENCE_THRESHOLD = float(os.getenv("FACE_CONFIDENCE_THRESHOLD", "80"))

# Load the demo admin/teacher accounts and sample roster on startup
SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "1")))

MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))
