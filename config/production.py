import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

FACE_CONFIDENCE_THRESHOLD = float(os.getenv("FACE_CONFIDENCE_THRESHOLD", "80"))

SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "0")))

MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))
