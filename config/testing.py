SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

FACE_CONFIDENCE_THRESHOLD = 80

SEED_DEMO_DATA = False

MAX_UPLOAD_MB = 10
