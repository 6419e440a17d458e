import os

# ✅ Database (remote store)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./jobtracker.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Security (identity provider tokens)
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# ✅ Local (demo) store
LOCAL_STORAGE_DIR = os.getenv("LOCAL_STORAGE_DIR", ".jobtracker")
LOCAL_STORAGE_QUOTA_BYTES = int(os.getenv("LOCAL_STORAGE_QUOTA_BYTES", str(5 * 1024 * 1024)))

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")
