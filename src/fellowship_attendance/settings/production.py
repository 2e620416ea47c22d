import os

from . import public_base_url_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "fellowship_db"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
}

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

PUBLIC_BASE_URL = public_base_url_from_env()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

DEBUG = False
ENVIRONMENT = "production"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
