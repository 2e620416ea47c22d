SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "fellowship_test",
}

STORE_BACKEND = "memory"

PUBLIC_BASE_URL = "http://testserver"

HOST = "127.0.0.1"
PORT = 5000

DEBUG = False
TESTING = True
ENVIRONMENT = "testing"

AUTO_INIT_DB = False
