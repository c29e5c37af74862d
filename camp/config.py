from dotenv import load_dotenv
import os

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings:
    def __init__(self) -> None:
        self.STORE_BACKEND = os.getenv("STORE_BACKEND", "memory").lower()
        self.MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
        self.MONGODB_DB = os.getenv("MONGODB_DB", "camp_commander")
        self.MONGODB_TIMEOUT_MS = int(os.getenv("MONGODB_TIMEOUT_MS", "2000"))
        self.SEED_DATA = _flag("SEED_DATA")
        self.DEFAULT_USERNAME = os.getenv("DEFAULT_USERNAME", "camp_director")
        self.DEFAULT_ROLE = os.getenv("DEFAULT_ROLE", "director")
        self.CORS_ORIGINS = [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://127.0.0.1:5500,http://localhost:5500,http://localhost:3000",
            ).split(",")
            if o.strip()
        ]
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_TO_FILE = _flag("LOG_TO_FILE")
        self.LOG_FILE = os.getenv("LOG_FILE", "logs/camp.log")
        self.PORT = int(os.getenv("PORT", "3000"))

settings = Settings()
