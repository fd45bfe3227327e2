"""
Application Configuration

Settings are read from the environment; a local .env file is loaded first.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Database Configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./moneyball.db")

# Gemini commentary
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
COMMENTARY_TIMEOUT_SECONDS = float(os.getenv("COMMENTARY_TIMEOUT_SECONDS", "15"))
COMMENTARY_MAX_RETRIES = int(os.getenv("COMMENTARY_MAX_RETRIES", "2"))

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Timestamps and log records are rendered in this timezone
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")
