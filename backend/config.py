"""Configuration management for the job-intake chat backend."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Server Configuration
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"

# CORS Configuration
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:3001"
).split(",")

# Model Configuration
CHAT_MODEL = os.getenv("CHAT_MODEL", "llama-3.3-70b-versatile")
MAX_TOKENS = int(os.getenv("MAX_TOKENS", "500"))
SUMMARY_MAX_TOKENS = int(os.getenv("SUMMARY_MAX_TOKENS", "800"))
TEMPERATURE = float(os.getenv("TEMPERATURE", "0.7"))

# System prompt (relative paths resolve against the project root, not the working directory)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SYSTEM_SPEC_PATH = PROJECT_ROOT / os.getenv("SYSTEM_SPEC_PATH", "spec.txt")
DEFAULT_SYSTEM_SPEC = "You are a helpful AI assistant."

# History Configuration
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "10"))  # turns sent with each chat request
HISTORY_CEILING = int(os.getenv("HISTORY_CEILING", "1000"))  # hard cap for full-history reads

# Supabase tables
HISTORY_TABLE = os.getenv("HISTORY_TABLE", "chat_history")
EXPORT_TABLE = os.getenv("EXPORT_TABLE", "job_exports")
