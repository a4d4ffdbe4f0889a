import os

from rxnotes.core.env import load_env

load_env()

def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() == "true"

OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/api")
OLLAMA_MODEL_EXTRACT = os.getenv("OLLAMA_MODEL_EXTRACT", "llama3.2")

OLLAMA_TEMPERATURE = float(os.getenv("OLLAMA_TEMPERATURE", "0.1"))
OLLAMA_TIMEOUT_S = int(os.getenv("OLLAMA_TIMEOUT_S", "90"))

# sample data instead of model calls (demos, offline dev)
MOCK_MODE = _flag("MOCK_MODE")
TEST_MODE = _flag("TEST_MODE")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
