from pathlib import Path
from datetime import datetime

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV = PROJECT_ROOT / ".env"

OUTPUT_DIR = PROJECT_ROOT / "output"
STRUCTURED_OUTPUT_DIR = OUTPUT_DIR / "structured"
DIRECT_OUTPUT_DIR = OUTPUT_DIR / "direct"
DOCUMENT_OUTPUT_DIR = OUTPUT_DIR / "document"

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DESIGN_MODEL = "mistralai/devstral-2512:free"
DOCUMENT_MODEL = "mistralai/devstral-2512:free"
PLANTUML_HOST = "http://localhost:8080"
MAX_TOKENS_DESIGN = 4096
MAX_TOKENS_DOCUMENT = 4096
TEMPERATURE_DESIGN = 0.0
TEMPERATURE_DOCUMENT = 0.3
LLM_TIMEOUT = 60
REQUEST_TIMEOUT = 15

# Upper bound on upstream text echoed back in error messages
EXCERPT_LENGTH = 200

DEFAULT_TYPE = "String"
DEFAULT_RETURN_TYPE = "void"


def create_run_dir(mode: str) -> Path:
    """Create a timestamped directory for a new run.

    Args:
        mode: One of "structured", "direct" or "document"
    Returns:
        Path to the created run directory
    """
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")

    if mode == "structured":
        run_dir = STRUCTURED_OUTPUT_DIR / f"run_{timestamp}"
    elif mode == "direct":
        run_dir = DIRECT_OUTPUT_DIR / f"run_{timestamp}"
    elif mode == "document":
        run_dir = DOCUMENT_OUTPUT_DIR / f"run_{timestamp}"
    else:
        raise ValueError(f"Unknown mode: {mode}")

    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir

def ensure_output_dirs():
    """Create all necessary output directories if they don't exist."""
    dirs = [
        OUTPUT_DIR,
        STRUCTURED_OUTPUT_DIR,
        DIRECT_OUTPUT_DIR,
        DOCUMENT_OUTPUT_DIR,
    ]

    for dir_path in dirs:
        dir_path.mkdir(parents=True, exist_ok=True)
