"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# API keys, never hardcoded
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o-mini")
OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")  # empty means the public API

# AI gateway
AI_TIMEOUT_SECONDS: float = float(os.getenv("AI_TIMEOUT_SECONDS", "60"))
AI_CONNECT_TIMEOUT_SECONDS: float = 10.0
AI_TEMPERATURE: float = 0.2

# Login: one shared placeholder password for both roles
LOGIN_PASSWORD: str = os.getenv("RESMO_PASSWORD", "password")
RECRUITER_IDENTITY: str = "recruiter"

# Resume ingestion
ACCEPTED_RESUME_EXTENSIONS: tuple = (".txt", ".pdf", ".docx")
PDF_RENDER_SCALE: float = 1.5  # upscale factor over 72 dpi for page images
RESUME_MAX_CHARS: int = 20000  # truncation applied to text sent to the model

# Analysis and skill checks
MAX_ANALYSIS_SKILLS: int = 8
SKILL_CHECK_QUESTION_COUNT: int = 5
SKILL_CHECK_OPTION_COUNT: int = 4
SKILL_CHECK_PASS_MARK: int = 70  # display only
DEFAULT_SKILL_CHECK_SKILLS: list = ["React", "TypeScript"]
FIT_SCORE_RANGE: tuple = (1, 10)

# Status emails
EMAIL_SIGNATURE: str = os.getenv("RESMO_EMAIL_SIGNATURE", "The Resmo Team")
