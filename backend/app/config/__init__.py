"""
Application configuration and settings
"""

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from .constants import *  # noqa: F401,F403
from .constants import __all__ as _constants_all
from .paths import APP_DIR, BACKEND_DIR, DEFAULT_RUNS_DIR
from .models import (
    ModelConfig,
    PipelineModels,
    DEFAULT_PIPELINE_MODELS,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_GEMINI_MODEL,
)
from .settings import Settings, parse_bool_env

__all__ = [
    *_constants_all,
    "APP_DIR",
    "BACKEND_DIR",
    "DEFAULT_RUNS_DIR",
    "ModelConfig",
    "PipelineModels",
    "DEFAULT_PIPELINE_MODELS",
    "DEFAULT_OPENAI_MODEL",
    "DEFAULT_GEMINI_MODEL",
    "Settings",
    "parse_bool_env",
]
