"""
Constants configuration

API settings, CORS configuration and pipeline tuning constants.
"""

# API settings
API_TITLE = "Veo3 Segment Generator API"
API_DESCRIPTION = "Turn marketing scripts into structured 8-second segments for AI video platforms"
API_VERSION = "1.0.0"

# CORS origins
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:5173",
]

# Script validation
MIN_SCRIPT_LENGTH = 50

# Splitter band, tuned for an 8-second spoken segment
WORDS_PER_SEGMENT_MIN = 15
WORDS_PER_SEGMENT_MAX = 22
SEGMENT_DURATION_SECONDS = 8

# Output formats
FORMAT_STANDARD = "standard"
FORMAT_ENHANCED = "enhanced"
FORMAT_CONTINUATION = "continuation"
OUTPUT_FORMATS = (FORMAT_STANDARD, FORMAT_ENHANCED, FORMAT_CONTINUATION)

# Provider names
PROVIDER_OPENAI = "openai"
PROVIDER_GEMINI = "gemini"
PROVIDER_VERTEX = "vertex"
PROVIDER_FALAI = "falai"
PROVIDER_KIEAI = "kieai"
VIDEO_PROVIDERS = (PROVIDER_GEMINI, PROVIDER_VERTEX, PROVIDER_FALAI, PROVIDER_KIEAI)

# Video defaults
DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_VIDEO_DURATION = "8s"
DEFAULT_RESOLUTION = "720p"
VIDEO_PROMPT_MAX_CHARS = 1000

# USD per generated second, keyed by (provider, generate_audio)
VIDEO_RATE_TABLE = {
    PROVIDER_FALAI: {True: 0.40, False: 0.20},
    PROVIDER_KIEAI: {True: 0.05, False: 0.05},
    PROVIDER_GEMINI: {True: 0.0, False: 0.0},
    PROVIDER_VERTEX: {True: 0.0, False: 0.0},
}

# Request limits
MAX_REQUEST_BODY_BYTES = 10 * 1024 * 1024
RATE_LIMIT_EXEMPT_PATHS = {"/", "/api/health"}

ARCHIVE_FILENAME = "veo3-segments.zip"

__all__ = [
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "MIN_SCRIPT_LENGTH",
    "WORDS_PER_SEGMENT_MIN",
    "WORDS_PER_SEGMENT_MAX",
    "SEGMENT_DURATION_SECONDS",
    "FORMAT_STANDARD",
    "FORMAT_ENHANCED",
    "FORMAT_CONTINUATION",
    "OUTPUT_FORMATS",
    "PROVIDER_OPENAI",
    "PROVIDER_GEMINI",
    "PROVIDER_VERTEX",
    "PROVIDER_FALAI",
    "PROVIDER_KIEAI",
    "VIDEO_PROVIDERS",
    "DEFAULT_ASPECT_RATIO",
    "DEFAULT_VIDEO_DURATION",
    "DEFAULT_RESOLUTION",
    "VIDEO_PROMPT_MAX_CHARS",
    "VIDEO_RATE_TABLE",
    "MAX_REQUEST_BODY_BYTES",
    "RATE_LIMIT_EXEMPT_PATHS",
    "ARCHIVE_FILENAME",
]
