"""Default configuration values for the proxy.

Values are read from environment variables at import time. The entry point
loads a project-level .env file before this module is imported, so anything
set there is picked up here as well.
"""

import os

# Upstream GitHub REST API
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
GITHUB_ACCEPT = "application/vnd.github.v3+json"

# Environment variable holding the token forwarded upstream.
# Read when the client is built, never cached here.
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"

# Function parameter defaults
DEFAULT_BRANCH = "main"
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 30

# HTTP transport
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
STATIC_DIR = os.getenv("STATIC_DIR", ".")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
