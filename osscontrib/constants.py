# The MIT License (MIT)
# Copyright © 2025 Entrius

# =============================================================================
# GitHub API
# =============================================================================
BASE_GITHUB_API_URL = "https://api.github.com"
GITHUB_GRAPHQL_PATH = "/graphql"
MAX_PULL_REQUESTS = 100  # first page only, no pagination
DEFAULT_REQUEST_TIMEOUT = 30  # seconds

# =============================================================================
# Rate Limit Monitoring
# =============================================================================
RATE_LIMIT_MIN_REMAINING = 10  # warn when this few requests are left

# =============================================================================
# Environment / Config
# =============================================================================
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"
BASE_URL_ENV = "OSSCONTRIB_BASE_URL"
API_URL_ENV = "OSSCONTRIB_API_URL"
TIMEOUT_ENV = "OSSCONTRIB_TIMEOUT"
DEFAULT_BASE_URL = "http://localhost:3000"

# =============================================================================
# Sharing
# =============================================================================
X_SHARE_URL = "https://x.com/intent/tweet"
LINKEDIN_SHARE_URL = "https://www.linkedin.com/sharing/share-offsite/"
SUPPORT_URL = "https://github.com/depapp/my-open-source-contributions?tab=readme-ov-file#muscle-support-me"
THOUSANDS_SEPARATOR = "."

# =============================================================================
# User-facing messages
# =============================================================================
LOOKUP_FAILED_TITLE = "unable to find this username"
LOOKUP_FAILED_HINT = "please make sure the username is correct"
NO_CONTRIBUTIONS_MESSAGE = "this user don't have any open-source contributions yet"
