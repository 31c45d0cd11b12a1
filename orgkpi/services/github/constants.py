"""Constants for GitHub service."""

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"

# GitHub caps per_page at 100 for both repository and commit listings
PAGE_SIZE = 100

# Organization listing is a single page, most recently pushed first
ORG_REPOS_SORT = "pushed"
