"""
Description:
Fixed choices offered when opening a mock interview.
"""

VALID_COMPANIES = ["Google", "Amazon", "Microsoft", "Meta", "Apple"]
VALID_ROLE_LEVELS = ["director", "vp"]

ROLE_LEVEL_TITLES = {
    "director": "Director",
    "vp": "VP",
}


def role_title(role_level: str) -> str:
    """Display title used in prompts, e.g. 'VP' or 'Director'."""
    return ROLE_LEVEL_TITLES.get(role_level, "Director")
