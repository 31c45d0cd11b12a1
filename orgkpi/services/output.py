"""Rendering of the contributor list."""

from collections.abc import Iterator


def format_identity(login: str, profile_url: str, markdown: bool = False) -> str:
    if markdown:
        return f"- [{login}]({profile_url})"
    return f"{login}: {profile_url}"


def render_lines(identities: dict[str, str], markdown: bool = False) -> Iterator[str]:
    """Yield one line per contributor, sorted by login."""
    for login in sorted(identities, key=str.lower):
        yield format_identity(login, identities[login], markdown=markdown)
