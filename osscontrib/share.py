# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Share links and display formatting for a contribution profile.

Nothing here touches the network; the tool's public base URL is always
passed in by the caller.
"""

from dataclasses import dataclass
from urllib.parse import quote

from osscontrib.constants import (
    LINKEDIN_SHARE_URL,
    SUPPORT_URL,
    THOUSANDS_SEPARATOR,
    X_SHARE_URL,
)


def format_number(num: int, separator: str = THOUSANDS_SEPARATOR) -> str:
    """Group digits in thousands, e.g. 12345 -> '12.345'."""
    return f'{num:,}'.replace(',', separator)


def profile_url(base_url: str, login: str) -> str:
    return f'{base_url.rstrip("/")}/{login}'


def build_share_text(login: str, total_contributions: int, base_url: str) -> str:
    """Message posted when a user shares their profile."""
    tool_url = base_url.rstrip('/')
    return (
        f'I have {total_contributions} contributions on open-source projects.\n'
        f'Check out my profile at {profile_url(tool_url, login)}\n\n'
        f'Give it a try yourself at {tool_url}'
    )


def _encode(value: str) -> str:
    # matches encodeURIComponent
    return quote(value, safe="-_.!~*'()")


def x_share_url(share_text: str) -> str:
    return f'{X_SHARE_URL}?text={_encode(share_text)}'


def linkedin_share_url(profile_link: str, share_text: str) -> str:
    return f'{LINKEDIN_SHARE_URL}?mini=true&url={_encode(profile_link)}&summary={_encode(share_text)}'


@dataclass(frozen=True)
class ShareLinks:
    profile_url: str
    text: str
    x_url: str
    linkedin_url: str
    support_url: str = SUPPORT_URL


def build_share_links(login: str, total_contributions: int, base_url: str) -> ShareLinks:
    """Build every outbound share link for a profile."""
    link = profile_url(base_url, login)
    text = build_share_text(login, total_contributions, base_url)
    return ShareLinks(
        profile_url=link,
        text=text,
        x_url=x_share_url(text),
        linkedin_url=linkedin_share_url(link, text),
    )
