"""
Device details for login sessions, parsed from the User-Agent header.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from user_agents import parse


def describe_device(user_agent: Optional[str]) -> Dict[str, Any]:
    """JSON-able summary of the client device."""
    raw = user_agent or ""
    agent = parse(raw)
    return {
        "browser": f"{agent.browser.family} {agent.browser.version_string}".strip(),
        "os": f"{agent.os.family} {agent.os.version_string}".strip(),
        "device": agent.device.family,
        "is_mobile": agent.is_mobile,
        "is_bot": agent.is_bot,
        "raw": raw,
    }
