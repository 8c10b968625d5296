"""
Agent card rendering.

A card shows an agent's name, phone and verification status. Rendering is
a pure function of those three values; every value is HTML-escaped.
"""

from html import escape
from typing import Iterable

from backend.src.models.agent import AgentDocument

CARD_TEMPLATE = (
    '<div class="card">'
    '<p class="name">Name: {name}</p>'
    "<p>Phone: {phone}</p>"
    '<p>Status: <span class="{status_class}">{status}</span></p>'
    "</div>"
)


def render_agent_card(name: str, phone: str, verified: bool) -> str:
    return CARD_TEMPLATE.format(
        name=escape(name),
        phone=escape(phone),
        status_class="verified" if verified else "notVerified",
        status="Verified" if verified else "Not Verified",
    )


def render_agent_cards(agents: Iterable[AgentDocument]) -> str:
    """Render a list of agents as one ``agent-cards`` container."""
    cards = "".join(
        render_agent_card(agent.name, agent.phone, agent.verified) for agent in agents
    )
    return f'<section class="agent-cards">{cards}</section>'
