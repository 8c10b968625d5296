"""Unit tests for agent card rendering."""

import pytest

from backend.src.models.agent import AgentDocument
from backend.src.views.agent_card import render_agent_card, render_agent_cards


class TestAgentCard:

    def test_verified_agent(self):
        html = render_agent_card("Ama Mensah", "0201234567", True)

        assert html == (
            '<div class="card">'
            '<p class="name">Name: Ama Mensah</p>'
            "<p>Phone: 0201234567</p>"
            '<p>Status: <span class="verified">Verified</span></p>'
            "</div>"
        )

    def test_unverified_agent(self):
        html = render_agent_card("Kojo", "0551234567", False)

        assert '<span class="notVerified">Not Verified</span>' in html
        assert 'class="verified"' not in html

    @pytest.mark.parametrize("name, escaped", [
        ("<script>alert(1)</script>", "&lt;script&gt;alert(1)&lt;/script&gt;"),
        ('Ama "A" & Co', "Ama &quot;A&quot; &amp; Co"),
    ])
    def test_values_are_escaped(self, name, escaped):
        html = render_agent_card(name, "020", True)
        assert f"Name: {escaped}</p>" in html

    def test_is_pure(self):
        assert render_agent_card("A", "1", True) == render_agent_card("A", "1", True)

    def test_list_of_cards(self):
        agents = [
            AgentDocument(name="Ama", phone="1", verified=True),
            AgentDocument(name="Kojo", phone="2", verified=False),
        ]

        html = render_agent_cards(agents)

        assert html.startswith('<section class="agent-cards">')
        assert html.endswith("</section>")
        assert html.count('<div class="card">') == 2
        assert html.index("Ama") < html.index("Kojo")

    def test_empty_list(self):
        assert render_agent_cards([]) == '<section class="agent-cards"></section>'
