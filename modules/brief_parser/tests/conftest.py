"""
Pytest fixtures for language-model stage tests.
"""
import pytest

from shared.models.brief import StructuredBrief, VideoScript


@pytest.fixture
def sample_brief():
    return StructuredBrief(
        title="Senior Backend Engineer",
        impact="Scale the payments platform that moves $2B a year",
        location="Berlin",
        seniority="Senior",
        remote="Hybrid",
        top_responsibilities=["Design resilient payment services", "Mentor engineers"],
        requirements=["5+ years Python", "Distributed systems"],
        benefits=["Equity", "Learning budget"],
        cta_url="https://example.com/jobs/42",
    )


@pytest.fixture
def sample_script():
    return VideoScript(
        hook="What if your code moved $2B a year?",
        beats=["Build payment rails at scale", "Grow with a senior team", "Own what you ship"],
        on_screen_text=["$2B a year", "Grow fast", "Own it"],
        cta="Apply now",
        cta_url="https://example.com/jobs/42",
    )


def usage():
    return {"input_tokens": 100, "output_tokens": 50}


@pytest.fixture
def llm_reply():
    """Build a complete_json return value."""
    def _reply(payload):
        return payload, usage()
    return _reply
