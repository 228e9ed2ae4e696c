"""Shared test fixtures -- rewrite inputs, requests and context packs."""

import pytest

from complaint_rewrite.models import RewriteInput, RewriteRequest, RewriteResponse

JOB_ID = "3f2b8c1e-9a4d-4e6f-8b2a-1c3d5e7f9a0b"


@pytest.fixture
def job_id():
    return JOB_ID


@pytest.fixture
def context_pack():
    return {
        "power": {"power_mode": "higher_recipient"},
        "household": {"address": "12 Elm Street", "members": ["Ana", "Ben"]},
        "preference_signals": [
            {"key": "contact", "value": "text first"},
            {"key": "quiet_hours", "value": "after 22:00"},
        ],
    }


@pytest.fixture
def rewrite_input(context_pack):
    return RewriteInput(
        model="gpt-5-nano",
        prompt_version="v2",
        target_locale="en",
        intent="request",
        original_text="Stop blasting music at 2am, seriously.",
        context_pack=context_pack,
        policy={"directness": "neutral", "tone": "gentle"},
    )


@pytest.fixture
def make_pair():
    """Build a (RewriteRequest, RewriteResponse) pair around a rewritten text."""

    def _make(text, intent="request", target_locale="en", output_language="en"):
        request = RewriteRequest(
            rewrite_request_id="rr_1",
            target_locale=target_locale,
            original_text="original",
            intent=intent,
        )
        response = RewriteResponse(
            rewrite_request_id="rr_1",
            recipient_user_id="user_b",
            rewritten_text=text,
            output_language=output_language,
        )
        return request, response

    return _make
