"""
Alert Client Tests
"""

import logging
from unittest.mock import MagicMock

import pytest
import requests

from spotguard.services import AlertClient


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.post.return_value = MagicMock(status_code=202)
    return session


def _card_blocks(payload):
    attachment = payload["attachments"][0]
    assert attachment["contentType"] == "application/vnd.microsoft.card.adaptive"
    assert attachment["content"]["type"] == "AdaptiveCard"
    return attachment["content"]["body"]


def test_adaptive_card_error(session):
    client = AlertClient("https://example.webhook.office.com/hook", session=session)

    assert client.notify("Critical failure", "Error: QuotaExceeded", True) is True

    args, kwargs = session.post.call_args
    assert args[0] == "https://example.webhook.office.com/hook"
    title, body = _card_blocks(kwargs["json"])
    assert title["text"] == "Critical failure"
    assert title["weight"] == "Bolder"
    assert title["color"] == "Attention"
    assert body["text"] == "Error: QuotaExceeded"


def test_adaptive_card_success_color(session):
    client = AlertClient("https://example.webhook.office.com/hook", session=session)

    client.notify("Recovered", "VM is back", False)

    title, _ = _card_blocks(session.post.call_args.kwargs["json"])
    assert title["color"] == "Good"


def test_legacy_message_card(session):
    client = AlertClient("https://example.webhook.office.com/hook", card_format="messagecard", session=session)

    client.notify("Recovered", "VM is back", False)

    card = session.post.call_args.kwargs["json"]
    assert card["@type"] == "MessageCard"
    assert card["themeColor"] == "00FF00"
    assert card["sections"] == [{"activityTitle": "Recovered", "text": "VM is back"}]


def test_unconfigured_is_noop(session):
    client = AlertClient(None, session=session)

    assert client.notify("t", "b", True) is False
    session.post.assert_not_called()


def test_transport_error_is_swallowed(session, caplog):
    session.post.side_effect = requests.exceptions.ConnectionError("refused")
    client = AlertClient("https://example.webhook.office.com/hook", session=session)

    with caplog.at_level(logging.ERROR):
        assert client.notify("t", "b", True) is False

    assert caplog.records
