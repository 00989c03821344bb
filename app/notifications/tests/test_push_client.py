"""
Tests for ExpoPushClient.

HTTP calls are mocked at ``requests.post``.
"""

import pytest
import requests

from notifications.exceptions import NotificationDeliveryError
from notifications.push_client import ExpoPushClient, PushMessage


@pytest.fixture
def post(mocker):
    return mocker.patch("notifications.push_client.requests.post")


def _answer(post, status_code=200, body=None):
    post.return_value.status_code = status_code
    post.return_value.text = ""
    post.return_value.json.return_value = body if body is not None else {"data": {"status": "ok"}}


def _message(n=0):
    return PushMessage(to=f"ExponentPushToken[{n}]", title="Hi", body="There", data={"screen": "orders"})


class TestSend:
    def test_posts_message(self, post, settings):
        _answer(post)

        ExpoPushClient.send(_message())

        args, kwargs = post.call_args
        assert args[0] == settings.EXPO_PUSH_URL
        assert kwargs["json"] == {
            "to": "ExponentPushToken[0]",
            "title": "Hi",
            "body": "There",
            "data": {"screen": "orders"},
            "sound": "default",
        }
        assert kwargs["timeout"] == settings.PUSH_API_TIMEOUT_SECONDS

    def test_error_ticket_raises(self, post):
        _answer(
            post,
            body={
                "data": [
                    {
                        "status": "error",
                        "message": '"ExponentPushToken[0]" is not a registered push notification recipient',
                        "details": {"error": "DeviceNotRegistered"},
                    }
                ]
            },
        )

        with pytest.raises(NotificationDeliveryError) as exc_info:
            ExpoPushClient.send(_message())

        assert exc_info.value.error_code == "PUSH_TICKET_ERROR"
        assert "not a registered" in exc_info.value.message

    def test_http_error_raises(self, post):
        _answer(post, status_code=500)

        with pytest.raises(NotificationDeliveryError) as exc_info:
            ExpoPushClient.send(_message())

        assert exc_info.value.error_code == "PUSH_GATEWAY_REJECTED"

    def test_network_error_raises(self, post):
        post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(NotificationDeliveryError) as exc_info:
            ExpoPushClient.send(_message())

        assert exc_info.value.error_code == "PUSH_GATEWAY_UNREACHABLE"


class TestSendBatch:
    def test_chunks_messages(self, post, settings):
        settings.PUSH_BATCH_SIZE = 2
        _answer(post, body={"data": []})

        accepted = ExpoPushClient.send_batch([_message(n) for n in range(5)])

        assert accepted == 5
        assert post.call_count == 3
        assert len(post.call_args_list[0].kwargs["json"]) == 2
        assert len(post.call_args_list[2].kwargs["json"]) == 1

    def test_failed_chunk_does_not_stop_the_batch(self, post, settings, mocker):
        settings.PUSH_BATCH_SIZE = 2
        ok = mocker.Mock(status_code=200, text="")
        ok.json.return_value = {"data": []}
        post.side_effect = [requests.Timeout(), ok]

        accepted = ExpoPushClient.send_batch([_message(n) for n in range(4)])

        assert accepted == 2
        assert post.call_count == 2
