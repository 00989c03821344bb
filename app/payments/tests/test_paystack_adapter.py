"""
Tests for PaystackAdapter.

All HTTP calls are mocked at ``requests``.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from payments.adapters import PaystackAdapter, TransferVerification
from payments.exceptions import GatewayTimeoutError, TerminalGatewayError, TransientGatewayError

POST = "payments.adapters.paystack_adapter.requests.post"
GET = "payments.adapters.paystack_adapter.requests.get"


def _http(status_code, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.reason = "Reason"
    response.text = ""
    response.json.return_value = body if body is not None else {}
    return response


def _initiate():
    return PaystackAdapter.initiate_transfer(
        amount_minor=1999999,
        recipient="RCP_00000001",
        reason="Payout for Order #1a2b3c4d",
        reference="po_1a2b_9f8e7d6c",
    )


class TestInitiateTransfer:
    def test_posts_transfer_from_balance(self, settings):
        settings.PAYSTACK_SECRET_KEY = "sk_test_abc"
        settings.PAYSTACK_BASE_URL = "https://api.paystack.co/"

        with patch(POST, return_value=_http(200, {"status": True, "message": "Transfer has been queued", "data": {"transfer_code": "TRF_1"}})) as post:
            response = _initiate()

        assert response.ok
        assert response.message == "Transfer has been queued"
        assert response.data == {"transfer_code": "TRF_1"}

        args, kwargs = post.call_args
        assert args[0] == "https://api.paystack.co/transfer"
        assert kwargs["json"] == {
            "source": "balance",
            "amount": 1999999,
            "recipient": "RCP_00000001",
            "reason": "Payout for Order #1a2b3c4d",
            "reference": "po_1a2b_9f8e7d6c",
        }
        assert kwargs["headers"]["Authorization"] == "Bearer sk_test_abc"
        assert kwargs["timeout"] > 0

    def test_refusal_is_answered_not_raised(self):
        body = {"status": False, "message": "Your balance is not enough to fulfil this request"}

        with patch(POST, return_value=_http(400, body)):
            response = _initiate()

        assert not response.ok
        assert response.status_code == 400
        assert response.message == "Your balance is not enough to fulfil this request"

    def test_ok_requires_body_status(self):
        with patch(POST, return_value=_http(200, {"status": False, "message": "nope"})):
            assert not _initiate().ok

    def test_timeout_is_ambiguous(self):
        with patch(POST, side_effect=requests.Timeout("read timed out")):
            with pytest.raises(GatewayTimeoutError) as exc_info:
                _initiate()

        assert exc_info.value.error_code == "GATEWAY_TIMEOUT"

    def test_connection_error_is_ambiguous(self):
        with patch(POST, side_effect=requests.ConnectionError("reset")):
            with pytest.raises(GatewayTimeoutError) as exc_info:
                _initiate()

        assert exc_info.value.error_code == "GATEWAY_UNREACHABLE"

    def test_server_error_is_ambiguous(self):
        with patch(POST, return_value=_http(502)):
            with pytest.raises(GatewayTimeoutError):
                _initiate()

    def test_rate_limit_is_transient(self):
        with patch(POST, return_value=_http(429)):
            with pytest.raises(TransientGatewayError) as exc_info:
                _initiate()

        assert exc_info.value.error_code == "GATEWAY_RATE_LIMITED"
        assert exc_info.value.is_retryable


class TestVerifyTransfer:
    @pytest.mark.parametrize(
        "gateway_state,expected",
        [
            ("success", TransferVerification.SUCCESS),
            ("failed", TransferVerification.FAILED),
            ("reversed", TransferVerification.REVERSED),
            ("otp", TransferVerification.PENDING),
            ("pending", TransferVerification.PENDING),
        ],
    )
    def test_maps_gateway_state(self, gateway_state, expected):
        body = {"status": True, "data": {"status": gateway_state}}

        with patch(GET, return_value=_http(200, body)) as get:
            assert PaystackAdapter.verify_transfer("po_ref") == expected

        assert get.call_args[0][0].endswith("/transfer/verify/po_ref")

    def test_404_is_not_found(self):
        with patch(GET, return_value=_http(404)):
            assert PaystackAdapter.verify_transfer("po_ref") == TransferVerification.NOT_FOUND

    def test_unknown_reference_answer_is_not_found(self):
        with patch(GET, return_value=_http(400, {"status": False, "message": "Transfer not found"})):
            assert PaystackAdapter.verify_transfer("po_ref") == TransferVerification.NOT_FOUND

    def test_rejected_credentials_are_terminal(self):
        with patch(GET, return_value=_http(401, {"status": False, "message": "Invalid key"})):
            with pytest.raises(TerminalGatewayError):
                PaystackAdapter.verify_transfer("po_ref")

    def test_timeout_raises(self):
        with patch(GET, side_effect=requests.Timeout()):
            with pytest.raises(GatewayTimeoutError):
                PaystackAdapter.verify_transfer("po_ref")
