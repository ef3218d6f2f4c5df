"""
Adapter: MTN MOMO collection API client.

Implements MomoGateway port over httpx.

Handles:
- API key provisioning for the configured API user (when no key is set)
- OAuth token retrieval, cached until the token expires
- request-to-pay, status lookups, account holder checks, delivery
  notifications and balance queries

Every non-2xx response raises MomoError carrying the provider's status; a
2xx body that is not the expected JSON object raises MomoError with 502.
"""

import base64
import logging
import threading
import time
import uuid
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

import httpx

from hoardrun.domain.payments.entities import CollectionBalance, PaymentStatusReport
from hoardrun.domain.payments.errors import MomoError, MomoErrorCode
from hoardrun.domain.payments.ports import MomoGateway

logger = logging.getLogger(__name__)

# Refresh tokens slightly before the provider expires them
TOKEN_EXPIRY_MARGIN_SECONDS = 30


class MomoClient(MomoGateway):
    """Client for the MOMO collection product.

    Args:
        base_url: API root, e.g. https://sandbox.momodeveloper.mtn.com.
        primary_key: Ocp-Apim-Subscription-Key of the collection product.
        user_id: API user id (UUID).
        api_key: API key of the API user; generated on demand when empty.
        target_environment: X-Target-Environment header value.
        callback_url: URL the provider notifies when a payment settles.
        client: Optional httpx client (injected in tests).
        timeout: Request timeout in seconds.
        clock: Time source for token expiry.
    """

    def __init__(
        self,
        base_url: str,
        primary_key: str,
        user_id: str,
        api_key: str = "",
        target_environment: str = "sandbox",
        callback_url: str = "",
        client: Optional[httpx.Client] = None,
        timeout: float = 15.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._primary_key = primary_key
        self._user_id = user_id
        self._api_key = api_key or None
        self._target_environment = target_environment
        self._callback_url = callback_url
        self._client = client or httpx.Client(timeout=timeout)
        self._clock = clock
        self._token: Optional[str] = None
        self._token_expires_at = 0.0
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def _generate_api_key(self) -> str:
        response = self._send(
            "POST",
            f"/v1_0/apiuser/{self._user_id}/apikey",
            MomoErrorCode.API_KEY_GENERATION_FAILED,
            "Failed to generate API key",
            headers={"Ocp-Apim-Subscription-Key": self._primary_key},
        )
        api_key = _payload(response, MomoErrorCode.API_KEY_GENERATION_FAILED).get("apiKey")
        if not api_key:
            raise MomoError(
                MomoErrorCode.API_KEY_GENERATION_FAILED, "Failed to generate API key", 502
            )
        self._api_key = api_key
        logger.info("Generated MOMO API key for API user")
        return self._api_key

    def _get_auth_token(self) -> str:
        with self._lock:
            if self._token and self._clock() < self._token_expires_at:
                return self._token

            if not self._api_key:
                self._generate_api_key()

            credentials = base64.b64encode(
                f"{self._user_id}:{self._api_key}".encode("utf-8")
            ).decode("ascii")
            response = self._send(
                "POST",
                "/collection/token/",
                MomoErrorCode.AUTH_TOKEN_FAILED,
                "Failed to obtain auth token",
                headers={
                    "Authorization": f"Basic {credentials}",
                    "Ocp-Apim-Subscription-Key": self._primary_key,
                },
            )
            data = _payload(response, MomoErrorCode.AUTH_TOKEN_FAILED)
            token = data.get("access_token")
            if not token:
                raise MomoError(
                    MomoErrorCode.AUTH_TOKEN_FAILED, "Failed to obtain auth token", 502
                )
            try:
                expires_in = int(data.get("expires_in", 3600))
            except (TypeError, ValueError):
                expires_in = 3600
            self._token = token
            self._token_expires_at = (
                self._clock() + max(expires_in - TOKEN_EXPIRY_MARGIN_SECONDS, 0)
            )
            return self._token

    def _headers(self, **extra: str) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._get_auth_token()}",
            "X-Target-Environment": self._target_environment,
            "Ocp-Apim-Subscription-Key": self._primary_key,
        }
        headers.update(extra)
        return headers

    def _send(
        self,
        method: str,
        path: str,
        code: MomoErrorCode,
        message: str,
        **kwargs,
    ) -> httpx.Response:
        """Issue a request and translate failures into MomoError."""
        try:
            response = self._client.request(method, f"{self._base_url}{path}", **kwargs)
        except httpx.HTTPError as exc:
            logger.error("MOMO request failed: %s %s (%s)", method, path, type(exc).__name__)
            raise MomoError(code, message, 502) from exc

        if response.is_error:
            logger.warning(
                "MOMO returned %d for %s %s", response.status_code, method, path
            )
            raise MomoError(code, message, response.status_code)
        return response

    # ------------------------------------------------------------------
    # Collection API
    # ------------------------------------------------------------------

    def request_to_pay(
        self,
        amount: Decimal,
        currency: str,
        party_id: str,
        payer_message: str,
        external_id: Optional[str] = None,
        payee_note: Optional[str] = None,
    ) -> str:
        reference_id = str(uuid.uuid4())
        body = {
            "amount": str(amount),
            "currency": currency,
            "externalId": external_id or reference_id,
            "payer": {"partyIdType": "MSISDN", "partyId": party_id},
            "payerMessage": payer_message,
            "payeeNote": payee_note or payer_message,
            "callbackUrl": self._callback_url,
        }
        self._send(
            "POST",
            "/collection/v1_0/requesttopay",
            MomoErrorCode.PAYMENT_REQUEST_FAILED,
            "Failed to initiate payment request",
            headers=self._headers(**{"X-Reference-Id": reference_id}),
            json=body,
        )
        return reference_id

    def get_transaction_status(self, reference_id: str) -> PaymentStatusReport:
        response = self._send(
            "GET",
            f"/collection/v1_0/requesttopay/{reference_id}",
            MomoErrorCode.STATUS_CHECK_FAILED,
            "Failed to get transaction status",
            headers=self._headers(),
        )
        data = _payload(response, MomoErrorCode.STATUS_CHECK_FAILED)
        return PaymentStatusReport(
            reference_id=reference_id,
            status=data.get("status", "PENDING"),
            reason=_reason_text(data.get("reason")),
            financial_transaction_id=data.get("financialTransactionId"),
        )

    def validate_account_holder(self, account_holder_id: str, id_type: str = "msisdn") -> bool:
        try:
            response = self._client.get(
                f"{self._base_url}/collection/v1_0/accountholder/"
                f"{id_type}/{account_holder_id}/active",
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            logger.error("MOMO account holder check failed: %s", type(exc).__name__)
            raise MomoError(
                MomoErrorCode.SYSTEM_ERROR, "Failed to validate account holder", 502
            ) from exc
        return response.status_code == 200

    def send_delivery_notification(
        self, reference_id: str, message: str, language: str = "en"
    ) -> None:
        self._send(
            "POST",
            f"/collection/v1_0/requesttopay/{reference_id}/deliverynotification",
            MomoErrorCode.NOTIFICATION_FAILED,
            "Failed to send delivery notification",
            headers=self._headers(),
            json={"notificationMessage": message, "language": language},
        )

    def get_account_balance(self) -> CollectionBalance:
        response = self._send(
            "GET",
            "/collection/v1_0/account/balance",
            MomoErrorCode.BALANCE_CHECK_FAILED,
            "Failed to get account balance",
            headers=self._headers(),
        )
        data = _payload(response, MomoErrorCode.BALANCE_CHECK_FAILED)
        try:
            amount = Decimal(str(data.get("availableBalance", data.get("amount", "0"))))
        except InvalidOperation as exc:
            raise MomoError(
                MomoErrorCode.BALANCE_CHECK_FAILED, "Failed to get account balance", 502
            ) from exc
        return CollectionBalance(amount=amount, currency=data.get("currency", ""))


def _reason_text(reason) -> Optional[str]:
    # The sandbox returns either a string or {"code": ..., "message": ...}
    if reason is None:
        return None
    if isinstance(reason, dict):
        return reason.get("message") or reason.get("code")
    return str(reason)


def _payload(response: httpx.Response, code: MomoErrorCode) -> dict:
    """Decode a 2xx JSON body; anything but a JSON object is a provider fault."""
    try:
        data = response.json()
    except ValueError as exc:
        logger.error("MOMO returned a malformed body (%s)", code.value)
        raise MomoError(code, "Malformed response from MOMO", 502) from exc
    if not isinstance(data, dict):
        logger.error("MOMO returned a non-object body (%s)", code.value)
        raise MomoError(code, "Malformed response from MOMO", 502)
    return data
