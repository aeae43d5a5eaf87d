import hashlib
import hmac
import logging
import time
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import GatewayException

logger = logging.getLogger(__name__)


class RazorpayService:
    """Thin async client for the two Razorpay endpoints this service needs.

    One instance is created at startup and shared by all requests; call
    `aclose()` on shutdown to release the underlying connection pool.
    Nothing is retried: a failed call surfaces as GatewayException.
    """

    def __init__(
        self,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.key_id = key_id if key_id is not None else settings.razorpay_key_id
        self.key_secret = key_secret if key_secret is not None else settings.razorpay_key_secret
        self.base_url = (base_url or settings.razorpay_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=(self.key_id, self.key_secret),
            timeout=timeout or settings.razorpay_timeout,
            transport=transport,
        )

    async def aclose(self):
        await self._client.aclose()

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make an authenticated request to the Razorpay API (GET or POST)."""
        try:
            if method.upper() == "GET":
                response = await self._client.get(endpoint, params=data)
            elif method.upper() == "POST":
                response = await self._client.post(endpoint, json=data)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
        except httpx.RequestError as e:
            logger.exception(f"Request error for {method} {endpoint}")
            raise GatewayException(f"Request failed: {str(e)}")

        logger.debug(
            "Razorpay response (%s) from %s: status=%s",
            method,
            endpoint,
            response.status_code,
        )

        try:
            result = response.json()
        except ValueError:
            result = {}

        if 200 <= response.status_code < 300:
            return result

        message = self._extract_error(result) or response.text or f"HTTP {response.status_code}"
        if 400 <= response.status_code < 500:
            logger.warning("Razorpay client error (%s %s): %s", method, endpoint, message)
        else:
            logger.error("Razorpay server error (%s %s): %s", method, endpoint, message)
        raise GatewayException(message, gateway_status=response.status_code)

    @staticmethod
    def _extract_error(result: Any) -> str:
        if not isinstance(result, dict):
            return ""
        error = result.get("error")
        if isinstance(error, dict):
            return error.get("description") or error.get("code") or ""
        if isinstance(error, str):
            return error
        return result.get("message") or ""

    async def create_order(self, amount_minor_units: int, currency: str) -> str:
        """
        Creates an auto-capture order.

        Args:
            amount_minor_units (int): amount in the currency's smallest unit (paise for INR).
            currency (str): ISO currency code, passed through unchanged.

        Returns:
            str: the Razorpay order id.
        """
        logger.info(f"method=create_order amount={amount_minor_units} currency={currency}")
        payload = {
            "amount": amount_minor_units,
            "currency": currency,
            "receipt": f"receipt_{int(time.time() * 1000)}",
            "payment_capture": 1,
        }
        try:
            result = await self._make_request("POST", "/orders", payload)
        except GatewayException as ex:
            ex.message = "Failed to create order."
            raise
        order_id = result.get("id")
        if not order_id:
            raise GatewayException("Order response did not contain an id", message="Failed to create order.")
        logger.info(f"razorpay order created order_id={order_id}")
        return order_id

    async def fetch_payment(self, payment_id: str) -> Dict[str, Any]:
        """Looks up a payment. The returned dict carries at least `order_id` and `status`."""
        logger.info(f"method=fetch_payment payment_id={payment_id}")
        result = await self._make_request("GET", f"/payments/{payment_id}")
        if not isinstance(result, dict) or "status" not in result:
            raise GatewayException(f"Unexpected payment lookup response for {payment_id}")
        return result

    def compute_signature(self, order_id: str, payment_id: str) -> str:
        """HMAC-SHA256 of "<order_id>|<payment_id>" keyed with the API secret, as Razorpay signs checkouts."""
        message = f"{order_id}|{payment_id}".encode()
        return hmac.new(self.key_secret.encode(), message, hashlib.sha256).hexdigest()
