"""
Payment and donation requests against YooKassa.

The service formats the receipt the way YooKassa expects (quantity
with three decimals, amounts with two, RUB), posts it with HTTP Basic
credentials and a fresh ``Idempotence-Key``, and returns the redirect
URL the customer has to follow.  Payment state is not tracked here:
whatever happens after the redirect is between the customer and the
gateway.

Every failure (missing credentials, network error, timeout, non‑2xx,
unexpected response body) is reported as ``UpstreamGatewayError``.
No retries are made.
"""

from __future__ import annotations

import base64
import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional

import httpx

from services_catalog_api.app.core.config import settings
from services_catalog_api.app.core.errors import UpstreamGatewayError
from services_catalog_api.app.schemas.payment import Customer, DonationCreate, PaymentCreate, PaymentItem

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Оплата"
DONATION_DESCRIPTION = "Пожертвование"

QUANTITY_STEP = Decimal("0.001")
AMOUNT_STEP = Decimal("0.01")


def format_quantity(value: Decimal) -> str:
    """``2`` -> ``"2.000"``."""
    return str(Decimal(value).quantize(QUANTITY_STEP, rounding=ROUND_HALF_UP))


def format_amount(value: Decimal) -> str:
    """``5500`` -> ``"5500.00"``."""
    return str(Decimal(value).quantize(AMOUNT_STEP, rounding=ROUND_HALF_UP))


def total_amount(items: Iterable[PaymentItem]) -> str:
    total = sum((item.price * item.quantity for item in items), Decimal("0"))
    return format_amount(total)


def receipt_item(description: str, quantity: Decimal, price: Decimal, currency: str) -> Dict[str, Any]:
    return {
        "description": description,
        "quantity": format_quantity(quantity),
        "amount": {"value": format_amount(price), "currency": currency},
        "vat_code": 1,
        "payment_subject": "service",
        "payment_mode": "full_prepayment",
    }


class PaymentService:
    """Client for the YooKassa payment creation endpoint."""

    # Tests swap in ``httpx.MockTransport``; ``None`` means real network.
    transport: Optional[httpx.AsyncBaseTransport] = None

    @classmethod
    async def create_payment(cls, data: PaymentCreate) -> str:
        """Create a payment for a list of catalog items.

        Returns the confirmation URL to redirect the customer to.
        """
        currency = settings.payment_currency
        items = [receipt_item(i.name, i.quantity, i.price, currency) for i in data.itemsList]
        payload = cls._build_payload(
            amount=total_amount(data.itemsList),
            description=data.description or DEFAULT_DESCRIPTION,
            customer=data.customer,
            items=items,
        )
        return await cls._post(payload)

    @classmethod
    async def create_donation(cls, data: DonationCreate) -> str:
        """Create a single-item donation payment."""
        currency = settings.payment_currency
        items = [receipt_item(DONATION_DESCRIPTION, Decimal("1"), data.amount, currency)]
        payload = cls._build_payload(
            amount=format_amount(data.amount),
            description=DONATION_DESCRIPTION,
            customer=data.customer,
            items=items,
        )
        return await cls._post(payload)

    @classmethod
    def _build_payload(
        cls,
        amount: str,
        description: str,
        customer: Customer,
        items: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        return {
            "amount": {"value": amount, "currency": settings.payment_currency},
            "capture": True,
            "confirmation": {
                "type": "redirect",
                "return_url": settings.payment_return_url,
            },
            "description": description,
            "receipt": {
                "customer": {
                    "full_name": customer.full_name,
                    "phone": customer.phone,
                },
                "type": "payment",
                "send": "true",
                "items": items,
            },
        }

    @classmethod
    def _headers(cls) -> Dict[str, str]:
        auth_token = base64.b64encode(f"{settings.shop_id}:{settings.payment_key}".encode()).decode()
        return {
            "Authorization": f"Basic {auth_token}",
            "Content-Type": "application/json",
            # A new key per call: each request is a distinct payment.
            "Idempotence-Key": str(uuid.uuid4()),
        }

    @classmethod
    async def _post(cls, payload: Dict[str, Any]) -> str:
        if not settings.shop_id or not settings.payment_key:
            logger.error("SHOP_ID and PAYMENT_KEY must be configured to create payments")
            raise UpstreamGatewayError()

        logger.info("Creating payment for %s %s", payload["amount"]["value"], payload["amount"]["currency"])
        try:
            async with httpx.AsyncClient(
                transport=cls.transport,
                timeout=settings.payment_timeout_seconds,
            ) as client:
                response = await client.post(settings.payment_api_url, json=payload, headers=cls._headers())
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Payment gateway returned %s: %s",
                e.response.status_code,
                e.response.text,
            )
            raise UpstreamGatewayError() from e
        except httpx.HTTPError as e:
            logger.error("Payment gateway request failed: %s", e)
            raise UpstreamGatewayError() from e
        except ValueError as e:
            logger.error("Payment gateway returned invalid JSON: %s", e)
            raise UpstreamGatewayError() from e

        if not isinstance(data, dict):
            data = {}
        confirmation = data.get("confirmation")
        confirmation_url = None
        if isinstance(confirmation, dict):
            # Depending on API version the URL is under ``confirmation_url`` or ``url``.
            confirmation_url = confirmation.get("confirmation_url") or confirmation.get("url")
        if not confirmation_url:
            logger.error("Payment gateway response has no confirmation URL: %s", data)
            raise UpstreamGatewayError()
        logger.info("Payment %s created", data.get("id"))
        return confirmation_url
