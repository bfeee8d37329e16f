"""
Payment endpoints.

Both routes are public: the site lets any visitor pay for services
or donate.  They only create the payment at YooKassa and return the
URL the browser must be redirected to.
"""

from fastapi import APIRouter

from services_catalog_api.app.schemas.payment import DonationCreate, PaymentCreate, PaymentRedirect
from services_catalog_api.app.services.payment_service import PaymentService

router = APIRouter()


@router.post("/create-payment", response_model=PaymentRedirect)
async def create_payment(payment: PaymentCreate) -> PaymentRedirect:
    """Создать платёж за выбранные услуги."""
    url = await PaymentService.create_payment(payment)
    return PaymentRedirect(confirmation_url=url)


@router.post("/create-donation", response_model=PaymentRedirect)
async def create_donation(donation: DonationCreate) -> PaymentRedirect:
    """Создать пожертвование."""
    url = await PaymentService.create_donation(donation)
    return PaymentRedirect(confirmation_url=url)
