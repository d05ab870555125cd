from functools import lru_cache
import logging

from app.core.config import settings
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.calendar import CalendarPort
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.application.ports.payment_order_store import PaymentOrderStorePort
from app.application.use_cases.create_booking import CreateBookingUseCase
from app.application.use_cases.payment_order import PaymentOrderUseCase
from app.application.utils.checksum import ChecksumSigner
from app.infrastructure.calendar.google_calendar_client import GoogleCalendar
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.payments.mock_gateway import MockPaymentGateway
from app.infrastructure.payments.phonepe_client import PhonePeGateway
from app.infrastructure.store.json_store import JsonBookingStore
from app.infrastructure.store.memory_store import MemoryBookingStore, MemoryPaymentOrderStore


_MOCK_MERCHANT_KEY = "mock-merchant-key"


@lru_cache
def get_calendar() -> CalendarPort:
    if settings.CALENDAR_PROVIDER.lower() == "mock":
        return MockCalendar()
    return GoogleCalendar()


@lru_cache
def get_booking_store() -> BookingStorePort:
    if settings.BOOKING_STORE_PROVIDER.lower() == "memory":
        return MemoryBookingStore()
    return JsonBookingStore(path=settings.BOOKING_STORE_PATH)


@lru_cache
def get_payment_order_store() -> PaymentOrderStorePort:
    return MemoryPaymentOrderStore()


def _is_dev() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


@lru_cache
def get_payment_gateway() -> PaymentGatewayPort:
    logger = logging.getLogger(__name__)
    if not settings.PHONEPE_MERCHANT_KEY:
        if _is_dev():
            logger.info("Using MockPaymentGateway (merchant key missing, ENV=dev/local)")
            return MockPaymentGateway()
        raise ValueError("PHONEPE_MERCHANT_KEY is required to initiate payments.")

    logger.info("Using PhonePeGateway base_url=%s", settings.PHONEPE_BASE_URL)
    return PhonePeGateway(
        merchant_id=settings.PHONEPE_MERCHANT_ID,
        base_url=settings.PHONEPE_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


def get_checksum_signer() -> ChecksumSigner:
    secret = settings.PHONEPE_MERCHANT_KEY or (_MOCK_MERCHANT_KEY if _is_dev() else "")
    return ChecksumSigner(secret=secret, key_index=settings.PHONEPE_KEY_INDEX)


def get_create_booking_use_case() -> CreateBookingUseCase:
    return CreateBookingUseCase(calendar=get_calendar(), store=get_booking_store())


def get_payment_order_use_case() -> PaymentOrderUseCase:
    return PaymentOrderUseCase(
        gateway=get_payment_gateway(),
        signer=get_checksum_signer(),
        store=get_payment_order_store(),
        merchant_id=settings.PHONEPE_MERCHANT_ID,
        redirect_url=settings.PHONEPE_REDIRECT_URL,
        success_url=settings.PHONEPE_SUCCESS_URL,
        failure_url=settings.PHONEPE_FAILURE_URL,
    )
