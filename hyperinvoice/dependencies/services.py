from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from hyperinvoice.clients.booking import BookingServiceClient
from hyperinvoice.config import Settings, StorageBackend, get_settings
from hyperinvoice.db.session import build_engine, build_session_factory, init_db
from hyperinvoice.services import (
    BookingGateway,
    DocumentRenderer,
    InvoiceRepository,
    InvoiceService,
)
from hyperinvoice.services.mock_store import get_mock_store
from hyperinvoice.services.observability import LoggingPipelineObserver
from hyperinvoice.services.storage import (
    LocalObjectStoreUploader,
    ObjectStoreUploader,
    S3ObjectStoreUploader,
)


@lru_cache(maxsize=1)
def get_booking_client_cached() -> BookingServiceClient:
    settings = get_settings()
    return BookingServiceClient(
        str(settings.booking_service_base_url),
        timeout=settings.booking_service_timeout,
        token=settings.booking_service_token,
    )


@lru_cache(maxsize=1)
def get_renderer_cached() -> DocumentRenderer:
    return DocumentRenderer()


@lru_cache(maxsize=1)
def get_uploader_cached() -> ObjectStoreUploader:
    settings = get_settings()
    if settings.storage_backend is StorageBackend.LOCAL:
        return LocalObjectStoreUploader(
            settings.local_storage_path,
            namespace=settings.storage_namespace,
            force_download=settings.storage_force_download,
            public_base_url=settings.storage_public_base_url,
        )
    return S3ObjectStoreUploader(
        settings.aws_s3_bucket,
        region=settings.aws_region,
        namespace=settings.storage_namespace,
        force_download=settings.storage_force_download,
        public_base_url=settings.storage_public_base_url,
        access_key_id=settings.aws_access_key_id,
        secret_access_key=settings.aws_secret_access_key,
    )


@lru_cache(maxsize=1)
def get_repository_cached() -> InvoiceRepository | None:
    settings = get_settings()
    if not settings.persist_invoices:
        return None
    engine = build_engine(settings.database_url)
    init_db(engine)
    return InvoiceRepository(build_session_factory(engine))


def get_booking_gateway(settings: Settings = Depends(get_settings)) -> BookingGateway:
    if settings.use_mock_data:
        return BookingGateway(None, mock_store=get_mock_store())
    return BookingGateway(get_booking_client_cached())


def get_invoice_service(
    settings: Settings = Depends(get_settings),
    gateway: BookingGateway = Depends(get_booking_gateway),
) -> InvoiceService:
    return InvoiceService(
        gateway,
        get_renderer_cached(),
        get_uploader_cached(),
        repository=get_repository_cached(),
        observer=LoggingPipelineObserver(),
        amount_policy=settings.amount_policy,
        issuer_name=settings.issuer_name,
        default_currency=settings.default_currency,
        template_name=settings.template_name,
    )
