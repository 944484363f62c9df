#!/usr/bin/env python3
"""Generate one invoice end to end against the in-process mock booking store.

Uses the real template, PDF conversion and local storage backend, so it
needs no booking service, bucket or database server.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
import tempfile
from typing import Any, Dict

from fastapi.testclient import TestClient


def _configure_environment(storage_dir: str) -> None:
    os.environ["HYPERINVOICE_USE_MOCK_DATA"] = "true"
    os.environ["HYPERINVOICE_STORAGE_BACKEND"] = "local"
    os.environ["HYPERINVOICE_LOCAL_STORAGE_PATH"] = storage_dir
    os.environ["HYPERINVOICE_STORAGE_PUBLIC_BASE_URL"] = "http://testserver"
    os.environ["HYPERINVOICE_DATABASE_URL"] = f"sqlite:///{os.path.join(storage_dir, 'invoices.db')}"


def run_smoke_test(booking_id: int, storage_dir: str) -> Dict[str, Any]:
    """Call ``/api/invoices/generate`` and download the resulting PDF."""

    _configure_environment(storage_dir)

    from hyperinvoice.config import get_settings
    from hyperinvoice.dependencies import services
    from hyperinvoice.main import app

    # Ensure configuration changes are respected between runs.
    get_settings.cache_clear()
    services.get_uploader_cached.cache_clear()
    services.get_repository_cached.cache_clear()

    with TestClient(app) as client:
        response = client.post("/api/invoices/generate", json={"bookingId": booking_id})
        if response.status_code != 201:
            raise RuntimeError(
                f"Invoice generation failed ({response.status_code}): {response.text}"
            )
        payload: Dict[str, Any] = response.json()

        download = client.get(payload["documentUrl"].replace("http://testserver", ""))
        if download.status_code != 200 or not download.content.startswith(b"%PDF"):
            raise RuntimeError(f"Download failed ({download.status_code})")

    print("Invoice response:")
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    print(f"\nPDF size: {len(download.content)} bytes")
    print(f"Content-Disposition: {download.headers.get('content-disposition')}")
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Run a smoke test of the invoice pipeline using seeded mock bookings "
            "and local file storage."
        )
    )
    parser.add_argument(
        "--booking-id",
        type=int,
        default=42,
        help="Seeded booking to invoice (42, 43 or 44).",
    )
    parser.add_argument(
        "--storage-dir",
        default=None,
        help="Directory for generated PDFs; a temporary directory by default.",
    )

    args = parser.parse_args(argv)
    storage_dir = args.storage_dir or tempfile.mkdtemp(prefix="hyperinvoice-")

    try:
        run_smoke_test(args.booking_id, storage_dir)
    except Exception as exc:  # pragma: no cover - manual diagnostic utility
        print(f"Smoke test failed: {exc}", file=sys.stderr)
        return 1

    print(f"\nSmoke test completed successfully. Files in {storage_dir}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual diagnostic utility
    raise SystemExit(main())
