"""Pytest configuration and fixtures for the Payment Method API tests.

This module provides reusable fixtures for testing:
- DynamoDB mocking with moto
- A recording event delivery and a ticking clock for deterministic services
- Sample PaymentMethod payloads
"""

import datetime as dt
import itertools
import os
from collections.abc import Callable
from typing import Any, Generator

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ["DYNAMODB_TABLE_PREFIX"] = "test-tmf670"
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

TABLE_PREFIX = "test-tmf670"
BASE_PATH = "/tmf-api/paymentMethod/v4"


# === Singleton Reset ===


@pytest.fixture(autouse=True)
def reset_service_singletons() -> Generator[None, None, None]:
    """Reset cached services, settings and the DynamoDB singleton.

    Tests using mock_aws get a fresh service instance inside the mock
    context rather than one created by a previous test.
    """
    from tmf_api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


# === DynamoDB Fixtures ===


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


@pytest.fixture
def dynamodb_tables(aws_credentials: None) -> Generator[Any, None, None]:
    """Create all tables inside a moto context and yield the client."""
    from tmf_shared.tables import create_tables

    with mock_aws():
        client = boto3.client("dynamodb", region_name="eu-west-1")
        create_tables(client, TABLE_PREFIX)
        yield client


@pytest.fixture
def db(dynamodb_tables: Any) -> Any:
    """DynamoDBService bound to the mocked tables."""
    from tmf_shared.services.dynamodb import DynamoDBService

    return DynamoDBService(TABLE_PREFIX)


# === Notification Fixtures ===


class RecordingDelivery:
    """Event delivery that keeps every (listener, event) pair."""

    def __init__(self) -> None:
        self.delivered: list[tuple[Any, Any]] = []

    def deliver(self, listener: Any, event: Any) -> None:
        self.delivered.append((listener, event))

    def events_of(self, event_type: Any) -> list[Any]:
        return [event for _, event in self.delivered if event.event_type == event_type]


@pytest.fixture
def recording_delivery() -> RecordingDelivery:
    return RecordingDelivery()


@pytest.fixture
def ticking_clock() -> Callable[[], dt.datetime]:
    """Clock that advances one second per call."""
    start = dt.datetime(2026, 1, 1, 12, 0, tzinfo=dt.UTC)
    counter = itertools.count()
    return lambda: start + dt.timedelta(seconds=next(counter))


# === Service / App Fixtures ===


@pytest.fixture
def payment_method_service(
    db: Any, recording_delivery: RecordingDelivery, ticking_clock: Callable[[], dt.datetime]
) -> Any:
    """PaymentMethodService wired to mocked tables and recording delivery."""
    from tmf_shared.services.listener_service import ListenerService
    from tmf_shared.services.notification import NotificationDispatcher
    from tmf_shared.services.payment_method_service import PaymentMethodService

    notifier = NotificationDispatcher(
        ListenerService(db), delivery=recording_delivery, clock=ticking_clock
    )
    return PaymentMethodService(db, notifier, BASE_PATH, clock=ticking_clock)


@pytest.fixture
def client(payment_method_service: Any) -> Generator[Any, None, None]:
    """TestClient for the app, with the recording PaymentMethodService."""
    from fastapi.testclient import TestClient

    from tmf_api.dependencies import get_payment_method_service
    from tmf_api.main import create_app

    app = create_app()
    app.dependency_overrides[get_payment_method_service] = lambda: payment_method_service
    with TestClient(app) as test_client:
        yield test_client


# === Sample Data Fixtures ===


@pytest.fixture
def bank_card_payload() -> dict[str, Any]:
    """Complete BankCard creation payload."""
    return {
        "@type": "BankCard",
        "name": "Corporate Visa",
        "description": "Card for travel expenses",
        "cardNumber": "4111111111111111",
        "brand": "Visa",
        "expirationDate": "2028-12",
        "nameOnCard": "Jane Doe",
    }


@pytest.fixture
def digital_wallet_payload() -> dict[str, Any]:
    """Complete DigitalWallet creation payload."""
    return {
        "@type": "DigitalWallet",
        "name": "PayPal",
        "service": "PayPal",
        "walletId": "jane@example.com",
    }


@pytest.fixture
def check_payload() -> dict[str, Any]:
    """Complete Check creation payload."""
    return {
        "@type": "Check",
        "name": "Rent check",
        "checkId": "CHK-0001",
        "drawer": "Jane Doe",
        "payee": "ACME Properties",
        "signedDate": "2026-01-15",
        "bank": "First Bank",
    }
