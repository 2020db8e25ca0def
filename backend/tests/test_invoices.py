import asyncio
from email import message_from_string

import aiosmtplib
import pytest

from invoice_it.api.api_v1.endpoints import quotations as quotations_endpoint
from invoice_it.models.customer import Customer
from invoice_it.models.quotation import Quotation, QuotationItem
from invoice_it.models.user import User
from invoice_it.services import invoice_mailer
from invoice_it.services.invoice_mailer import (
    DeliveryResult, InvoiceDeliveryError, render_invoice, send_invoice_email
)

from tests.helpers import create_customer, create_product


def _quotation(product_name="Steel Rack"):
    quotation = Quotation(
        id=7,
        owner=User(
            name="Asha Verma",
            email="asha@verma-traders.in",
            password_hash="x",
            business_name="Verma & Sons",
            gstin="27AAPFU0939F1ZV",
        ),
        customer=Customer(name="Meera Shah", email="meera@shah-exports.in"),
        items=[
            QuotationItem.snapshot(product_id=1, product_name=product_name, quantity=2, price="2400"),
            QuotationItem.snapshot(product_id=2, product_name="Bin", quantity=3, price="120.5"),
        ],
    )
    quotation.recalculate_total()
    return quotation


class FakeSMTP:
    sent = []
    fail_with = None

    def __init__(self, **kwargs):
        self.options = kwargs
        self.is_connected = False

    async def connect(self):
        self.is_connected = True

    async def login(self, username, password):
        pass

    async def send_message(self, msg):
        if FakeSMTP.fail_with:
            raise FakeSMTP.fail_with
        FakeSMTP.sent.append((self.options, msg))

    async def quit(self):
        self.is_connected = False


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.sent = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr(invoice_mailer.aiosmtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def test_render_invoice_lists_lines_and_total():
    invoice = render_invoice(_quotation())

    assert invoice.subject == "Invoice for Quotation #7"
    assert "Verma &amp; Sons" in invoice.html
    assert "Meera Shah" in invoice.html
    assert "<td>4800.00</td>" in invoice.html
    assert "<td>361.50</td>" in invoice.html
    assert "Grand Total: ₹5161.50" in invoice.html
    assert "GSTIN: 27AAPFU0939F1ZV" in invoice.html

    assert "Steel Rack: 2 x 2400.00 = 4800.00" in invoice.text
    assert "Verma & Sons" in invoice.text


def test_render_invoice_escapes_html():
    invoice = render_invoice(_quotation(product_name="<script>alert(1)</script>"))
    assert "<script>" not in invoice.html
    assert "&lt;script&gt;" in invoice.html


def test_send_invoice_email_builds_message(fake_smtp):
    result = asyncio.run(send_invoice_email(_quotation()))

    assert isinstance(result, DeliveryResult)
    assert result.recipient == "meera@shah-exports.in"
    assert result.sent_at.tzinfo is not None

    options, msg = fake_smtp.sent[0]
    assert options["port"] == 465
    assert options["use_tls"] is True
    assert msg["To"] == "meera@shah-exports.in"
    assert msg["Subject"] == "Invoice for Quotation #7"
    assert "billing@invoice-it.io" in msg["From"]

    parsed = message_from_string(msg.as_string())
    assert [part.get_content_type() for part in parsed.get_payload()] == ["text/plain", "text/html"]


def test_send_invoice_email_wraps_smtp_errors(fake_smtp):
    fake_smtp.fail_with = aiosmtplib.SMTPRecipientsRefused([])
    with pytest.raises(InvoiceDeliveryError):
        asyncio.run(send_invoice_email(_quotation()))


@pytest.fixture
def quotation_id(user_client):
    customer = create_customer(user_client)
    product = create_product(user_client)
    resp = user_client.post("/api/v1/quotations/", json={
        "customer_id": customer["id"],
        "items": [{"product_id": product["id"], "quantity": 2}],
    })
    return resp.json()["id"]


def test_send_invoice_endpoint(user_client, quotation_id, monkeypatch):
    sent = []

    async def fake_send(quotation):
        sent.append(quotation)
        return DeliveryResult(recipient=quotation.customer.email, message_id="<1@test>", sent_at=None)

    monkeypatch.setattr(quotations_endpoint, "send_invoice_email", fake_send)

    resp = user_client.post(f"/api/v1/quotations/{quotation_id}/send-invoice")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Invoice sent successfully"
    assert resp.json()["recipient"] == "meera@shah-exports.in"
    assert sent[0].id == quotation_id
    assert float(sent[0].grand_total) == 4998.0


def test_send_invoice_renders_through_smtp(user_client, quotation_id, fake_smtp):
    resp = user_client.post(f"/api/v1/quotations/{quotation_id}/send-invoice")
    assert resp.status_code == 200

    _, msg = fake_smtp.sent[0]
    assert msg["To"] == "meera@shah-exports.in"
    assert msg["Subject"] == f"Invoice for Quotation #{quotation_id}"


def test_send_invoice_delivery_failure(user_client, quotation_id, fake_smtp):
    fake_smtp.fail_with = aiosmtplib.SMTPServerDisconnected("gone")
    resp = user_client.post(f"/api/v1/quotations/{quotation_id}/send-invoice")
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to send invoice"


def test_send_invoice_is_tenant_scoped(other_client, quotation_id, fake_smtp):
    resp = other_client.post(f"/api/v1/quotations/{quotation_id}/send-invoice")
    assert resp.status_code == 404
    assert fake_smtp.sent == []


def test_send_invoice_requires_authentication(client):
    assert client.post("/api/v1/quotations/1/send-invoice").status_code == 401
