"""
Invoice email rendering and delivery
Renders a quotation into an HTML + plain-text invoice with jinja2 and
delivers it over SMTP with aiosmtplib. One attempt per call, no retries.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate
from typing import Any, Dict, Optional

import aiosmtplib
from jinja2 import Environment, StrictUndefined, select_autoescape

from invoice_it.core.config import settings
from invoice_it.models.quotation import Quotation

logger = logging.getLogger(__name__)


class InvoiceDeliveryError(Exception):
    """Raised when the invoice email could not be handed to the SMTP server"""
    pass


@dataclass
class RenderedInvoice:
    subject: str
    html: str
    text: str


@dataclass
class DeliveryResult:
    recipient: str
    message_id: str
    sent_at: datetime


INVOICE_HTML_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; padding: 20px; background-color: #f4f4f4;">
  <h2 style="text-align: center; color: #5E17EB;">Invoice for Quotation from {{ business_name }}</h2>
  <p><strong>To:</strong> {{ customer_name }}</p>
  <p><strong>Quotation:</strong> #{{ quotation_id }} ({{ issued_on }})</p>
  <h3>Quotation Details:</h3>
  <table border="1" cellpadding="10" cellspacing="0" style="width: 100%; border-collapse: collapse;">
    <thead>
      <tr style="background-color: #5E17EB; color: white;">
        <th>Product</th>
        <th>Quantity</th>
        <th>Price</th>
        <th>Amount</th>
      </tr>
    </thead>
    <tbody>
      {%- for item in items %}
      <tr>
        <td>{{ item.product_name }}</td>
        <td>{{ item.quantity }}</td>
        <td>{{ item.price | money }}</td>
        <td>{{ item.amount | money }}</td>
      </tr>
      {%- endfor %}
    </tbody>
  </table>
  <h3 style="margin-top: 20px;">Grand Total: {{ currency }}{{ grand_total | money }}</h3>
  {%- if gstin %}
  <p>GSTIN: {{ gstin }}</p>
  {%- endif %}
  <p>If you have any questions, please feel free to contact us.</p>
  <p>Thank you for doing business with us!</p>
</div>
"""

INVOICE_TEXT_TEMPLATE = """\
Invoice for Quotation #{{ quotation_id }} from {{ business_name }}
To: {{ customer_name }}

{% for item in items -%}
{{ item.product_name }}: {{ item.quantity }} x {{ item.price | money }} = {{ item.amount | money }}
{% endfor %}
Grand Total: {{ currency }}{{ grand_total | money }}
{%- if gstin %}
GSTIN: {{ gstin }}
{%- endif %}

If you have any questions, please feel free to contact us.
Thank you for doing business with us!
"""


def _money(value: Any) -> str:
    return f"{Decimal(str(value)):.2f}"


_html_env = Environment(
    autoescape=select_autoescape(default=True, default_for_string=True),
    undefined=StrictUndefined,
)
_html_env.filters["money"] = _money

_text_env = Environment(autoescape=False, undefined=StrictUndefined)
_text_env.filters["money"] = _money

_html_template = _html_env.from_string(INVOICE_HTML_TEMPLATE)
_text_template = _text_env.from_string(INVOICE_TEXT_TEMPLATE)


def _invoice_context(quotation: Quotation) -> Dict[str, Any]:
    issued = quotation.created_at
    return {
        "quotation_id": quotation.id,
        "issued_on": issued.strftime("%d %b %Y") if issued else "",
        "business_name": quotation.owner.business_name,
        "gstin": quotation.owner.gstin,
        "customer_name": quotation.customer.name,
        "items": quotation.items,
        "grand_total": quotation.grand_total,
        "currency": settings.CURRENCY_SYMBOL,
    }


def render_invoice(quotation: Quotation) -> RenderedInvoice:
    """
    Render the invoice for a quotation

    Args:
        quotation: Quotation with owner, customer and items loaded

    Returns:
        Subject line plus HTML and plain-text bodies
    """
    context = _invoice_context(quotation)
    return RenderedInvoice(
        subject=f"Invoice for Quotation #{quotation.id}",
        html=_html_template.render(**context),
        text=_text_template.render(**context),
    )


def build_message(invoice: RenderedInvoice, recipient: str, sender: str, sender_name: Optional[str] = None) -> MIMEMultipart:
    """Assemble the multipart/alternative email for an invoice"""
    msg = MIMEMultipart('alternative')
    msg['Subject'] = invoice.subject
    msg['From'] = formataddr((sender_name, sender)) if sender_name else sender
    msg['To'] = recipient
    msg['Date'] = formatdate(localtime=True)
    msg['Message-ID'] = f"<{uuid.uuid4()}@{sender.rsplit('@', 1)[-1]}>"

    # Plain text first so clients prefer the HTML part
    msg.attach(MIMEText(invoice.text, 'plain', 'utf-8'))
    msg.attach(MIMEText(invoice.html, 'html', 'utf-8'))
    return msg


async def _send_smtp(msg: MIMEMultipart) -> None:
    """
    Deliver a message with the configured SMTP server.
    Implicit TLS on 465, STARTTLS on 587.
    """
    port = settings.SMTP_PORT
    smtp = aiosmtplib.SMTP(
        hostname=settings.SMTP_HOST,
        port=port,
        timeout=settings.SMTP_TIMEOUT,
        use_tls=port == 465,
        start_tls=True if port == 587 else None,
    )

    await smtp.connect()
    try:
        if settings.SMTP_USER and settings.SMTP_PASSWORD:
            await smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        await smtp.send_message(msg)
    finally:
        if smtp.is_connected:
            await smtp.quit()


async def send_invoice_email(quotation: Quotation) -> DeliveryResult:
    """
    Render and email the invoice for a quotation to its customer

    Raises:
        InvoiceDeliveryError: sender is not configured or SMTP delivery failed
    """
    sender = settings.FROM_EMAIL or settings.SMTP_USER
    if not sender:
        raise InvoiceDeliveryError("No sender address configured (FROM_EMAIL or SMTP_USER)")

    recipient = quotation.customer.email
    invoice = render_invoice(quotation)
    msg = build_message(invoice, recipient, sender, sender_name=quotation.owner.business_name)

    try:
        await _send_smtp(msg)
    except (aiosmtplib.SMTPException, OSError) as e:
        logger.error(f"Invoice for quotation {quotation.id} to {recipient} failed: {e}")
        raise InvoiceDeliveryError(f"SMTP delivery failed: {e}") from e

    logger.info(f"Invoice for quotation {quotation.id} sent to {recipient}")
    return DeliveryResult(recipient=recipient, message_id=msg['Message-ID'], sent_at=datetime.now(timezone.utc))
