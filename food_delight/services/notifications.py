"""Order confirmation emails sent through the SendGrid v3 HTTP API.

Sending is best effort: every provider problem surfaces as ``SendFailure``
so the caller can report a degraded success instead of failing the order.
httpx timeouts apply per phase, so the whole exchange runs on a worker
thread and the caller waits at most ``MAIL_TIMEOUT_SECONDS`` for it.
"""

import concurrent.futures
import logging
from html import escape

import httpx

from food_delight.core import config
from food_delight.core.errors import SendFailure
from food_delight.services.orders import OrderItem

logger = logging.getLogger(__name__)

CONFIRMATION_SUBJECT = 'Your Food Delight Order Confirmation'

_mail_executor = concurrent.futures.ThreadPoolExecutor(max_workers=4, thread_name_prefix='mail')


def _money(value: float) -> str:
    return f'${value:.2f}'


def _render_item(item: OrderItem) -> str:
    image = ''
    if item.image:
        image = (
            f'<img src="{escape(item.image)}" alt="{escape(item.title)}" '
            'style="width: 50px; height: 50px;">'
        )
    return (
        f'<li>{image}'
        f'<p>{escape(item.title)} - {_money(item.price)} x {item.quantity} = {_money(item.line_total)}</p>'
        '</li>'
    )


def render_confirmation(items: list[OrderItem], total: float) -> tuple[str, str]:
    item_list = ''.join(_render_item(item) for item in items)
    html = (
        '<h2>Thank you for your order!</h2>'
        '<h3>Order Details:</h3>'
        f'<ul>{item_list}</ul>'
        f'<p><strong>Total: {_money(total)}</strong></p>'
        '<p>We will process your order soon!</p>'
    )
    return CONFIRMATION_SUBJECT, html


def build_mail_payload(to_email: str, subject: str, html: str) -> dict:
    return {
        'personalizations': [{'to': [{'email': to_email}]}],
        'from': {'email': config.MAIL_FROM_ADDRESS},
        'subject': subject,
        'content': [{'type': 'text/html', 'value': html}],
    }


def _post_message(payload: dict, headers: dict, client: httpx.Client | None) -> None:
    http = client or httpx.Client(timeout=config.MAIL_TIMEOUT_SECONDS)
    try:
        response = http.post(config.SENDGRID_API_URL, json=payload, headers=headers)
        response.raise_for_status()
    finally:
        if client is None:
            http.close()


def send_email(to_email: str, subject: str, html: str, client: httpx.Client | None = None) -> None:
    if not config.SENDGRID_API_KEY:
        raise SendFailure('Mail provider is not configured')

    headers = {'Authorization': f'Bearer {config.SENDGRID_API_KEY}'}
    payload = build_mail_payload(to_email, subject, html)
    future = _mail_executor.submit(_post_message, payload, headers, client)
    try:
        future.result(timeout=config.MAIL_TIMEOUT_SECONDS)
    except (concurrent.futures.TimeoutError, httpx.TimeoutException) as exc:
        future.cancel()
        logger.warning('Mail provider timed out after %ss sending to %s', config.MAIL_TIMEOUT_SECONDS, to_email)
        raise SendFailure('Mail provider timed out') from exc
    except httpx.HTTPStatusError as exc:
        logger.warning('Mail provider rejected message to %s with status %s', to_email, exc.response.status_code)
        raise SendFailure('Mail provider rejected the message') from exc
    except httpx.HTTPError as exc:
        logger.warning('Could not reach mail provider sending to %s: %s', to_email, exc)
        raise SendFailure() from exc


def send_confirmation(to_email: str, items: list[OrderItem], total: float, client: httpx.Client | None = None) -> None:
    subject, html = render_confirmation(items, total)
    logger.info('Sending order confirmation to %s', to_email)
    logger.debug('Confirmation email body: %s', html)
    send_email(to_email, subject, html, client=client)
