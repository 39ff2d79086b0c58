"""
Payment links: the manual confirmation path and debug pay links for local
testing without a payment gateway.
"""

import hashlib
import hmac
from typing import Optional
from urllib.parse import urlencode

from repairconnect.config.settings import settings


def manual_confirmation_path(invoice_id: int) -> str:
    """Where an invoice party confirms a payment made outside the gateway."""
    return f"{settings.API_PREFIX}/invoices/{invoice_id}/pay"


def make_debug_token(invoice_id: int, secret: Optional[str] = None) -> Optional[str]:
    """HMAC of the invoice id under the shared debug secret, if one is set."""
    secret = secret if secret is not None else settings.INVOICE_DEBUG_SECRET
    if not secret:
        return None
    return hmac.new(
        secret.encode(), str(invoice_id).encode(), hashlib.sha256
    ).hexdigest()


def verify_debug_token(
    invoice_id: int, token: Optional[str], secret: Optional[str] = None
) -> bool:
    expected = make_debug_token(invoice_id, secret)
    if expected is None:
        return True
    return bool(token) and hmac.compare_digest(expected, token)


def build_debug_url(invoice_id: int) -> str:
    url = (
        f"{settings.PUBLIC_BASE_URL.rstrip('/')}{settings.API_PREFIX}"
        f"/payments/debug/invoices/{invoice_id}/pay"
    )
    token = make_debug_token(invoice_id)
    if token:
        url = f"{url}?{urlencode({'token': token})}"
    return url
