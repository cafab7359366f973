import hmac
import logging
from functools import wraps
from flask import g, request
from storefront.models.store import Store

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Store-Key"


def _lookup_store(api_key):
    if not api_key:
        return None
    store = Store.query.filter_by(api_key=api_key).first()
    if store is None or not hmac.compare_digest(store.api_key, api_key):
        return None
    return store


def require_store(view):
    """Resolve the calling store from X-Store-Key into g.store.

    Unknown or missing keys get a 401 without saying which.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        store = _lookup_store(request.headers.get(API_KEY_HEADER, ""))
        if store is None:
            logger.info("Rejected request with missing or unknown store key")
            return {"success": False, "error": "Not authenticated"}, 401
        g.store = store
        return view(*args, **kwargs)

    return wrapper
