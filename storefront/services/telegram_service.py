import logging
import httpx
from flask import current_app

logger = logging.getLogger(__name__)

BASE_URL = "https://api.telegram.org/bot{token}/{method}"


def _url(method):
    return BASE_URL.format(token=current_app.config["TELEGRAM_BOT_TOKEN"], method=method)


def _post(method, **kwargs):
    """Make a POST request to Telegram Bot API."""
    resp = httpx.post(_url(method), **kwargs)
    data = resp.json()
    if not data.get("ok"):
        logger.error("Telegram API error: %s", data)
        raise RuntimeError(f"Telegram API error: {data.get('description', 'unknown')}")
    return data.get("result")


def send_message(chat_id, text, parse_mode=None):
    payload = {"chat_id": chat_id, "text": text}
    if parse_mode:
        payload["parse_mode"] = parse_mode
    return _post("sendMessage", data=payload)
