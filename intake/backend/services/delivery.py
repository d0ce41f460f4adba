"""
Delivery Client.

Forwards a composed message to a Telegram chat through the Bot API.

Credentials are not application configuration. They are resolved on every
submission from a JSON resource that maps hostnames (and a ``default`` key)
to ``{"botToken": ..., "chatId": ...}``, so one deployment can serve several
domains with different destinations.

Failure handling:
    - config resource missing, unreadable, or malformed → empty credentials
    - empty bot token or chat id → no HTTP call, report False
    - transport error, unusable token, or non-2xx response → report False
Nothing is raised to the caller and nothing is retried.

Usage:
    source = HttpDeliveryConfigSource("https://forms.example.com/telegram-config.json")
    client = DeliveryClient(source)
    delivered = await client.send(message, hostname="forms.example.com")
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import urljoin

import httpx

from intake.backend.core.config import get_app_config, get_static_directory
from intake.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org"
DEFAULT_KEY = "default"


@dataclass(frozen=True)
class DeliveryConfig:
    """Credentials for one Telegram destination."""

    bot_token: str = ""
    chat_id: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.bot_token) and bool(self.chat_id)


class DeliveryConfigSource(Protocol):
    """Anything that can produce the raw hostname → credentials document."""

    async def load(self) -> Any:
        ...


class FileDeliveryConfigSource:
    """Reads the credentials document from a JSON file on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    async def load(self) -> Any:
        return json.loads(self.path.read_text(encoding="utf-8"))

    def __repr__(self) -> str:
        return f"FileDeliveryConfigSource({str(self.path)!r})"


class HttpDeliveryConfigSource:
    """Fetches the credentials document over HTTP, typically same-origin."""

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def load(self) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            return response.json()

    def __repr__(self) -> str:
        return f"HttpDeliveryConfigSource({self.url!r})"


def select_delivery_config(
    document: Any,
    hostname: str,
    default_key: str = DEFAULT_KEY,
) -> DeliveryConfig:
    """
    Pick the credentials entry for a hostname.

    Exact hostname match wins, then the default key. A missing or
    malformed entry yields an empty config.
    """
    if not isinstance(document, dict):
        return DeliveryConfig()

    entry = document.get(hostname)
    if entry is None:
        entry = document.get(default_key)
    if not isinstance(entry, dict):
        return DeliveryConfig()

    # chatId is commonly written as a JSON number
    bot_token = entry.get("botToken") or ""
    chat_id = entry.get("chatId") or ""
    return DeliveryConfig(bot_token=str(bot_token), chat_id=str(chat_id))


async def resolve_delivery_config(
    source: DeliveryConfigSource,
    hostname: str,
    default_key: str = DEFAULT_KEY,
) -> DeliveryConfig:
    """
    Load the credentials document and select the entry for a hostname.

    Never raises. Fetch and parse failures are logged and produce an
    empty config. Results are not cached.
    """
    try:
        document = await source.load()
    except (httpx.HTTPError, httpx.InvalidURL, OSError, ValueError) as e:
        log_with_source(
            logger,
            "delivery",
            "error",
            "Failed to load delivery config",
            config_source=repr(source),
            error=str(e),
        )
        return DeliveryConfig()

    return select_delivery_config(document, hostname, default_key)


class DeliveryClient:
    """
    Sends one message per call to the Telegram Bot API.

    Exactly one POST is attempted per ``send``. The outcome is a plain
    boolean; errors are logged, never raised.
    """

    def __init__(
        self,
        source: DeliveryConfigSource,
        api_base: str = TELEGRAM_API_BASE,
        parse_mode: str = "Markdown",
        default_key: str = DEFAULT_KEY,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.source = source
        self.api_base = api_base.rstrip("/")
        self.parse_mode = parse_mode
        self.default_key = default_key
        self.timeout = timeout
        self._transport = transport

    def _endpoint(self, bot_token: str) -> str:
        return f"{self.api_base}/bot{bot_token}/sendMessage"

    async def send(self, text: str, hostname: str) -> bool:
        """
        Deliver a message to the chat configured for ``hostname``.

        Args:
            text: Message body
            hostname: Requesting hostname, used to select credentials

        Returns:
            True if Telegram answered with a 2xx status, False otherwise
        """
        config = await resolve_delivery_config(self.source, hostname, self.default_key)
        if not config.is_complete:
            log_with_source(
                logger,
                "delivery",
                "error",
                "Delivery configuration is missing",
                hostname=hostname,
            )
            return False

        payload = {
            "chat_id": config.chat_id,
            "text": text,
            "parse_mode": self.parse_mode,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self._endpoint(config.bot_token), json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            # str(e) may embed the request URL, which carries the token
            log_with_source(
                logger,
                "delivery",
                "error",
                "Failed to send message",
                hostname=hostname,
                error_type=type(e).__name__,
            )
            return False

        if not response.is_success:
            log_with_source(
                logger,
                "delivery",
                "warning",
                "Telegram rejected message",
                hostname=hostname,
                status_code=response.status_code,
            )
            return False

        log_with_source(
            logger,
            "delivery",
            "info",
            "Message delivered",
            hostname=hostname,
            chat_id=config.chat_id,
        )
        return True


def build_config_source(base_url: str) -> DeliveryConfigSource:
    """
    Build the credentials source named in delivery.yaml.

    Args:
        base_url: The service's own origin, used for the http source. Never
            derived from request headers.
    """
    app_config = get_app_config()
    delivery = app_config.delivery

    if delivery.source == "file":
        return FileDeliveryConfigSource(get_static_directory() / delivery.path.lstrip("/"))

    return HttpDeliveryConfigSource(
        urljoin(base_url, delivery.path),
        timeout=app_config.application.timeouts.external_api,
    )


def get_delivery_client(base_url: str) -> DeliveryClient:
    """Create a delivery client whose http source is rooted at ``base_url``."""
    app_config = get_app_config()
    delivery = app_config.delivery
    return DeliveryClient(
        build_config_source(base_url),
        api_base=delivery.api_base,
        parse_mode=delivery.parse_mode,
        default_key=delivery.default_key,
        timeout=app_config.application.timeouts.external_api,
    )
