"""API client for the negotiator HTTP API."""

import logging

import httpx

from .config import CLIConfig

logger = logging.getLogger(__name__)


class NegotiatorAPIError(Exception):
    """Raised when the API answers with a non-200 status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class NegotiatorAPIClient:
    """Client for the carrier catalog and negotiation chat endpoints."""

    def __init__(
        self,
        config: CLIConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.client = httpx.AsyncClient(timeout=config.timeout, transport=transport)

    async def list_carriers(self) -> list[dict]:
        """Return the catalog as a list of ``{"label", "value"}`` dicts."""
        response = await self.client.get(self.config.carriers_url)
        self._raise_for_status(response)
        return response.json()["carriers"]

    async def chat(
        self, carrier: str, chat_history: list[dict], message: str
    ) -> str:
        """Send one chat turn and return the assistant reply."""
        payload = {
            "carrier_url": carrier,
            "chat_history": chat_history,
            "message": message,
        }
        logger.debug(
            "POST %s with %d history turns",
            self.config.chat_url,
            len(chat_history),
        )

        response = await self.client.post(self.config.chat_url, json=payload)
        self._raise_for_status(response)
        return response.json()["response"]

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        logger.debug("Response status: %s", response.status_code)
        if response.status_code != 200:
            raise NegotiatorAPIError(response.status_code, response.text)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
