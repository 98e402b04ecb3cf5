"""OpenRouter chat-completions client used for narrative insights."""

import httpx
import structlog

from ..config import settings

logger = structlog.get_logger()

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
COMPLETIONS_PATH = "/chat/completions"


def extract_message(data: dict) -> str:
    """Return the first choice's message text from a completions response."""
    try:
        return data["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError) as e:
        logger.error("Unexpected OpenRouter response", error=repr(e))
        raise ValueError(f"Unexpected OpenRouter response: {e!r}") from e


class OpenRouterClient:
    """Single-turn chat client.

    Use as an async context manager so the connection pool is closed.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        key = api_key or settings.openrouter_api_key
        if not key:
            raise ValueError(
                "No OpenRouter API key configured. Set AUDIT_OPENROUTER_API_KEY or pass api_key."
            )

        self.model = model or settings.ai_model
        self._http = httpx.AsyncClient(
            base_url=OPENROUTER_BASE_URL,
            timeout=httpx.Timeout(settings.ai_timeout, connect=10.0),
            transport=transport,
            headers={"Authorization": f"Bearer {key}", "X-Title": "SEO Audit Insights"},
        )

    async def complete(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """
        Send one user prompt and return the reply text.

        Raises:
            httpx.HTTPError: On transport failures and error statuses
            ValueError: If the response body is not a completions payload
        """
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens or settings.ai_max_tokens,
            "temperature": settings.ai_temperature if temperature is None else temperature,
        }

        response = await self._http.post(COMPLETIONS_PATH, json=payload)
        if response.is_error:
            logger.error(
                "OpenRouter returned an error",
                status_code=response.status_code,
                body=response.text[:500],
            )
            response.raise_for_status()

        logger.debug("OpenRouter reply received", model=self.model, status_code=response.status_code)
        return extract_message(response.json())

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "OpenRouterClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
