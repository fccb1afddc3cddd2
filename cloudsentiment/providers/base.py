# cloudsentiment/providers/base.py
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import httpx

from cloudsentiment.exceptions import ProviderRequestError
from cloudsentiment.schemas import ProviderName
from cloudsentiment.settings import Settings

logger = logging.getLogger(__name__)


def batched(items: Sequence[str], size: int) -> Iterator[Tuple[int, List[str]]]:
    """Yield (offset, chunk) pairs covering items in order."""
    for offset in range(0, len(items), size):
        yield offset, list(items[offset:offset + size])


class BaseProvider(ABC):
    name: ProviderName
    title: str

    def __init__(self, settings: Settings):
        self.settings = settings

    @abstractmethod
    def is_configured(self) -> bool:
        """True when every credential the provider needs is present."""
        raise NotImplementedError

    @abstractmethod
    async def analyze(self, language: str, sentences: List[str]) -> List[Dict[str, Any]]:
        """
        Выполняет анализ предложений и возвращает "сырые" данные провайдера.
        Ровно одна запись на каждое предложение, в исходном порядке; формат
        записи определяется API провайдера. Любая ошибка запроса поднимается
        как ProviderRequestError.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def extract_score(item: Dict[str, Any]) -> Optional[Any]:
        """Pull the single report value out of one per-sentence entry."""
        raise NotImplementedError


class HttpProvider(BaseProvider):
    """Provider talking to a plain JSON REST endpoint through httpx."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(settings)
        self.timeout = settings.REQUEST_TIMEOUT
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # Повторные попытки отключены: первая же ошибка останавливает запуск
        transport = self._transport or httpx.AsyncHTTPTransport(retries=0)
        return httpx.AsyncClient(transport=transport, timeout=self.timeout)

    def _fail(self, message: str, status_code: Optional[int] = None) -> ProviderRequestError:
        return ProviderRequestError(self.name.value, message, status_code=status_code)

    async def _post_json(self, client: httpx.AsyncClient, url: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await client.post(url, **kwargs)
        except httpx.TimeoutException:
            logger.error("Request to %s timed out", self.title)
            raise self._fail("request timed out")
        except httpx.RequestError as e:
            logger.error("Request error: %s", e)
            raise self._fail(f"service unavailable ({e})")

        status = response.status_code
        # Попытка безопасно получить тело (json или текст)
        try:
            data = response.json()
            body_preview = str(data)
        except ValueError:
            data = None
            body_preview = response.text[:1000]

        logger.debug("%s response | status=%s body_preview=%s", self.title, status, body_preview)

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            logger.warning("%s rate limited (429). Retry-After=%s body=%s", self.title, retry_after, body_preview)
            raise self._fail(f"rate limit exceeded. Retry-After: {retry_after or 'unknown'}", status)

        if 400 <= status < 500:
            provider_msg = _error_message(data)
            logger.error("%s client error: %s | body=%s", self.title, status, body_preview)
            raise self._fail(f"client error: {provider_msg or status}", status)

        if status >= 500:
            logger.error("%s server error: %s | body=%s", self.title, status, body_preview)
            raise self._fail(f"server error: {status}", status)

        if not isinstance(data, dict):
            logger.error("Unexpected response format from %s: %s", self.title, body_preview)
            raise self._fail("invalid response body", status)

        return data


def _error_message(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if isinstance(err, dict):
        return err.get("message") or err.get("code")
    if err:
        return str(err)
    return data.get("message")
