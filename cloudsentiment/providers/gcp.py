# cloudsentiment/providers/gcp.py
import logging
from typing import Any, Dict, List, Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import language_v1

from cloudsentiment.exceptions import ProviderRequestError
from cloudsentiment.providers.base import BaseProvider
from cloudsentiment.schemas import ProviderName

logger = logging.getLogger(__name__)


class NaturalLanguageProvider(BaseProvider):
    name = ProviderName.GCP
    title = "Google Cloud Natural Language"

    def __init__(self, settings, client=None):
        super().__init__(settings)
        self._client = client
        self._owns_client = False

    def is_configured(self) -> bool:
        return self.settings.gcp_configured

    def _get_client(self):
        if self._client is None:
            credentials_file = str(self.settings.GOOGLE_APPLICATION_CREDENTIALS)
            try:
                self._client = language_v1.LanguageServiceAsyncClient.from_service_account_file(credentials_file)
                self._owns_client = True
            except (GoogleAuthError, ValueError) as e:
                logger.error("Cannot load Google credentials from %s: %s", credentials_file, e)
                raise ProviderRequestError(self.name.value, f"invalid credentials file: {e}")
        return self._client

    async def analyze(self, language: str, sentences: List[str]) -> List[Dict[str, Any]]:
        client = self._get_client()
        results = []
        try:
            # API принимает один документ за запрос, поэтому идём по предложениям
            for sentence in sentences:
                document = language_v1.Document(
                    content=sentence,
                    type_=language_v1.Document.Type.PLAIN_TEXT,
                    language=language,
                )
                try:
                    # retry=None отключает повторы GAPIC по умолчанию
                    response = await client.analyze_sentiment(document=document, retry=None)
                except GoogleAPIError as e:
                    logger.error("Natural Language request error: %s", e)
                    raise ProviderRequestError(self.name.value, str(e), status_code=getattr(e, "code", None))
                results.append(language_v1.AnalyzeSentimentResponse.to_dict(response))
        finally:
            if self._owns_client:
                # gRPC channel must be closed while the event loop is still running
                await client.transport.close()
                self._client = None
                self._owns_client = False
        return results

    @staticmethod
    def extract_score(item: Dict[str, Any]) -> Optional[Any]:
        return (item.get("document_sentiment") or {}).get("score")
