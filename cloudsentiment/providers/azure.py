# cloudsentiment/providers/azure.py
import logging
from typing import Any, Dict, List, Optional

from cloudsentiment.exceptions import ProviderRequestError
from cloudsentiment.providers.base import HttpProvider, batched
from cloudsentiment.schemas import ProviderName

logger = logging.getLogger(__name__)

# Text Analytics v3.1 sentiment: max 10 documents per request
BATCH_SIZE = 10
SENTIMENT_PATH = "/text/analytics/v3.1/sentiment"


class AzureTextAnalyticsProvider(HttpProvider):
    name = ProviderName.AZURE
    title = "Azure Text Analytics"

    def is_configured(self) -> bool:
        return self.settings.azure_configured

    @property
    def url(self) -> str:
        return self.settings.AZURE_ENDPOINT.rstrip("/") + SENTIMENT_PATH

    async def analyze(self, language: str, sentences: List[str]) -> List[Dict[str, Any]]:
        headers = {
            "Ocp-Apim-Subscription-Key": self.settings.AZURE_KEY,
            "Content-Type": "application/json",
        }
        by_id: Dict[str, Dict[str, Any]] = {}

        async with self._client() as client:
            for offset, chunk in batched(sentences, BATCH_SIZE):
                documents = [
                    {"id": str(offset + position), "language": language, "text": sentence}
                    for position, sentence in enumerate(chunk)
                ]
                data = await self._post_json(client, self.url, headers=headers, json={"documents": documents})

                for document in data.get("documents", []):
                    by_id[document["id"]] = document

                errors = data.get("errors", [])
                if errors:
                    logger.warning("Azure rejected %d document(s): %s", len(errors), errors)
                for error in errors:
                    by_id[error["id"]] = error

        missing = [index for index in range(len(sentences)) if str(index) not in by_id]
        if missing:
            raise ProviderRequestError(self.name.value, f"no result returned for sentences {missing}")
        return [by_id[str(index)] for index in range(len(sentences))]

    @staticmethod
    def extract_score(item: Dict[str, Any]) -> Optional[Any]:
        return item.get("sentiment")
