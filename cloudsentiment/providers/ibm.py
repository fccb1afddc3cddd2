# cloudsentiment/providers/ibm.py
import logging
from typing import Any, Dict, List, Optional

from cloudsentiment.providers.base import HttpProvider
from cloudsentiment.schemas import ProviderName

logger = logging.getLogger(__name__)


class WatsonNLUProvider(HttpProvider):
    """IBM Watson Natural Language Understanding, one request per sentence."""

    name = ProviderName.IBM
    title = "IBM Watson NLU"

    def is_configured(self) -> bool:
        return self.settings.ibm_configured

    @property
    def url(self) -> str:
        return self.settings.IBM_WATSON_URL.rstrip("/") + "/v1/analyze"

    async def analyze(self, language: str, sentences: List[str]) -> List[Dict[str, Any]]:
        results = []
        # IAM API key передаётся через basic auth с пользователем "apikey"
        auth = ("apikey", self.settings.IBM_WATSON_API_KEY)
        params = {"version": self.settings.IBM_WATSON_VERSION}

        async with self._client() as client:
            for sentence in sentences:
                data = await self._post_json(
                    client,
                    self.url,
                    auth=auth,
                    params=params,
                    json={
                        "language": language,
                        "text": sentence,
                        "features": {"sentiment": {"document": True}},
                    },
                )
                results.append(data)
        return results

    @staticmethod
    def extract_score(item: Dict[str, Any]) -> Optional[Any]:
        return item.get("sentiment", {}).get("document", {}).get("label")
