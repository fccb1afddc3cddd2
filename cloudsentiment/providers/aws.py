# cloudsentiment/providers/aws.py
import asyncio
import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from cloudsentiment.exceptions import ProviderRequestError
from cloudsentiment.providers.base import BaseProvider, batched
from cloudsentiment.schemas import ProviderName

logger = logging.getLogger(__name__)

# BatchDetectSentiment accepts at most 25 documents per call
BATCH_SIZE = 25

# Одна попытка на запрос: ошибка сразу останавливает запуск
NO_RETRIES = Config(retries={"total_max_attempts": 1, "mode": "standard"})


class ComprehendProvider(BaseProvider):
    name = ProviderName.AWS
    title = "Amazon Comprehend"

    def __init__(self, settings, client=None):
        super().__init__(settings)
        self._client = client

    def is_configured(self) -> bool:
        return self.settings.aws_configured

    def _get_client(self):
        if self._client is None:
            self._client = boto3.client(
                "comprehend",
                region_name=self.settings.AWS_REGION,
                aws_access_key_id=self.settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=self.settings.AWS_SECRET_ACCESS_KEY,
                config=NO_RETRIES,
            )
        return self._client

    async def analyze(self, language: str, sentences: List[str]) -> List[Dict[str, Any]]:
        client = self._get_client()
        by_index: Dict[int, Dict[str, Any]] = {}

        for offset, chunk in batched(sentences, BATCH_SIZE):
            try:
                # boto3 блокирующий, поэтому вызываем его в отдельном потоке
                response = await asyncio.to_thread(
                    client.batch_detect_sentiment,
                    TextList=chunk,
                    LanguageCode=language,
                )
            except ClientError as e:
                status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
                logger.error("Comprehend client error: %s", e)
                raise ProviderRequestError(self.name.value, str(e), status_code=status)
            except BotoCoreError as e:
                logger.error("Comprehend request error: %s", e)
                raise ProviderRequestError(self.name.value, str(e))

            # Index in the response is relative to the chunk
            for entry in response.get("ResultList", []):
                entry = dict(entry, Index=entry["Index"] + offset)
                by_index[entry["Index"]] = entry

            errors = response.get("ErrorList", [])
            if errors:
                logger.warning("Comprehend rejected %d document(s): %s", len(errors), errors)
            for entry in errors:
                entry = dict(entry, Index=entry["Index"] + offset)
                by_index[entry["Index"]] = entry

        missing = [index for index in range(len(sentences)) if index not in by_index]
        if missing:
            raise ProviderRequestError(self.name.value, f"no result returned for sentences {missing}")
        return [by_index[index] for index in range(len(sentences))]

    @staticmethod
    def extract_score(item: Dict[str, Any]) -> Optional[Any]:
        return item.get("Sentiment")
