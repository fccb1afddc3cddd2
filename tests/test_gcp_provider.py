# tests/test_gcp_provider.py
import asyncio

import pytest
from google.api_core.exceptions import InvalidArgument
from google.cloud import language_v1

from cloudsentiment.exceptions import ProviderRequestError
from cloudsentiment.providers import NaturalLanguageProvider


class FakeTransport:
    def __init__(self):
        self.closed = False

    async def close(self):
        self.closed = True


class FakeLanguageClient:
    """Async stand-in for LanguageServiceAsyncClient."""

    def __init__(self, scores, fail_at=None):
        self.scores = list(scores)
        self.fail_at = fail_at
        self.documents = []
        self.retries = []
        self.transport = FakeTransport()

    async def analyze_sentiment(self, document, retry="default"):
        self.documents.append(document)
        self.retries.append(retry)
        if self.fail_at is not None and len(self.documents) - 1 == self.fail_at:
            raise InvalidArgument("The language xx is not supported for document_sentiment analysis.")
        score = self.scores[len(self.documents) - 1]
        return language_v1.AnalyzeSentimentResponse(
            document_sentiment=language_v1.Sentiment(score=score, magnitude=abs(score)),
            language=document.language,
        )


def test_one_call_per_sentence(make_settings):
    client = FakeLanguageClient([0.5, -0.25])
    provider = NaturalLanguageProvider(make_settings(), client=client)

    items = asyncio.run(provider.analyze("en", ["Great!", "Meh."]))

    assert [d.content for d in client.documents] == ["Great!", "Meh."]
    assert all(d.type_ == language_v1.Document.Type.PLAIN_TEXT for d in client.documents)
    assert all(d.language == "en" for d in client.documents)
    assert [provider.extract_score(item) for item in items] == [0.5, -0.25]
    assert items[0]["language"] == "en"


def test_api_error_halts(make_settings):
    client = FakeLanguageClient([0.5, 0.5, 0.5], fail_at=1)
    provider = NaturalLanguageProvider(make_settings(), client=client)

    with pytest.raises(ProviderRequestError, match="not supported") as exc_info:
        asyncio.run(provider.analyze("xx", ["a", "b", "c"]))
    assert exc_info.value.provider == "gcp"
    assert len(client.documents) == 2


def test_broken_credentials_file_halts(make_settings, tmp_path):
    credentials = tmp_path / "gcloud-credentials.json"
    credentials.write_text("{}")
    provider = NaturalLanguageProvider(make_settings(GOOGLE_APPLICATION_CREDENTIALS=credentials))

    assert provider.is_configured()
    with pytest.raises(ProviderRequestError, match="invalid credentials file"):
        asyncio.run(provider.analyze("en", ["a"]))


def test_extract_score_without_sentiment():
    assert NaturalLanguageProvider.extract_score({}) is None


def test_requests_are_not_retried(make_settings):
    client = FakeLanguageClient([0.5, 0.5])
    provider = NaturalLanguageProvider(make_settings(), client=client)

    asyncio.run(provider.analyze("en", ["a", "b"]))

    assert client.retries == [None, None]


@pytest.mark.parametrize("fail_at", [None, 0])
def test_own_client_is_closed_after_run(make_settings, tmp_path, monkeypatch, fail_at):
    credentials = tmp_path / "gcloud-credentials.json"
    credentials.write_text("{}")
    client = FakeLanguageClient([0.5], fail_at=fail_at)
    monkeypatch.setattr(
        language_v1.LanguageServiceAsyncClient,
        "from_service_account_file",
        lambda *args, **kwargs: client,
    )
    provider = NaturalLanguageProvider(make_settings(GOOGLE_APPLICATION_CREDENTIALS=credentials))

    if fail_at is None:
        asyncio.run(provider.analyze("en", ["a"]))
    else:
        with pytest.raises(ProviderRequestError):
            asyncio.run(provider.analyze("en", ["a"]))

    assert client.transport.closed
    assert provider._client is None


def test_injected_client_is_left_open(make_settings):
    client = FakeLanguageClient([0.5])
    provider = NaturalLanguageProvider(make_settings(), client=client)

    asyncio.run(provider.analyze("en", ["a"]))
    assert not client.transport.closed
