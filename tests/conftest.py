# tests/conftest.py
import json
from typing import Any, Dict, List, Optional

import pytest

from cloudsentiment.exceptions import ProviderRequestError
from cloudsentiment.providers import BaseProvider
from cloudsentiment.schemas import ProviderName
from cloudsentiment.settings import Settings

CREDENTIAL_VARS = [
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_REGION",
    "AZURE_ENDPOINT",
    "AZURE_KEY",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "IBM_WATSON_API_KEY",
    "IBM_WATSON_URL",
    "IBM_WATSON_VERSION",
    "REQUEST_TIMEOUT",
    "LOG_LEVEL",
    "LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # Каждый тест стартует без учётных данных и в пустой рабочей директории
    for var in CREDENTIAL_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_settings():
    def factory(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)
    return factory


@pytest.fixture
def input_file(tmp_path):
    def write(payload: Any, name: str = "input.json"):
        path = tmp_path / name
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path
    return write


class FakeProvider(BaseProvider):
    """Provider with canned per-sentence answers; records every call."""

    def __init__(self, name: ProviderName, configured: bool = True,
                 label: str = "POSITIVE", fail: bool = False, calls: Optional[List[str]] = None):
        super().__init__(Settings(_env_file=None))
        self.name = name
        self.title = f"Fake {name.value}"
        self.configured = configured
        self.label = label
        self.fail = fail
        self.calls = calls if calls is not None else []

    def is_configured(self) -> bool:
        return self.configured

    async def analyze(self, language: str, sentences: List[str]) -> List[Dict[str, Any]]:
        self.calls.append(self.name.value)
        if self.fail:
            raise ProviderRequestError(self.name.value, "service unavailable", status_code=503)
        return [{"text": sentence, "language": language, "label": self.label} for sentence in sentences]

    @staticmethod
    def extract_score(item: Dict[str, Any]) -> Optional[Any]:
        return item.get("label")


@pytest.fixture
def fake_provider():
    return FakeProvider
