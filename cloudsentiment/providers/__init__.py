from typing import List

from cloudsentiment.providers.aws import ComprehendProvider
from cloudsentiment.providers.azure import AzureTextAnalyticsProvider
from cloudsentiment.providers.base import BaseProvider, HttpProvider
from cloudsentiment.providers.gcp import NaturalLanguageProvider
from cloudsentiment.providers.ibm import WatsonNLUProvider
from cloudsentiment.settings import Settings

__all__ = [
    "BaseProvider",
    "HttpProvider",
    "ComprehendProvider",
    "AzureTextAnalyticsProvider",
    "NaturalLanguageProvider",
    "WatsonNLUProvider",
    "build_providers",
]


def build_providers(settings: Settings) -> List[BaseProvider]:
    """All four adapters, in the order they are queried and reported."""
    return [
        ComprehendProvider(settings),
        AzureTextAnalyticsProvider(settings),
        NaturalLanguageProvider(settings),
        WatsonNLUProvider(settings),
    ]
