# cloudsentiment/runner.py
import json
import logging
from contextlib import nullcontext
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel
from rich.console import Console

from cloudsentiment.providers import BaseProvider
from cloudsentiment.schemas import InputDocument, ProviderName, ProviderResult

logger = logging.getLogger(__name__)

# Цвет заголовка провайдера в консоли
TITLE_STYLES = {
    ProviderName.AWS: "dark_orange",
    ProviderName.AZURE: "rgb(51,153,255)",
    ProviderName.GCP: "red",
    ProviderName.IBM: "black on white",
}


class CombinedResult(BaseModel):
    """Per-run record of every provider's raw output; None means skipped."""

    aws: Optional[ProviderResult] = None
    azure: Optional[ProviderResult] = None
    gcp: Optional[ProviderResult] = None
    ibm: Optional[ProviderResult] = None

    def set(self, result: ProviderResult) -> None:
        setattr(self, result.provider.value, result)

    def get(self, name: ProviderName) -> Optional[ProviderResult]:
        return getattr(self, name.value)

    def to_dict(self) -> Dict[str, Optional[List[Dict[str, Any]]]]:
        combined = {}
        for name in ProviderName:
            result = self.get(name)
            combined[name.value] = result.items if result is not None else None
        return combined

    def rows(self, sentences: Sequence[str], providers: Sequence[BaseProvider]) -> List[Dict[str, Any]]:
        """Zip the sentences with one extracted score per provider."""
        extractors = {provider.name: provider.extract_score for provider in providers}
        rows = []
        for index, sentence in enumerate(sentences):
            row: Dict[str, Any] = {"sentence": sentence}
            for name in ProviderName:
                result = self.get(name)
                if result is None or name not in extractors:
                    row[name.value] = None
                else:
                    row[name.value] = extractors[name](result.items[index])
            rows.append(row)
        return rows


async def collect_results(
        document: InputDocument,
        providers: Sequence[BaseProvider],
        console: Optional[Console] = None,
) -> CombinedResult:
    """
    Query every configured provider, one after another.

    Unconfigured providers are skipped and keep an empty slot. A
    ProviderRequestError from any provider propagates immediately and the
    results gathered so far are discarded by the caller.
    """
    combined = CombinedResult()

    for provider in providers:
        if console is not None:
            console.print(provider.title, style=TITLE_STYLES.get(provider.name))

        if not provider.is_configured():
            logger.info("Skipping %s since some of the parameters are missing.", provider.title)
            if console is not None:
                console.print(f"Skipping {provider.title} since some of the parameters are missing.")
                console.print("Please check your .env file if this was not intentional.", style="dim")
            continue

        logger.info("Calling %s for %d sentences", provider.title, len(document.sentences))
        start_time = datetime.now()
        status = console.status("Computing sentiment") if console is not None else nullcontext()
        try:
            with status:
                items = await provider.analyze(document.language, document.sentences)
        except Exception:
            if console is not None:
                console.print("[red]✖ Error encountered[/red]")
            raise

        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info("%s answered in %.2fs", provider.title, processing_time)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s retrieved data: %s", provider.title, json.dumps(items, indent=2, ensure_ascii=False))
        if console is not None:
            console.print("[green]✔ Succeeded[/green]")

        combined.set(ProviderResult(provider=provider.name, items=items))

    return combined
