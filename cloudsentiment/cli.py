# cloudsentiment/cli.py
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from cloudsentiment.exceptions import SentimentError
from cloudsentiment.output import write_outputs
from cloudsentiment.providers import build_providers
from cloudsentiment.runner import collect_results
from cloudsentiment.schemas import load_input
from cloudsentiment.settings import get_settings

app = typer.Typer(add_completion=False, help="Compare sentence sentiment across four cloud providers")
console = Console()


# ==================== НАСТРОЙКА ЛОГГИРОВАНИЯ ====================
def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """Настройка логгера пакета: консоль и, если задан, файл"""
    logger = logging.getLogger("cloudsentiment")
    logger.setLevel(level.upper())

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Повторный вызов заменяет обработчики, а не добавляет новые
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # stderr, чтобы не мешать статусу в консоли
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


@app.command()
def run(
        input_path: Path = typer.Option(Path("input.json"), "--input", "-i", help="JSON file with language and sentences"),
        output: Path = typer.Option(Path("result.json"), "--output", "-o", help="Combined raw results"),
        report: Path = typer.Option(Path("result.html"), "--report", help="Per-sentence HTML report"),
        no_report: bool = typer.Option(False, "--no-report", help="Only write the JSON file"),
        template: Optional[Path] = typer.Option(None, "--template", help="Custom Jinja2 report template"),
        env_file: Path = typer.Option(Path(".env"), "--env-file", help="File with provider credentials"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """
    Run every configured provider over the input sentences and save the results.

    Examples:
        cloud-sentiment
        cloud-sentiment -i data/input.json -o out/result.json --no-report
    """
    try:
        settings = get_settings(env_file)
        logger = setup_logging("DEBUG" if verbose else settings.LOG_LEVEL, settings.LOG_FILE)
    except SentimentError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except OSError as e:
        console.print(f"[red]❌ Cannot open log file: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        document = load_input(input_path)
        providers = build_providers(settings)
        combined = asyncio.run(collect_results(document, providers, console))
    except SentimentError as e:
        logger.error("Run halted: %s", e)
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    rows = combined.rows(document.sentences, providers)
    try:
        with console.status("Saving results"):
            written = write_outputs(
                combined,
                rows,
                json_path=output,
                report_path=None if no_report else report,
                template_path=template,
            )
    except OSError as e:
        logger.error("Cannot write results: %s", e, exc_info=True)
        console.print(f"[red]❌ Cannot write results: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    for path in written:
        console.print(f"[dim]{escape(str(path))}[/dim]")
    console.print("[green]✔ Done[/green]")


if __name__ == "__main__":
    app()
