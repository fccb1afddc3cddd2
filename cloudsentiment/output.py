# cloudsentiment/output.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from cloudsentiment.runner import CombinedResult

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = TEMPLATES_DIR / "report.html"

PathLike = Union[str, Path]


def dump_json(combined: CombinedResult) -> str:
    return json.dumps(combined.to_dict(), indent=2, ensure_ascii=False) + "\n"


def write_json(path: PathLike, combined: CombinedResult) -> Path:
    path = Path(path)
    path.write_text(dump_json(combined), encoding="utf-8")
    logger.info("Combined result written to %s", path)
    return path


def render_report(
        path: PathLike,
        rows: List[Dict[str, Any]],
        template_path: Optional[PathLike] = None,
) -> Path:
    """Render the per-sentence report with Jinja2 and write it to path."""
    template_path = Path(template_path) if template_path else DEFAULT_TEMPLATE
    env = Environment(
        loader=FileSystemLoader(str(template_path.parent)),
        autoescape=select_autoescape(["html", "htm", "xml"]),
        keep_trailing_newline=True,
    )
    template = env.get_template(template_path.name)

    path = Path(path)
    path.write_text(template.render(result=rows), encoding="utf-8")
    logger.info("Report written to %s", path)
    return path


def write_outputs(
        combined: CombinedResult,
        rows: List[Dict[str, Any]],
        json_path: PathLike,
        report_path: Optional[PathLike] = None,
        template_path: Optional[PathLike] = None,
) -> List[Path]:
    """
    Replace the output files of a previous run with the current ones.

    Only called once every provider has finished, so a halted run never
    touches the disk.
    """
    targets = [Path(json_path)] + ([Path(report_path)] if report_path else [])
    for target in targets:
        if target.exists():
            logger.debug("Removing previous output %s", target)
            target.unlink()

    written = [write_json(json_path, combined)]
    if report_path:
        written.append(render_report(report_path, rows, template_path))
    return written
