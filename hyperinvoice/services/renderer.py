"""Render invoice templates to PDF."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from io import BytesIO
from pathlib import Path
from time import perf_counter
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from xhtml2pdf import pisa

from hyperinvoice.services.exceptions import RenderFailure

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(frozen=True, slots=True)
class GeneratedDocument:
    """A rendered PDF held in memory."""

    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def format_money(value: Any) -> str:
    """Format ``1180.5`` as ``1,180.50``; blank for missing values."""

    if value is None or value == "":
        return ""
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return str(value)
    return f"{amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,.2f}"


def build_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    env = Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["money"] = format_money
    return env


class DocumentRenderer:
    """Expands a Jinja2 template to HTML and converts it to PDF with xhtml2pdf."""

    def __init__(self, environment: Environment | None = None) -> None:
        self._env = environment or build_environment()

    def render_html(self, template_name: str, context: Mapping[str, Any]) -> str:
        template = self._env.get_template(template_name)
        return template.render(**context)

    def html_to_pdf(self, html: str) -> bytes:
        buffer = BytesIO()
        status = pisa.CreatePDF(src=html, dest=buffer, encoding="utf-8")
        if status.err:
            raise RuntimeError(f"xhtml2pdf reported {status.err} error(s)")
        return buffer.getvalue()

    def render(self, template_name: str, context: Mapping[str, Any]) -> GeneratedDocument:
        start = perf_counter()
        try:
            html = self.render_html(template_name, context)
            logger.debug("Template %s rendered to %d chars of HTML", template_name, len(html))
            content = self.html_to_pdf(html)
        except Exception as exc:
            logger.error("PDF generation failed for template %s: %s", template_name, exc)
            raise RenderFailure(f"Failed to generate PDF: {exc}", cause=exc) from exc
        document = GeneratedDocument(content)
        logger.debug(
            "Template %s converted to %d byte PDF in %.1f ms",
            template_name,
            document.size,
            (perf_counter() - start) * 1000,
        )
        return document
