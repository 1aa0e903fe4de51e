"""
AI Cost Insight (``cost_services.insight``).

Responsibility
--------------
Turns a project's computed metrics into a Turkish natural-language
cost-control report by prompting a Gemini model once.

Failure modes
-------------
* Any error raised by the client is logged and replaced by the configured
  fallback message.  There is no retry and no timeout.
* An empty response yields the configured "no answer" message.
* ``create_client`` raises ``InsightConfigurationError`` when the API key
  environment variable is unset.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from google import genai
from google.genai import types

from cost_config.schema import (
    DEFAULT_EMPTY_MESSAGE,
    DEFAULT_FALLBACK_MESSAGE,
    CostTrackerConfig,
)
from cost_engines.metrics import compute_metrics
from cost_kernel.exceptions import InsightConfigurationError
from cost_kernel.logging_config import LogContext, get_logger
from cost_modules.expense.models import Expense
from cost_modules.labor.models import LaborRecord
from cost_modules.project.models import Project

logger = get_logger("services.insight")

SYSTEM_INSTRUCTION = """Sen 'MegaCost' uygulamasının baş maliyet kontrol (Cost Control) analistisin.
Kullanıcıya inşaat projesinin (GES veya Yol) finansal sağlığı hakkında profesyonel,
stratejik ve aksiyon odaklı bir rapor sun.

Raporun şunları içermeli:
1. Mevcut CPI değerine göre bütçe risk analizi.
2. Kategori bazlı (Malzeme, İşçilik vb.) anormal sapmaların tespiti.
3. Projenin EAC (Tahmini Bitiş Maliyeti) bütçeyi aşıyorsa alınması gereken somut tasarruf tedbirleri.
4. Gelecek dönem nakit akışı için stratejik tavsiye.

Dili profesyonel, güven verici ama risk durumunda uyarıcı olsun. Türkçe yanıt ver. Markdown kullanma, düz metin veya liste yapısı kullan."""

_CATEGORY_LABELS = {"solar": "GES", "road": "YOL"}


def create_client(config: CostTrackerConfig, environ: Mapping[str, str] | None = None) -> genai.Client:
    """Build a Gemini client from the API key named by ``config.api_key_env``."""
    env = os.environ if environ is None else environ
    api_key = env.get(config.api_key_env)
    if not api_key:
        raise InsightConfigurationError(
            f"API key not found in environment variable {config.api_key_env}"
        )
    return genai.Client(api_key=api_key)


def _fmt(value: Decimal, places: int = 2) -> str:
    return f"{value:.{places}f}"


def category_totals(expenses: Iterable[Expense]) -> dict[str, str]:
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, Decimal("0")) + expense.amount
    return {k: str(v) for k, v in totals.items()}


class InsightService:
    """
    Requests a cost-control narrative for one project.

    ``client`` is anything exposing ``models.generate_content`` with the
    google-genai signature; tests pass a fake.
    """

    def __init__(
        self,
        client: Any,
        model: str = "gemini-3-flash-preview",
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
        empty_message: str = DEFAULT_EMPTY_MESSAGE,
    ):
        self._client = client
        self._model = model
        self._fallback_message = fallback_message
        self._empty_message = empty_message

    @classmethod
    def from_config(cls, config: CostTrackerConfig, client: Any | None = None) -> InsightService:
        return cls(
            client=client if client is not None else create_client(config),
            model=config.insight_model,
            fallback_message=config.insight_fallback_message,
            empty_message=config.insight_empty_message,
        )

    def build_summary(
        self,
        project: Project,
        expenses: Iterable[Expense],
        labor_records: Iterable[LaborRecord] = (),
        *,
        as_of: date,
    ) -> str:
        """Templated metrics summary sent as the prompt body."""
        expenses = [e for e in expenses if e.project_id == project.id]
        result = compute_metrics(project, expenses, labor_records, as_of=as_of)
        fin, risk = result.financial, result.risk
        categories = json.dumps(category_totals(expenses), ensure_ascii=False)

        return (
            "PROJE KARNESİ:\n"
            f"Adı: {project.name}\n"
            f"Tip: {_CATEGORY_LABELS[project.category.value]}\n"
            f"Tamamlanma Oranı: %{project.percent_complete}\n"
            f"Bütçe: {project.total_budget} TL\n"
            f"Fiili Harcama (AC): {fin.actual_cost} TL\n"
            f"Kazanılmış Değer (EV): {fin.earned_value} TL\n"
            f"Performans Endeksi (CPI): {_fmt(fin.cpi)}\n"
            f"Tahmini Final Maliyeti (EAC): {_fmt(fin.eac, 0)} TL\n"
            f"Varyans: {_fmt(fin.variance, 0)} TL\n"
            f"İşçilik Maliyeti: {risk.labor_cost} TL\n"
            f"Günlük Harcama Hızı (Burn Rate): {_fmt(risk.burn_rate)} TL/gün\n"
            f"Kalan Gün: {risk.remaining_days}\n"
            f"Zaman Bazlı EAC: {_fmt(risk.eac, 0)} TL\n"
            f"Bütçe Sapması: {_fmt(risk.budget_deviation, 0)} TL\n"
            f"Karbon Tasarrufu: {risk.carbon_saved} ton CO2\n"
            f"Kategori Detayları: {categories}\n"
        )

    def generate(
        self,
        project: Project,
        expenses: Iterable[Expense],
        labor_records: Iterable[LaborRecord] = (),
        *,
        as_of: date,
    ) -> str:
        """Return the model's report, or a fixed message when it fails."""
        summary = self.build_summary(project, expenses, labor_records, as_of=as_of)

        with LogContext.bind(project_id=project.id):
            logger.info("insight_requested", extra={"model": self._model})
            try:
                response = self._client.models.generate_content(
                    model=self._model,
                    contents=f"Bu verileri analiz et: {summary}",
                    config=types.GenerateContentConfig(
                        system_instruction=SYSTEM_INSTRUCTION,
                    ),
                )
                text = response.text
            except Exception:
                # Any client failure becomes the fixed fallback text.
                logger.error("insight_request_failed", exc_info=True)
                return self._fallback_message

            if not text:
                logger.warning("insight_empty_response")
                return self._empty_message

            logger.info("insight_received", extra={"length": len(text)})
            return text
