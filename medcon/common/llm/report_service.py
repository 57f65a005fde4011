# medcon/common/llm/report_service.py
"""
Report service for the clinic's executive summary.

Sends a read-only summary of completed visits to the configured LLM endpoint
and returns its text. Any failure comes back as a fixed, user-readable
fallback string; callers never see an exception from here.
"""

import json
import logging
from typing import List, Optional

import httpx

from medcon.common.config import settings
from medcon.common.utils.global_messages import GlobalMessages

logger = logging.getLogger(__name__)


SYSTEM_PROMPTS = {
    "report": """You are the operations analyst for a small outpatient clinic. You receive data about completed consultations: wait time, consultation time, billed totals, doctor and clinic shares, and payment methods.

## YOUR TASK:
- Write a brief executive report in Spanish
- Comment on patient flow efficiency (waiting and consultation times)
- Comment on revenue and how it splits between doctors and the clinic
- Highlight doctor performance without ranking people harshly
- Mention payment-method trends if any stand out

## FORMAT:
- Markdown, at most five short sections
- Use the figures provided; never invent numbers
""",
}


class ReportService:
    """Service for generating the clinic summary report through the LLM endpoint."""

    def __init__(
        self,
        endpoint_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the report service.

        Args:
            endpoint_url: LLM endpoint URL. Defaults to settings.REPORT_ENDPOINT_URL
            timeout: Request timeout in seconds. Defaults to settings.REPORT_TIMEOUT_SECONDS
            transport: Optional httpx transport (used to stub the endpoint)
        """
        self.endpoint_url = endpoint_url if endpoint_url is not None else settings.REPORT_ENDPOINT_URL
        self.timeout = timeout if timeout is not None else settings.REPORT_TIMEOUT_SECONDS
        self.transport = transport

    async def generate(
        self,
        messages: list[dict],
        max_tokens: int = 1024,
        temperature: float = 0.4,
    ) -> dict:
        """
        Call the LLM endpoint.

        Returns:
            Dict with at least a 'response' key
        """
        if not self.endpoint_url:
            raise ValueError("Report endpoint URL not configured. Set REPORT_ENDPOINT_URL in settings.")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                self.endpoint_url,
                json={
                    "messages": messages,
                    "max_tokens": max_tokens,
                    "temperature": temperature,
                }
            )
            response.raise_for_status()
            return response.json()

    async def generate_report(self, summaries: List[dict], clinic_name: Optional[str] = None) -> str:
        """
        Produce the executive report for the given completed-visit summaries.

        Args:
            summaries: One dict per completed visit (see dashboard_service.build_report_summaries)
            clinic_name: Name used in the prompt. Defaults to settings.CLINIC_NAME

        Returns:
            The report text, or a fallback message when it cannot be produced
        """
        if not summaries:
            return GlobalMessages.REPORT_NOT_ENOUGH_DATA
        if not self.endpoint_url:
            return GlobalMessages.REPORT_NOT_CONFIGURED

        prompt = (
            f"Analiza los datos de la clínica {clinic_name or settings.CLINIC_NAME}:\n"
            f"{json.dumps(summaries, indent=2, ensure_ascii=False)}\n"
            "Genera un reporte ejecutivo breve sobre eficiencia, ingresos y desempeño médico."
        )
        messages = [
            {"role": "system", "content": SYSTEM_PROMPTS["report"]},
            {"role": "user", "content": prompt},
        ]

        try:
            result = await self.generate(messages=messages)
        except httpx.TimeoutException:
            logger.warning("Report request timed out after %ss", self.timeout)
            return GlobalMessages.REPORT_CONNECTION_ERROR
        except httpx.HTTPStatusError as e:
            logger.warning("Report request failed: %s", e.response.status_code)
            return GlobalMessages.REPORT_CONNECTION_ERROR
        except httpx.HTTPError as e:
            logger.warning("Report request error: %s", e)
            return GlobalMessages.REPORT_CONNECTION_ERROR
        except ValueError as e:
            logger.warning("Report response was not valid JSON: %s", e)
            return GlobalMessages.REPORT_GENERATION_ERROR

        text = (result.get("response") or "").strip() if isinstance(result, dict) else ""
        return text or GlobalMessages.REPORT_GENERATION_ERROR
