import json
import os
import re
from typing import Any

from openai import OpenAI
from pydantic import ValidationError

from studybudget.core import settings
from studybudget.logger import get_logger
from studybudget.models import LifestyleAssessment

logger = get_logger(__name__)

INSTRUCTIONS = "You are an expert wellness coach and student lifestyle counselor."

ASSESSMENT_AREAS = (
    "Sleep quality and patterns",
    "Physical activity levels",
    "Diet and nutrition habits",
    "Stress management",
    "Academic-work balance",
    "Social connections",
    "Mental health status",
    "Time management skills",
    "Financial wellness",
)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def humanize_key(key: str) -> str:
    """``sleepHours`` and ``sleep_hours`` both become ``sleep hours``."""
    return _CAMEL_BOUNDARY_RE.sub(" ", key).replace("_", " ").lower()


def format_responses(responses: dict[str, Any]) -> str:
    return "\n".join(f"{humanize_key(key)}: {value}" for key, value in responses.items())


def build_assessment_prompt(responses: dict[str, Any]) -> str:
    areas = "\n".join(f"{index}. {area}" for index, area in enumerate(ASSESSMENT_AREAS, start=1))
    schema = json.dumps(LifestyleAssessment.model_json_schema(), indent=2)
    return f"""
Based on the following student responses, provide a comprehensive lifestyle assessment:

{format_responses(responses)}

Please analyze:
{areas}

Give specific, actionable recommendations suited to student life: academic workload,
tight budgets and many competing responsibilities.
Include an overall wellness score (0-100) where:
- 0-25: Critical - immediate attention needed
- 26-50: Poor - significant improvements needed
- 51-75: Fair - some areas need work
- 76-100: Good - healthy lifestyle maintained

Reply with a single JSON object matching this JSON schema and nothing else:
{schema}
"""


def build_insights_prompt(assessment: LifestyleAssessment) -> str:
    return f"""
Based on this lifestyle assessment:
{assessment.model_dump_json(indent=2)}

Write a brief, motivational summary (2-3 paragraphs) that acknowledges the student's
current situation, highlights their strengths, offers hope with actionable next steps,
and connects lifestyle choices to academic and financial success.
"""


def build_motivation_prompt(area: str) -> str:
    return f"""
Write a personalized, motivational message for a student who needs to improve in the area of: "{area}"

Be empathetic, give 3-5 specific actionable tips, include quick wins they can do
today or this week, and connect the improvement to their overall success as a student.
Keep it concise and encouraging.
"""


def parse_assessment(text: str) -> LifestyleAssessment | None:
    cleaned = text.strip()
    fenced = _FENCE_RE.match(cleaned)
    if fenced:
        cleaned = fenced.group(1)
    try:
        return LifestyleAssessment.model_validate_json(cleaned)
    except ValidationError as e:
        logger.error("[ASSESS] Model reply did not match the assessment schema: %s", e)
        return None


class WellnessAssessmentService:
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
    ):
        self.client = OpenAI(
            api_key=api_key or os.getenv("OPENAI_API_KEY"),
            base_url=base_url or os.getenv("OPENAI_BASE_URL") or None,
        )
        self.model = model or os.getenv("OPENAI_MODEL") or settings.DEFAULT_OPENAI_MODEL

    def _complete(self, prompt: str, max_output_tokens: int) -> str | None:
        try:
            response = self.client.responses.create(
                model=self.model,
                instructions=INSTRUCTIONS,
                input=prompt,
                max_output_tokens=max_output_tokens,
            )
        except Exception as e:
            logger.error(f"[ASSESS] LLM Error: {e}")
            return None
        return self._extract_output_text(response)

    @staticmethod
    def _extract_output_text(response: object) -> str | None:
        output_text = getattr(response, "output_text", None)
        if output_text:
            return output_text

        parts: list[str] = []
        for item in getattr(response, "output", None) or []:
            for block in getattr(item, "content", None) or []:
                if getattr(block, "type", None) in {"output_text", "text"}:
                    text = getattr(block, "text", None)
                    if text:
                        parts.append(text)

        return "".join(parts) or None

    def assess(self, responses: dict[str, Any]) -> LifestyleAssessment | None:
        logger.info("[ASSESS] Requesting lifestyle assessment (%d responses).", len(responses))
        text = self._complete(build_assessment_prompt(responses), max_output_tokens=2500)
        if text is None:
            return None
        return parse_assessment(text)

    def generate_insights(self, assessment: LifestyleAssessment) -> str | None:
        text = self._complete(build_insights_prompt(assessment), max_output_tokens=500)
        return text.strip() if text else None

    def personalized_motivation(self, area: str) -> str | None:
        text = self._complete(build_motivation_prompt(area), max_output_tokens=400)
        return text.strip() if text else None
