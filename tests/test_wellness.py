import json
from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest

from studybudget.integration.wellness import (
    WellnessAssessmentService,
    build_assessment_prompt,
    humanize_key,
    parse_assessment,
)
from studybudget.models import LifestyleAssessment

ASSESSMENT = {
    "sleep_habits": "Irregular, about 5 hours on weeknights",
    "exercise_frequency": "light",
    "diet_quality": "fair",
    "stress_level": "high",
    "work_life_balance": "poor",
    "social_connection": "moderate",
    "mental_health_status": "fair",
    "time_management": "fair",
    "financial_wellness": "stable",
    "overall_score": 48,
    "strengths": ["Keeps a budget"],
    "areas_for_improvement": ["Sleep"],
    "recommendations": ["Set a fixed bedtime"],
    "risk_factors": ["Burnout"],
}


@pytest.fixture
def mock_openai_client() -> Generator[MagicMock, None, None]:
    with patch("studybudget.integration.wellness.OpenAI") as mock:
        yield mock


def _reply(mock_openai_client: MagicMock, text: str) -> MagicMock:
    mock_instance = mock_openai_client.return_value
    mock_response = MagicMock()
    mock_response.output_text = text
    mock_instance.responses.create.return_value = mock_response
    return mock_instance


def test_humanize_key() -> None:
    assert humanize_key("sleepHours") == "sleep hours"
    assert humanize_key("exercise_frequency") == "exercise frequency"


def test_assessment_prompt_lists_responses() -> None:
    prompt = build_assessment_prompt({"sleepHours": "5-6", "stressLevel": "high"})
    assert "sleep hours: 5-6" in prompt
    assert "9. Financial wellness" in prompt
    assert '"overall_score"' in prompt


def test_parse_assessment_strips_code_fence() -> None:
    res = parse_assessment(f"```json\n{json.dumps(ASSESSMENT)}\n```")
    assert res is not None
    assert res.overall_score == 48


def test_parse_assessment_rejects_bad_payload() -> None:
    assert parse_assessment("not json") is None
    assert parse_assessment(json.dumps({**ASSESSMENT, "overall_score": 140})) is None
    assert parse_assessment(json.dumps({**ASSESSMENT, "stress_level": "extreme"})) is None


def test_assess(mock_openai_client: MagicMock) -> None:
    mock_instance = _reply(mock_openai_client, json.dumps(ASSESSMENT))

    service = WellnessAssessmentService(api_key="sk-fake", model="gpt-4o-mini")
    res = service.assess({"sleepHours": "5-6"})

    assert res is not None
    assert res.stress_level == "high"
    assert res.recommendations == ["Set a fixed bedtime"]

    kwargs = mock_instance.responses.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["max_output_tokens"] == 2500
    assert "sleep hours: 5-6" in kwargs["input"]


def test_assess_returns_none_on_api_error(mock_openai_client: MagicMock) -> None:
    mock_openai_client.return_value.responses.create.side_effect = RuntimeError("boom")

    service = WellnessAssessmentService(api_key="sk-fake")
    assert service.assess({"sleepHours": "5-6"}) is None


def test_generate_insights(mock_openai_client: MagicMock) -> None:
    mock_instance = _reply(mock_openai_client, "  You are doing well.  ")

    service = WellnessAssessmentService(api_key="sk-fake")
    res = service.generate_insights(LifestyleAssessment.model_validate(ASSESSMENT))

    assert res == "You are doing well."
    assert mock_instance.responses.create.call_args.kwargs["max_output_tokens"] == 500


def test_personalized_motivation_reads_output_blocks(mock_openai_client: MagicMock) -> None:
    block = MagicMock(type="output_text", text="Sleep by 11pm.")
    item = MagicMock(content=[block])
    response = MagicMock(output_text=None, output=[item])
    mock_openai_client.return_value.responses.create.return_value = response

    service = WellnessAssessmentService(api_key="sk-fake")

    assert service.personalized_motivation("Sleep") == "Sleep by 11pm."
    prompt = mock_openai_client.return_value.responses.create.call_args.kwargs["input"]
    assert '"Sleep"' in prompt


def test_default_model(mock_openai_client: MagicMock, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    assert WellnessAssessmentService(api_key="sk-fake").model == "gpt-4o-mini"
