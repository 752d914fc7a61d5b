"""
Unit tests for the identification services.
"""

import json

import pytest

from leadgen_inference.models.enums import FailureCategory
from leadgen_inference.persistence.repository import InMemoryDecisionMakerRepository
from leadgen_inference.retry.exceptions import OrchestrationError
from leadgen_inference.services import InvalidRequirementError, identify_decision_makers, identify_industry


@pytest.fixture
def repository() -> InMemoryDecisionMakerRepository:
    return InMemoryDecisionMakerRepository()


class TestIdentifyDecisionMakers:
    @pytest.mark.asyncio
    async def test_saves_ranked_candidates(
        self, scripted_client, make_orchestrator, repository, requirement_context, decision_makers_json, test_settings
    ):
        orchestrator = make_orchestrator(scripted_client("openai", [decision_makers_json]))

        result = await identify_decision_makers(
            requirement_context, orchestrator, repository, "req-1", settings=test_settings
        )

        assert result.requirement_id == "req-1"
        assert result.count == 5
        assert result.api_source == "openai"
        assert result.attempts_made == 1
        assert result.industry_alignment.score == pytest.approx(0.4)
        assert len(repository) == 5

        first = result.decision_makers[0]
        assert first["role_title"] == "CTO"
        assert first["priority"] == 1
        assert first["industry"] == "Technology"
        assert first["api_source"] == "openai"
        assert first["industry_relevance"] == "high"
        provenance = json.loads(first["raw_api_response"])
        assert provenance["provider"] == "openai"
        assert provenance["industry_alignment"] == {"aligned": True, "score": 0.4}

    @pytest.mark.asyncio
    async def test_repeat_call_upserts(
        self, scripted_client, make_orchestrator, repository, requirement_context, decision_makers_json, test_settings
    ):
        orchestrator = make_orchestrator(scripted_client("openai", [decision_makers_json, decision_makers_json]))

        first = await identify_decision_makers(requirement_context, orchestrator, repository, "req-1", settings=test_settings)
        second = await identify_decision_makers(requirement_context, orchestrator, repository, "req-1", settings=test_settings)

        assert len(repository) == 5
        assert [r["id"] for r in first.decision_makers] == [r["id"] for r in second.decision_makers]

    @pytest.mark.asyncio
    async def test_secondary_gets_larger_token_budget(
        self, scripted_client, make_orchestrator, repository, requirement_context, decision_makers_json, test_settings
    ):
        primary = scripted_client("openai", [], configured=False)
        secondary = scripted_client("gemini", [decision_makers_json])

        result = await identify_decision_makers(
            requirement_context, make_orchestrator(primary, secondary), repository, "req-2", settings=test_settings
        )

        assert result.api_source == "gemini"
        assert secondary.requests[0].max_tokens == test_settings.GEMINI_DECISION_MAKER_MAX_TOKENS
        assert result.decision_makers[0]["api_source"] == "gemini"

    @pytest.mark.asyncio
    async def test_failure_saves_nothing(
        self, scripted_client, make_orchestrator, repository, requirement_context, test_settings
    ):
        orchestrator = make_orchestrator(scripted_client("openai", ["[]"] * 3))

        with pytest.raises(OrchestrationError) as exc_info:
            await identify_decision_makers(requirement_context, orchestrator, repository, "req-3", settings=test_settings)

        assert exc_info.value.category is FailureCategory.VALIDATION_FAILED
        assert len(repository) == 0


class TestIdentifyIndustry:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text,message",
        [
            (None, "Requirement text is required"),
            ("   ", "Requirement text is required"),
            ("too short", "Requirement text must be at least 10 characters long"),
        ],
    )
    async def test_rejects_invalid_text(self, scripted_client, make_orchestrator, text, message):
        primary = scripted_client("openai", [])

        with pytest.raises(InvalidRequirementError) as exc_info:
            await identify_industry(text, make_orchestrator(primary))

        assert exc_info.value.message == message
        assert exc_info.value.http_status == 400
        assert primary.calls == 0

    @pytest.mark.asyncio
    async def test_identifies_industries(self, scripted_client, make_orchestrator, test_settings):
        primary = scripted_client("openai", ['{"industries": ["Technology", "Software", "IT Services"]}'])

        result = await identify_industry(
            "I want to sell enterprise CRM software to technology companies",
            make_orchestrator(primary),
            settings=test_settings,
        )

        assert result.industry == "Technology"
        assert result.primary_industry == "Technology"
        assert result.industries == ["Technology", "Software", "IT Services"]
        assert result.api_source == "openai"
        assert result.attempts_made == 1

    @pytest.mark.asyncio
    async def test_padding_follows_settings(self, scripted_client, make_orchestrator, test_settings):
        settings = test_settings.model_copy(update={"PAD_INDUSTRY_LIST": False})
        primary = scripted_client("openai", ["Healthcare"])

        result = await identify_industry("Selling MRI scanners to hospitals", make_orchestrator(primary), settings=settings)

        assert result.industries == ["Healthcare"]
