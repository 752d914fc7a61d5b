"""
Prompt builder for provider requests.

Responsible for:
- Loading and rendering Jinja2 templates shipped with the package
- Selecting the prompt variant for an attempt number (comprehensive,
  focused, terse) so repeated attempts are not identical
- Filling in industry hints for the decision-maker prompt
"""

from typing import Optional

from jinja2 import Environment, PackageLoader, StrictUndefined
import structlog

from leadgen_inference.models.input_models import RequirementContext
from leadgen_inference.validation.alignment import INDUSTRY_DECISION_MAKERS


logger = structlog.get_logger(__name__)

# Number of prompt variants per task; later attempts reuse the last one
PROMPT_VARIANTS = 3

DEFAULT_INDUSTRY = "General Business"
DEFAULT_TARGET_MARKET = "B2B"
DEFAULT_PRODUCT = "Product/Service"

INDUSTRY_PLAIN_TEXT_SUFFIX = (
    "\n\nCRITICAL: Return ONLY the industry names, primary first, one per line. "
    "No JSON, no markdown, no explanations."
)


def variant_for_attempt(attempt: int) -> int:
    """Map a 1-based attempt number to a 1-based prompt variant."""
    return min(max(attempt, 1), PROMPT_VARIANTS)


class PromptBuilder:
    """
    Build prompts for the decision-maker and industry tasks.

    Templates are rendered with StrictUndefined so a missing variable fails
    at render time instead of silently producing an empty field.
    """

    def __init__(
        self,
        min_decision_makers: int = 5,
        max_decision_makers: int = 8,
        max_industries: int = 3,
        industry_hint_count: int = 3,
    ):
        """
        Initialize prompt builder.

        Args:
            min_decision_makers: Lower bound of roles requested from the model
            max_decision_makers: Upper bound of roles requested from the model
            max_industries: Number of industries requested from the model
            industry_hint_count: Typical roles quoted as hints for known industries
        """
        self.min_decision_makers = min_decision_makers
        self.max_decision_makers = max_decision_makers
        self.max_industries = max_industries
        self.industry_hint_count = industry_hint_count

        self.jinja_env = Environment(
            loader=PackageLoader("leadgen_inference", "prompts"),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,  # We're generating prompts, not HTML
            undefined=StrictUndefined,
        )

        logger.info(
            "PromptBuilder initialized",
            min_decision_makers=min_decision_makers,
            max_decision_makers=max_decision_makers,
            max_industries=max_industries,
        )

    def render(self, template_name: str, **context) -> str:
        template = self.jinja_env.get_template(template_name)
        return template.render(**context).strip()

    def decision_maker_system_prompt(self) -> str:
        return self.render("decision_makers_system.j2")

    def industry_system_prompt(self) -> str:
        return self.render("industry_system.j2")

    def industry_hints(self, industry: Optional[str]) -> list[str]:
        """Typical decision makers for a known industry, empty otherwise."""
        if not industry:
            return []
        return INDUSTRY_DECISION_MAKERS.get(industry, [])[: self.industry_hint_count]

    def decision_maker_prompt(self, context: RequirementContext, attempt: int = 1) -> str:
        """
        Render the decision-maker prompt for an attempt.

        Args:
            context: Requirement to analyse
            attempt: 1-based attempt number (per provider)

        Returns:
            Rendered user prompt
        """
        industry = context.industry or DEFAULT_INDUSTRY
        variant = variant_for_attempt(attempt)
        prompt = self.render(
            f"decision_makers_attempt_{variant}.j2",
            requirement_text=context.free_text,
            industry=industry,
            product_or_service=context.product_or_service or DEFAULT_PRODUCT,
            target_location=context.target_location,
            target_market=context.target_market or DEFAULT_TARGET_MARKET,
            industry_hints=self.industry_hints(context.industry),
            min_roles=self.min_decision_makers,
            max_roles=self.max_decision_makers,
        )

        logger.debug(
            "Built decision-maker prompt",
            attempt=attempt,
            variant=variant,
            prompt_length=len(prompt),
        )
        return prompt

    def industry_prompt(self, requirement_text: str, attempt: int = 1) -> str:
        """Render the industry identification prompt for an attempt."""
        variant = variant_for_attempt(attempt)
        prompt = self.render(
            f"industry_attempt_{variant}.j2",
            requirement_text=requirement_text.strip(),
            max_industries=self.max_industries,
        )

        logger.debug(
            "Built industry prompt",
            attempt=attempt,
            variant=variant,
            prompt_length=len(prompt),
        )
        return prompt
