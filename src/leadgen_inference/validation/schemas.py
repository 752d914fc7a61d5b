"""
JSON Schemas for provider output.

DECISION_MAKERS_FUNCTION_SCHEMA and INDUSTRY_FUNCTION_SCHEMA are sent to
providers that support function calling. DECISION_MAKER_ENTRY_SCHEMA is
used locally (jsonschema Draft 7) to check each entry of a decision-maker
list before normalization.
"""

from jsonschema import Draft7Validator

RELEVANCE_LEVELS = ["high", "medium", "low"]

DECISION_MAKERS_FUNCTION_NAME = "identify_decision_makers"
INDUSTRY_FUNCTION_NAME = "identify_industry"

DECISION_MAKERS_FUNCTION_SCHEMA = {
    "type": "object",
    "properties": {
        "decision_makers": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "role": {
                        "type": "string",
                        "description": (
                            'Job title or role of the decision maker - SINGLE CLEAN TITLE ONLY '
                            '(e.g., "VP of Sales" not "VP of Sales / Sales Director"). '
                            'Do not use "/" or "or" for alternatives.'
                        ),
                        "pattern": "^[^/]+$",
                    },
                    "priority": {
                        "type": "number",
                        "description": "Priority ranking (1 = highest priority)",
                        "minimum": 1,
                        "maximum": 10,
                    },
                    "reasoning": {
                        "type": "string",
                        "description": "Brief explanation why this role is relevant",
                    },
                    "industry_relevance": {
                        "type": "string",
                        "enum": RELEVANCE_LEVELS,
                        "description": "How relevant this role is to the specified industry",
                    },
                    "confidence": {
                        "type": "number",
                        "description": "Confidence score (0.0 to 1.0)",
                        "minimum": 0,
                        "maximum": 1,
                    },
                },
                "required": ["role", "priority", "reasoning", "industry_relevance", "confidence"],
            },
            "minItems": 3,
            "maxItems": 10,
        }
    },
    "required": ["decision_makers"],
}

INDUSTRY_FUNCTION_SCHEMA = {
    "type": "object",
    "properties": {
        "industries": {
            "type": "array",
            "items": {"type": "string"},
            "description": (
                'Up to 3 industry names, primary first (single word or short phrase, '
                'e.g., "Technology", "Healthcare")'
            ),
            "maxItems": 3,
        },
    },
    "required": ["industries"],
}

# Local per-entry check. Role pattern and relevance casing are repaired by
# the normalizer, so they are intentionally looser than the function schema.
DECISION_MAKER_ENTRY_SCHEMA = {
    "type": "object",
    "properties": {
        "role": {"type": "string"},
        "priority": {"type": "number", "minimum": 1, "maximum": 10},
        "reasoning": {"type": "string"},
        "industry_relevance": {"type": "string"},
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
    },
    "required": ["role", "priority", "reasoning", "industry_relevance", "confidence"],
}

entry_validator = Draft7Validator(DECISION_MAKER_ENTRY_SCHEMA)
