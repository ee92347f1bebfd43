"""Category suggestion service.

Keyword rules standing in for a remote classifier. The rules are evaluated
in order and the first match wins, so exactly one suggestion is returned.
"""

import asyncio
import os
from typing import Optional

from expensetrack.domain import errors
from expensetrack.domain.entities import Suggestion, UNCATEGORIZED
from expensetrack.logging_setup import get_logger
from expensetrack.utils.amount_parser import is_number

logger = get_logger(__name__)

LATENCY_ENV = "EXPENSETRACK_SUGGESTION_LATENCY"
DEFAULT_LATENCY = 0.5

# Categories offered when editing a transaction
CATEGORIES = (
    "Finance",
    "Freelance",
    "Advertising",
    "Payment",
    "Hosting",
    "Other",
)
CATEGORY_CHOICES = (UNCATEGORIZED,) + CATEGORIES

# (keywords, category, confidence), checked in order
KEYWORD_RULES = (
    (("aws", "amazon"), "Hosting", 0.9),
    (("ads", "facebook"), "Advertising", 0.8),
    (("salary", "payroll"), "Payroll", 0.95),
)
INCOME_SUGGESTION = Suggestion(category="Income", confidence=0.7)
FALLBACK_SUGGESTION = Suggestion(category="Other", confidence=0.5)


def suggest_category(description: str, amount: float) -> list[Suggestion]:
    """Return category suggestions, highest confidence first.

    Args:
        description: Transaction description (matched case-insensitively)
        amount: Signed transaction amount

    Returns:
        Single-element list of Suggestion

    Raises:
        ValidationError: If description is not a string or amount not a number
    """
    if not isinstance(description, str):
        raise errors.ValidationError(
            f"Description must be a string, got {type(description).__name__}"
        )
    if not is_number(amount):
        raise errors.ValidationError(f"Amount must be a number, got {type(amount).__name__}")

    text = description.lower()
    for keywords, category, confidence in KEYWORD_RULES:
        if any(keyword in text for keyword in keywords):
            return [Suggestion(category=category, confidence=confidence)]

    if amount < 0:
        return [INCOME_SUGGESTION]
    return [FALLBACK_SUGGESTION]


class SuggestionService:
    """Asynchronous front for the keyword rules with a simulated latency."""

    def __init__(self, latency: float = DEFAULT_LATENCY):
        """Initialize suggestion service.

        Args:
            latency: Seconds to wait before answering
        """
        if latency < 0:
            raise errors.ValidationError("Suggestion latency cannot be negative")
        self.latency = latency

    async def get_suggestions(self, description: str, amount: float) -> list[Suggestion]:
        """Suggest categories for a transaction after the configured latency."""
        # Validate before sleeping so bad input fails fast
        suggestions = suggest_category(description, amount)
        if self.latency:
            await asyncio.sleep(self.latency)
        logger.debug(
            "Suggested %s (%.2f) for %r",
            suggestions[0].category,
            suggestions[0].confidence,
            description,
        )
        return suggestions


def create_suggestion_service(latency: Optional[float] = None) -> SuggestionService:
    """Create a suggestion service.

    Args:
        latency: Seconds of simulated latency. If None, reads
            EXPENSETRACK_SUGGESTION_LATENCY, then defaults to 0.5

    Raises:
        ValidationError: If the environment value is not a number
    """
    if latency is None:
        env_val = os.environ.get(LATENCY_ENV)
        if env_val:
            try:
                latency = float(env_val)
            except ValueError:
                raise errors.ValidationError(
                    f"{LATENCY_ENV} must be a number of seconds, got '{env_val}'"
                )
        else:
            latency = DEFAULT_LATENCY
    return SuggestionService(latency=latency)
