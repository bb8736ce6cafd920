"""
Heuristic Vocabulary Tables

Every keyword list and pattern the analysis passes rely on lives here, so
the business rules can be reviewed, tuned and tested in one place:

- Domain terms used for lexical overlap
- Concept buckets used for cross-team conflict detection
- Similar-name pairs and shared-scope rules for overlapping definitions
- Hedge words and time-frame patterns for vagueness
- Funnel stage rules, in priority order
- Metric families with their standard definitions

Bump VOCABULARY_VERSION whenever a table changes meaning.
"""

from dataclasses import dataclass
import re

from .entities import FunnelStage

VOCABULARY_VERSION = "1.0"


# =============================================================================
# Term extraction
# =============================================================================

TERM_VOCABULARY: tuple[str, ...] = (
    "user", "lead", "customer", "account", "retention", "engagement",
    "conversion", "feature", "support", "ticket", "revenue", "score",
    "usage", "onboarding", "signup", "click", "active", "session",
    "trial", "churn", "satisfaction", "nps",
)

TERM_PATTERN = re.compile(
    r"\b(?:" + "|".join(TERM_VOCABULARY) + r")\b",
    re.IGNORECASE
)


# =============================================================================
# Concept buckets (conflict detection)
# =============================================================================

CONCEPT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "conversion": ("conversion", "convert", "signup", "trial"),
    "engagement": ("engagement", "usage", "active", "login", "session"),
    "quality": ("quality", "qualified", "score", "good"),
    "churn": ("churn", "retention", "return", "attrition"),
    "value": ("value", "revenue", "ltv", "lifetime"),
    "satisfaction": ("satisfaction", "nps", "feedback", "survey"),
}


# =============================================================================
# Overlapping definitions
# =============================================================================

SIMILAR_NAME_PAIRS: tuple[tuple[str, str], ...] = (
    ("engagement", "interaction"),
    ("churn", "retention"),
    ("conversion", "close"),
    ("lead", "prospect"),
    ("satisfaction", "nps"),
    ("value", "worth"),
)


@dataclass(frozen=True)
class SharedScopeRule:
    """Both definitions must contain every one of `terms`."""
    terms: tuple[str, ...]
    issue: str


SHARED_SCOPE_RULES: tuple[SharedScopeRule, ...] = (
    SharedScopeRule(("user", "feature"), "Both measure user feature interactions"),
    SharedScopeRule(("lead",), "Both involve lead qualification/scoring"),
    SharedScopeRule(("revenue",), "Both measure revenue-related metrics"),
)


# =============================================================================
# Vagueness and methodology signals
# =============================================================================

TIME_UNITS: tuple[str, ...] = ("day", "week", "month", "hour", "minute", "second", "year")

# Shared by vagueness and incompatibility detection
TIME_FRAME_PATTERN = re.compile(
    r"\d+\s*(?:" + "|".join(TIME_UNITS) + r")",
    re.IGNORECASE
)

HEDGE_WORDS: tuple[str, ...] = (
    "varies", "multiple", "various", "different", "sometimes", "possibly", "any",
)

HEDGE_PATTERN = re.compile(
    r"\b(?:" + "|".join(HEDGE_WORDS) + r")\b",
    re.IGNORECASE
)

DISJUNCTION_PATTERN = re.compile(r"\bor\b", re.IGNORECASE)

# A comparison operator or a bare digit qualifies an OR condition
THRESHOLD_PATTERN = re.compile(r"[<>]|\d")

EXCLUSION_MARKER = "exclud"
RATIO_MARKERS: tuple[str, ...] = ("/", "÷")

REASON_NO_TIME_FRAME = "No specific time frame"
REASON_HEDGE_WORDS = "Contains variable conditions without criteria"
REASON_UNQUALIFIED_OR = "OR condition without numerical thresholds"

INCOMPATIBLE_TIME_FRAMES = "Inconsistent time frames"
INCOMPATIBLE_CALCULATION = "Different calculation methods"


# =============================================================================
# Funnel classification
# =============================================================================

@dataclass(frozen=True)
class FunnelRule:
    """A funnel stage and the substrings that place a metric in it."""
    stage: FunnelStage
    definition_keywords: tuple[str, ...]
    name_keywords: tuple[str, ...]
    description: str


FUNNEL_RULES: tuple[FunnelRule, ...] = (
    FunnelRule(
        stage=FunnelStage.AWARENESS,
        definition_keywords=("brand", "reach", "visit"),
        name_keywords=("awareness", "reach"),
        description="Top of funnel metrics"
    ),
    FunnelRule(
        stage=FunnelStage.CONSIDERATION,
        definition_keywords=("engagement", "click", "lead", "session"),
        name_keywords=("engagement",),
        description="Middle of funnel metrics"
    ),
    FunnelRule(
        stage=FunnelStage.CONVERSION,
        definition_keywords=("conversion", "signup", "purchase", "trial"),
        name_keywords=("conversion",),
        description="Bottom of funnel metrics"
    ),
    FunnelRule(
        stage=FunnelStage.RETENTION,
        definition_keywords=("retention", "churn", "satisfaction", "nps"),
        name_keywords=("retention",),
        description="Post-conversion metrics"
    ),
)

UNKNOWN_STAGE_DESCRIPTION = "Unclassified metrics"

FUNNEL_STAGE_ORDER: tuple[FunnelStage, ...] = (
    FunnelStage.AWARENESS,
    FunnelStage.CONSIDERATION,
    FunnelStage.CONVERSION,
    FunnelStage.RETENTION,
    FunnelStage.UNKNOWN,
)


# =============================================================================
# Metric families (glossary)
# =============================================================================

@dataclass(frozen=True)
class FamilyDefinition:
    """A fixed semantic family of metrics and its canonical definition."""
    name: str
    keywords: tuple[str, ...]
    standard_definition: str


METRIC_FAMILIES: tuple[FamilyDefinition, ...] = (
    FamilyDefinition(
        name="Engagement",
        keywords=("engagement", "interact", "usage", "activity", "logins",
                  "clicks", "opens", "webinar"),
        standard_definition=(
            "A composite measure of user interaction with the product or content, "
            "measured across multiple channels. Combines both frequency and depth "
            "of interaction."
        )
    ),
    FamilyDefinition(
        name="Conversion",
        keywords=("conversion", "lead", "qualified", "close", "pipeline", "deal",
                  "sales", "cta", "sign up"),
        standard_definition=(
            "A sequential funnel measuring prospect progression from awareness to "
            "closed deal, with standardized stages and qualification criteria."
        )
    ),
    FamilyDefinition(
        name="Retention",
        keywords=("retention", "churn", "return", "attrition", "loyalty",
                  "time to value"),
        standard_definition=(
            "A comprehensive view of user retention that incorporates both "
            "time-to-value and ongoing engagement patterns over time."
        )
    ),
    FamilyDefinition(
        name="Satisfaction",
        keywords=("satisfaction", "nps", "feedback", "survey", "happy", "sentiment"),
        standard_definition=(
            "A multi-dimensional assessment of user happiness and product experience "
            "using both explicit feedback and implicit behavioral signals."
        )
    ),
    FamilyDefinition(
        name="Product Usage",
        keywords=("feature", "adoption", "activation", "onboarding", "user",
                  "power user"),
        standard_definition=(
            "A unified approach to measuring product adoption across the user "
            "lifecycle, from initial activation to power usage."
        )
    ),
    FamilyDefinition(
        name="Financial",
        keywords=("revenue", "cost", "cac", "ltv", "roi", "mrr", "arr", "clv"),
        standard_definition=(
            "A comprehensive framework for measuring business financial health with "
            "standardized calculations and consistent customer definitions."
        )
    ),
)

TEAM_CONFLICT = "Team Conflict"
DEFINITION_CONFLICT = "Definition Conflict"

FAMILY_RECOMMENDATIONS: dict[str, str] = {
    TEAM_CONFLICT: "Establish a cross-team working group to align on definitions and ownership.",
    DEFINITION_CONFLICT: "Standardize definitions across teams using the proposed standard definition.",
}
DEFAULT_FAMILY_RECOMMENDATION = "Review and align metrics within this family."


def contains_any(text: str, keywords) -> bool:
    """Case-insensitive substring test against any keyword."""
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def mentions_any(record, keywords) -> bool:
    """Keyword hit in the record's name or its definition, tested separately."""
    return contains_any(record.name, keywords) or contains_any(record.definition, keywords)
