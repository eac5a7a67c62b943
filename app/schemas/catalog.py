"""Katalog der Domänen-Muster für die Schema-Vorschläge.

Jeder Eintrag verbindet Schlüsselwörter und eine Priorität mit einem
Generator, der ein Paar aus Input- und Output-Schema erzeugt.
Der Katalog ist reine Daten: eine neue Domäne ist ein neuer Eintrag
in `_PATTERN_DATA`, keine neue Verzweigung im Matcher.

Die Reihenfolge der Einträge entscheidet nur bei Punktgleichstand
(früher deklarierter Eintrag gewinnt, siehe matcher.py).
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Sequence

from app.schemas.builder import FieldSpec, build_schema


# ---------------------------------------------------------------------------
# Datenklassen
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SchemaSet:
    """Input-/Output-Schema-Paar für die API eines Modells."""

    input: dict[str, Any]
    output: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"input": self.input, "output": self.output}


@dataclass(frozen=True)
class PatternEntry:
    """Ein Katalog-Eintrag: Schlüsselwörter → Schema-Generator."""

    name: str
    keywords: tuple[str, ...]
    priority: int
    generator: Callable[[], SchemaSet]

    def __post_init__(self) -> None:
        if self.priority <= 0:
            raise ValueError(f"Priorität muss positiv sein ({self.name}: {self.priority})")
        if len(set(self.keywords)) != len(self.keywords):
            raise ValueError(f"Doppelte Schlüsselwörter in '{self.name}'")
        if any(kw != kw.lower() or not kw for kw in self.keywords):
            raise ValueError(f"Schlüsselwörter müssen klein geschrieben sein ('{self.name}')")


def _generate(
    input_fields: Sequence[FieldSpec],
    input_required: Sequence[str],
    output_fields: Sequence[FieldSpec],
    output_required: Sequence[str],
) -> SchemaSet:
    """Erzeugt bei jedem Aufruf ein frisches SchemaSet."""
    return SchemaSet(
        input=build_schema(input_fields, input_required),
        output=build_schema(output_fields, output_required),
    )


F = FieldSpec


# ---------------------------------------------------------------------------
# Muster-Daten: (Name, Schlüsselwörter, Priorität,
#                Input-Felder, Input-Pflicht, Output-Felder, Output-Pflicht)
# ---------------------------------------------------------------------------

_PATTERN_DATA: tuple[tuple[Any, ...], ...] = (
    (
        "fraud",
        ("fraud", "fraudulent", "scam", "spam", "phishing", "fake"),
        10,
        (
            F("text_content", "string", "The text content to analyze"),
            F("sender_email", "string", "Email address of the sender"),
            F("subject", "string", "Email or message subject"),
            F("metadata", "object", "Additional contextual information"),
        ),
        ("text_content",),
        (
            F("is_fraudulent", "boolean", "Whether the content is fraudulent"),
            F("confidence", "number", "Confidence score between 0 and 1", minimum=0, maximum=1),
            F("risk_factors", "array", "List of identified risk factors", items={"type": "string"}),
            F("severity", "string", "Risk level: low, medium, high"),
        ),
        ("is_fraudulent", "confidence"),
    ),
    (
        "churn",
        ("churn", "retention", "attrition", "cancel", "unsubscribe"),
        10,
        (
            F("customer_id", "string", "Unique customer identifier"),
            F("days_active", "integer", "Number of days as customer", minimum=0),
            F("engagement_score", "number", "Engagement metric", minimum=0, maximum=100),
            F("last_activity_days", "integer", "Days since last activity", minimum=0),
            F("support_tickets", "integer", "Number of support tickets filed", minimum=0),
        ),
        ("customer_id", "days_active"),
        (
            F("will_churn", "boolean", "Predicted churn likelihood"),
            F("churn_probability", "number", "Probability between 0 and 1", minimum=0, maximum=1),
            F("churn_date_estimate", "string", "Estimated date of churn (ISO 8601)"),
            F("retention_factors", "array", "Factors affecting retention", items={"type": "string"}),
        ),
        ("will_churn", "churn_probability"),
    ),
    (
        "sentiment",
        ("sentiment", "emotion", "feeling", "opinion", "review"),
        9,
        (
            F("text", "string", "Text to analyze for sentiment"),
            F("language", "string", "Language code (e.g., en, es)"),
            F("context", "string", "Additional context about the text"),
        ),
        ("text",),
        (
            F("sentiment", "string", "Sentiment classification: positive, negative, or neutral"),
            F("score", "number", "Sentiment score between -1 and 1", minimum=-1, maximum=1),
            F("confidence", "number", "Confidence in prediction", minimum=0, maximum=1),
            F("emotions", "object", "Breakdown of detected emotions"),
        ),
        ("sentiment", "score"),
    ),
    (
        "pricing",
        ("price", "pricing", "cost", "estimate", "valuation", "worth"),
        9,
        (
            F("features", "object", "Relevant features (size, location, etc.)"),
            F("category", "string", "Item category"),
            F("condition", "string", "Item condition"),
            F("market_data", "object", "Current market conditions"),
        ),
        ("features", "category"),
        (
            F("predicted_price", "number", "Estimated price", minimum=0),
            F("price_range_min", "number", "Minimum price estimate", minimum=0),
            F("price_range_max", "number", "Maximum price estimate", minimum=0),
            F("confidence_interval", "number", "Confidence level", minimum=0, maximum=1),
        ),
        ("predicted_price",),
    ),
    (
        "classification",
        ("classify", "classification", "categorize", "category", "label", "tag"),
        8,
        (
            F("text", "string", "Text to classify"),
            F("features", "object", "Additional features for classification"),
            F("metadata", "object", "Contextual metadata"),
        ),
        ("text",),
        (
            F("category", "string", "Predicted category"),
            F("confidence", "number", "Confidence score", minimum=0, maximum=1),
            F("all_categories", "array", "All possible categories with scores", items={"type": "object"}),
            F("reasoning", "string", "Explanation of classification"),
        ),
        ("category", "confidence"),
    ),
    (
        "recommendation",
        ("recommend", "recommendation", "suggest", "personalize"),
        8,
        (
            F("user_id", "string", "User identifier"),
            F("user_preferences", "object", "User preferences and history"),
            F("context", "object", "Current context (time, location, etc.)"),
            F("num_recommendations", "integer", "Number of recommendations", minimum=1),
        ),
        ("user_id",),
        (
            F("recommendations", "array", "List of recommended items", items={"type": "object"}),
            F("scores", "array", "Relevance scores for each item", items={"type": "number"}),
            F("reasoning", "object", "Explanation for recommendations"),
            F("diversity_score", "number", "Recommendation diversity", minimum=0, maximum=1),
        ),
        ("recommendations",),
    ),
    (
        "anomaly",
        ("anomaly", "outlier", "abnormal", "unusual", "detect"),
        8,
        (
            F("metrics", "object", "Metrics to analyze"),
            F("timestamp", "string", "ISO 8601 timestamp"),
            F("context", "object", "Contextual information"),
            F("baseline", "object", "Normal behavior baseline"),
        ),
        ("metrics", "timestamp"),
        (
            F("is_anomaly", "boolean", "Whether anomaly detected"),
            F("anomaly_score", "number", "Anomaly severity", minimum=0, maximum=1),
            F("anomaly_type", "string", "Type of anomaly detected"),
            F("affected_metrics", "array", "Metrics showing anomalies", items={"type": "string"}),
        ),
        ("is_anomaly", "anomaly_score"),
    ),
    (
        "image",
        ("image", "photo", "picture", "visual", "recognize"),
        7,
        (
            F("image_url", "string", "URL to the image"),
            F("image_base64", "string", "Base64 encoded image"),
            F("max_labels", "integer", "Maximum number of labels to return", minimum=1),
        ),
        ("image_url",),
        (
            F("labels", "array", "Detected labels/objects", items={"type": "string"}),
            F("confidence_scores", "array", "Confidence for each label", items={"type": "number"}),
            F("bounding_boxes", "array", "Coordinates of detected objects", items={"type": "object"}),
            F("metadata", "object", "Additional image information"),
        ),
        ("labels",),
    ),
    (
        "summarization",
        ("summarize", "summary", "extract", "abstract", "tldr"),
        7,
        (
            F("text", "string", "Text to summarize"),
            F("max_length", "integer", "Maximum summary length in characters", minimum=1),
            F("style", "string", "Summary style (brief, detailed)"),
            F("key_points", "boolean", "Whether to extract key points"),
        ),
        ("text",),
        (
            F("summary", "string", "Generated summary"),
            F("key_points", "array", "Main points extracted", items={"type": "string"}),
            F("length_ratio", "number", "Compression ratio", minimum=0, maximum=1),
            F("important_entities", "array", "Key entities mentioned", items={"type": "string"}),
        ),
        ("summary",),
    ),
    (
        "forecast",
        ("predict", "forecast", "estimate"),
        5,
        (
            F("features", "object", "Input features for prediction"),
            F("timestamp", "string", "Reference timestamp (ISO 8601)"),
            F("historical_data", "array", "Historical data points", items={"type": "object"}),
        ),
        ("features",),
        (
            F("prediction", "number", "Predicted value"),
            F("confidence_interval", "object", "Upper and lower bounds"),
            F("trend", "string", "Predicted trend direction"),
            F("factors", "array", "Contributing factors", items={"type": "string"}),
        ),
        ("prediction",),
    ),
)

# Fallback ohne Treffer oder bei leerer Beschreibung
_DEFAULT_INPUT = (
    F("data", "object", "Your input data"),
    F("features", "object", "Relevant features"),
    F("metadata", "object", "Additional metadata"),
)
_DEFAULT_OUTPUT = (
    F("prediction", "string", "The model prediction"),
    F("confidence", "number", "Confidence score", minimum=0, maximum=1),
    F("metadata", "object", "Additional information"),
)


def default_schema_set() -> SchemaSet:
    """Generisches Schema-Paar, wenn kein Muster passt."""
    return _generate(_DEFAULT_INPUT, ("data",), _DEFAULT_OUTPUT, ("prediction",))


def _build_catalog() -> tuple[PatternEntry, ...]:
    """Baut den Katalog einmalig beim Import und prüft jeden Generator.

    Fehlerhafte Musterdaten (Pflichtfeld ohne Definition, doppelte
    Felder) fallen so sofort beim Start auf, nicht erst bei einer Anfrage.
    """
    entries = []
    for name, keywords, priority, in_fields, in_req, out_fields, out_req in _PATTERN_DATA:
        entry = PatternEntry(
            name=name,
            keywords=keywords,
            priority=priority,
            generator=partial(_generate, in_fields, in_req, out_fields, out_req),
        )
        entry.generator()
        entries.append(entry)

    names = [entry.name for entry in entries]
    if len(set(names)) != len(names):
        raise ValueError("Musternamen im Katalog müssen eindeutig sein")
    return tuple(entries)


SCHEMA_CATALOG: tuple[PatternEntry, ...] = _build_catalog()


def get_pattern(name: str) -> PatternEntry:
    """Katalog-Eintrag anhand seines Namens.

    Raises:
        KeyError: Wenn kein Eintrag mit diesem Namen existiert.
    """
    for entry in SCHEMA_CATALOG:
        if entry.name == name:
            return entry
    raise KeyError(name)
