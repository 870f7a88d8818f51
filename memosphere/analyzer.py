"""Journal text analysis through the Anthropic Messages API.

All three operations are best-effort: any failure is logged and replaced by a
fixed fallback payload, so callers never have to handle an error state.
"""
import json
import logging
import re

from anthropic import Anthropic

from memosphere.models import MOOD_LABELS

logger = logging.getLogger(__name__)

_api_key = None
_model = "claude-3-haiku-20240307"
_client = None

SENTIMENT_SYSTEM_PROMPT = (
    "You are an assistant specialized in emotional analysis of journal entries. "
    "Analyze the journal entry and respond as if talking directly to the writer (\"you ...\"). Provide: "
    f"1. The primary emotion, one of: {', '.join(MOOD_LABELS)} "
    "2. A brief emotional insight (1-2 sentences about the emotional state) "
    "3. A thoughtful suggestion (1 sentence) based on the emotional content. "
    'Return only JSON in this format: {"primaryEmotion": string, "emotionalInsight": string, "suggestion": string}'
)

MEMORY_SYSTEM_PROMPT = (
    "You are an assistant that creates nostalgic summaries of past journal entries. "
    "Write a brief, thoughtful summary that captures the emotional essence of the entry. "
    "Begin with a phrase like 'X years ago, you...' where X is the provided year difference."
)

MONTHLY_SYSTEM_PROMPT = (
    "You are an assistant specialized in analyzing patterns in journal entries. "
    "Respond as if talking directly to the writer (\"you ...\"). "
    "Based on the journal entries from this month, create: "
    "1. A brief summary of overall emotional trends "
    "2. Three actionable suggestions based on the content. "
    'Return only JSON in this format: {"monthlyReflection": string, "suggestions": [string, string, string]}'
)

FALLBACK_MONTHLY_INSIGHTS = {
    "monthlyReflection": "Your journal entries from the past month show some interesting patterns.",
    "suggestions": [
        "Consider writing more regularly to track your emotions",
        "Try to include more details about your daily activities",
        "Reflect on what makes you happy or fulfilled",
    ],
}


class AnalysisError(Exception):
    pass


def configure(api_key, model=None):
    global _api_key, _model, _client
    _api_key = api_key
    if model:
        _model = model
    _client = None
    if not api_key:
        logger.warning("ANTHROPIC_API_KEY is not set; journal analysis will use fallback content")


def _get_client():
    global _client
    if not _api_key:
        raise AnalysisError("Anthropic API key is not configured")
    if _client is None:
        _client = Anthropic(api_key=_api_key)
    return _client


def _complete(system, prompt, max_tokens=300):
    response = _get_client().messages.create(
        model=_model,
        max_tokens=max_tokens,
        temperature=0.7,
        system=system,
        messages=[{"role": "user", "content": prompt}],
    )
    if not response.content or not getattr(response.content[0], "text", None):
        raise AnalysisError("Empty response from completion API")
    return response.content[0].text


def extract_json(text: str) -> dict:
    try:
        data = json.loads(text)
    except ValueError:
        match = re.search(r"\{.*\}", text, flags=re.DOTALL)
        if not match:
            raise AnalysisError("Model did not return JSON")
        try:
            data = json.loads(match.group(0))
        except ValueError as e:
            raise AnalysisError(f"Invalid JSON in model response: {e}")
    if not isinstance(data, dict):
        raise AnalysisError("Model returned JSON that is not an object")
    return data


def parse_sentiment(text: str) -> dict:
    data = extract_json(text)
    emotion = str(data.get("primaryEmotion", "")).strip().lower()
    if emotion not in MOOD_LABELS:
        raise AnalysisError(f"Unknown primary emotion: {emotion!r}")
    return {
        "primaryEmotion": emotion,
        "emotionalInsight": str(data.get("emotionalInsight", "")).strip(),
        "suggestion": str(data.get("suggestion", "")).strip(),
    }


def parse_monthly_insights(text: str) -> dict:
    data = extract_json(text)
    reflection = data.get("monthlyReflection")
    suggestions = data.get("suggestions")
    if not isinstance(reflection, str) or not reflection.strip():
        raise AnalysisError("Missing monthly reflection")
    if not isinstance(suggestions, list) or len(suggestions) < 3:
        raise AnalysisError("Expected three suggestions")
    return {
        "monthlyReflection": reflection.strip(),
        "suggestions": [str(s).strip() for s in suggestions[:3]],
    }


def is_fallback(analysis) -> bool:
    """True when the analysis is the stand-in returned after a failed call."""
    return not analysis or "error" in analysis


def analyze_journal_entry(text: str) -> dict:
    try:
        return parse_sentiment(_complete(SENTIMENT_SYSTEM_PROMPT, text))
    except Exception as e:
        logger.warning("Error analyzing journal entry: %s", e)
        return {
            "primaryEmotion": "neutral",
            "emotionalInsight": "Unable to analyze the emotional content at this time.",
            "suggestion": "Try writing more details about how you feel in your entry.",
            "error": str(e) or e.__class__.__name__,
        }


def generate_memory_summary(content: str, year_difference: int) -> str:
    prompt = f"Create a memory summary for this journal entry from {year_difference} year(s) ago: {content}"
    try:
        return _complete(MEMORY_SYSTEM_PROMPT, prompt, max_tokens=100).strip()
    except Exception as e:
        logger.warning("Error generating memory summary: %s", e)
        return f"{year_difference} years ago on this day, you wrote this entry."


def generate_monthly_insights(entries) -> dict:
    """Summarize (content, mood) pairs from the past month into a reflection and three suggestions."""
    entries_text = "\n\n".join(
        f"Content: {content}\nMood: {mood or 'Unknown'}" for content, mood in entries
    )
    prompt = f"Here are the journal entries from this month:\n\n{entries_text}"
    try:
        return parse_monthly_insights(_complete(MONTHLY_SYSTEM_PROMPT, prompt, max_tokens=500))
    except Exception as e:
        logger.warning("Error generating monthly insights: %s", e)
        return {
            "monthlyReflection": FALLBACK_MONTHLY_INSIGHTS["monthlyReflection"],
            "suggestions": list(FALLBACK_MONTHLY_INSIGHTS["suggestions"]),
        }
