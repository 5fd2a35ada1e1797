"""Readability and content analytics heuristics.

All metrics are computed in a single pass over the text with no external
calls: word/sentence/paragraph counts, reading time, a complexity tier,
frequency-based key topics, a word-list sentiment and a simplified Flesch
reading-ease score.
"""

import math
import re
from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List

WORDS_PER_MINUTE = 200
MAX_TOPICS = 5
SENTIMENT_MARGIN = 2

EMPTY_ANALYTICS_MESSAGE = "No content to analyze"

STOP_WORDS = {
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "is", "are", "was", "were", "be", "been", "have", "has",
    "had", "do", "does", "did", "will", "would", "could", "should", "may",
    "might", "can", "this", "that", "these", "those",
}

POSITIVE_WORDS = [
    "good", "great", "excellent", "amazing", "wonderful", "fantastic",
    "positive", "success", "benefit", "advantage",
]
NEGATIVE_WORDS = [
    "bad", "terrible", "awful", "horrible", "negative", "problem", "issue",
    "disadvantage", "failure", "error",
]

SENTENCE_SPLIT = re.compile(r"[.!?]+")
PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
NON_WORD = re.compile(r"[^\w]")


@dataclass
class ContentAnalytics:
    """Analytics computed for one piece of content."""
    reading_time: int = 0
    word_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0
    complexity: str = "Easy"
    key_topics: List[str] = field(default_factory=list)
    sentiment: str = "Neutral"
    readability_score: int = 0
    readability_level: str = "Very Difficult"
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Wire form with camelCase keys."""
        data = asdict(self)
        return {
            "readingTime": data["reading_time"],
            "wordCount": data["word_count"],
            "sentenceCount": data["sentence_count"],
            "paragraphCount": data["paragraph_count"],
            "complexity": data["complexity"],
            "keyTopics": data["key_topics"],
            "sentiment": data["sentiment"],
            "readabilityScore": data["readability_score"],
            "readabilityLevel": data["readability_level"],
            "message": data["message"],
        }


def split_words(content: str) -> List[str]:
    return content.split()


def split_sentences(content: str) -> List[str]:
    return [s for s in SENTENCE_SPLIT.split(content) if s.strip()]


def split_paragraphs(content: str) -> List[str]:
    return [p for p in PARAGRAPH_SPLIT.split(content) if p.strip()]


def reading_time_minutes(word_count: int) -> int:
    """Minutes to read at 200 words per minute, rounded up."""
    return math.ceil(max(word_count, 0) / WORDS_PER_MINUTE)


def classify_complexity(avg_sentence_length: float, avg_word_length: float) -> str:
    """Easy / Medium / Hard from average sentence and word length."""
    if avg_sentence_length > 20 or avg_word_length > 6:
        return "Hard"
    if avg_sentence_length > 15 or avg_word_length > 5:
        return "Medium"
    return "Easy"


def extract_key_topics(words: List[str], limit: int = MAX_TOPICS) -> List[str]:
    """Most frequent meaningful words; ties keep first-seen order."""
    frequencies: Counter = Counter()
    for word in words:
        clean = NON_WORD.sub("", word.lower())
        if len(clean) > 3 and clean not in STOP_WORDS:
            frequencies[clean] += 1
    # Counter preserves insertion order and sorted() is stable
    ranked = sorted(frequencies.items(), key=lambda item: -item[1])
    return [word for word, _ in ranked[:limit]]


def _count_matches(text: str, words: List[str]) -> int:
    return sum(len(re.findall(re.escape(word), text)) for word in words)


def classify_sentiment(content: str) -> str:
    """Positive / Negative when one word list outnumbers the other by more than 2."""
    lowered = content.lower()
    positive = _count_matches(lowered, POSITIVE_WORDS)
    negative = _count_matches(lowered, NEGATIVE_WORDS)

    if positive > negative + SENTIMENT_MARGIN:
        return "Positive"
    if negative > positive + SENTIMENT_MARGIN:
        return "Negative"
    return "Neutral"


def readability_score(avg_words_per_sentence: float, avg_word_length: float) -> int:
    """Simplified Flesch reading ease, clamped to [0, 100] and rounded.

    Syllables per word are approximated as half the average word length.
    """
    avg_syllables_per_word = avg_word_length * 0.5
    score = 206.835 - (1.015 * avg_words_per_sentence) - (84.6 * avg_syllables_per_word)
    clamped = max(0.0, min(100.0, score))
    return int(math.floor(clamped + 0.5))


def readability_level(score: int) -> str:
    """Human label for a reading-ease score."""
    if score >= 90:
        return "Very Easy"
    if score >= 80:
        return "Easy"
    if score >= 70:
        return "Fairly Easy"
    if score >= 60:
        return "Standard"
    if score >= 50:
        return "Fairly Difficult"
    if score >= 30:
        return "Difficult"
    return "Very Difficult"


def analyze_content(content: str) -> ContentAnalytics:
    """Compute every analytics metric for a text blob."""
    words = split_words(content or "")
    if not words:
        return ContentAnalytics(message=EMPTY_ANALYTICS_MESSAGE)

    sentences = split_sentences(content)
    paragraphs = split_paragraphs(content)

    # Text made only of punctuation words has no sentences; treat it as one
    sentence_count = len(sentences)
    avg_sentence_length = len(words) / max(sentence_count, 1)
    avg_word_length = sum(len(word) for word in words) / len(words)

    score = readability_score(avg_sentence_length, avg_word_length)

    return ContentAnalytics(
        reading_time=reading_time_minutes(len(words)),
        word_count=len(words),
        sentence_count=sentence_count,
        paragraph_count=len(paragraphs),
        complexity=classify_complexity(avg_sentence_length, avg_word_length),
        key_topics=extract_key_topics(words),
        sentiment=classify_sentiment(content),
        readability_score=score,
        readability_level=readability_level(score),
    )
