"""Mock LLM providers for deterministic testing.

When MOCK_LLM=1 environment variable is set, the Gemini and Perplexity
clients return the canned responses below instead of calling the network.
This enables testing and offline development without API keys.
"""

import os
from typing import Dict, Any, List, Optional


def is_mock_mode() -> bool:
    """Check if mock mode is enabled via environment variable."""
    return os.getenv("MOCK_LLM", "").lower() in ("1", "true", "yes")


# ============================================================================
# Mock Data Constants
# ============================================================================

MOCK_TRANSFORMATIONS = {
    "summary": """**Key Points**:
- The content introduces a single main idea.
- Supporting details are grouped by theme.

**Main Arguments**: The author argues for a clear, structured approach.

**Conclusion**: The material is a good starting point for further study.
""",
    "mindmap": """## MAIN TOPIC
## Major Theme 1
Subtopic A
## Major Theme 2
Subtopic B
""",
    "notes": """## STUDY NOTES
Learning Objective: Understand the main idea
- First key concept from the content
- Second key concept from the content
This sentence gives a worked example of the concept.
""",
    "legal": """**Plain English Summary:** This agreement sets out duties of both parties.
**Key Risks & Obligations:** The tenant shall pay rent within 5 days.
**Red Flags:** Breach of contract carries a penalty.
""",
    "analysis": """**Purpose & Context:** The content explains a process.
**Key Arguments:** Structure improves understanding.
**Conclusions:** The argument is well supported.
""",
    "qa": """**Basic Understanding:**
Q: What is the main idea?
A: A structured approach to learning.
""",
}

MOCK_DEFAULT_TRANSFORMATION = "Mock transformation of the provided content."

MOCK_CHAT_ANSWER = "This is a mock answer based on the provided context."

MOCK_RELATED_QUESTIONS = [
    "What is the main idea of this content?",
    "Which details support the main argument?",
]


# ============================================================================
# Mock Completions
# ============================================================================

def mock_transformation(transformation_type: Optional[str]) -> str:
    """Return the canned transformed content for a transformation type."""
    return MOCK_TRANSFORMATIONS.get(transformation_type or "", MOCK_DEFAULT_TRANSFORMATION)


def mock_gemini_completion(prompt: str, transformation_type: Optional[str] = None) -> str:
    """Deterministic stand-in for a Gemini generateContent call.

    Transformation prompts get the canned output for their type; any other
    prompt (Q&A fallback, file processing) gets the generic chat answer.
    """
    if transformation_type:
        return mock_transformation(transformation_type)
    return MOCK_CHAT_ANSWER


def mock_perplexity_completion(messages: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Deterministic stand-in for a Perplexity chat completion."""
    return {
        "answer": MOCK_CHAT_ANSWER,
        "related_questions": list(MOCK_RELATED_QUESTIONS),
    }
