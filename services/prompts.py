"""Prompt templates for content transformations.

Each transformation type maps to a (system prompt, prompt template) pair.
Templates contain a single ``{content}`` placeholder and are filled with
plain string substitution, so the same input always yields the same prompt.
"""

from typing import Dict, Optional, Tuple


SUMMARY_SYSTEM = (
    "You are an expert content summarizer. Create clear, concise summaries "
    "that capture the essence of any content."
)
SUMMARY_TEMPLATE = """Create a comprehensive summary of the following content. Structure your response with:

• **Key Points**: 3-5 main takeaways
• **Main Arguments**: Core thesis or arguments presented
• **Important Details**: Supporting facts, data, or examples
• **Conclusion**: Overall significance or implications

Content to summarize:
{content}"""

MINDMAP_SYSTEM = (
    "You are an expert at creating visual mind maps. Transform content into "
    "hierarchical, easy-to-follow structures."
)
MINDMAP_TEMPLATE = """Create a detailed mind map of the following content. Use this format:

🎯 **MAIN TOPIC**
├── 📚 **Major Theme 1**
│   ├── Subtopic A
│   │   ├── Detail 1
│   │   └── Detail 2
│   └── Subtopic B
├── 🔍 **Major Theme 2**
└── ⚙️ **Major Theme 3**

Use emojis and clear hierarchy. Make it visually engaging and easy to follow.

Content:
{content}"""

NOTES_SYSTEM = (
    "You are an expert educator who creates comprehensive study materials "
    "and learning notes."
)
NOTES_TEMPLATE = """Transform the following content into structured study notes. Include:

📝 **STUDY NOTES**

**🎯 Learning Objectives:**
- [Key learning goals]

**📚 Key Concepts:**
- [Important terms and definitions]

**🔍 Main Topics:**
- [Organized topic breakdown]

**❓ Study Questions:**
- [Questions to test understanding]

**💡 Key Takeaways:**
- [Essential points to remember]

**📚 Further Reading:**
- [Related topics or resources]

Content:
{content}"""

LEGAL_SYSTEM = (
    "You are a legal expert who explains complex legal documents in plain "
    "English for non-lawyers."
)
LEGAL_TEMPLATE = """Analyze this legal document and provide a comprehensive breakdown:

⚖️ **LEGAL DOCUMENT ANALYSIS**

**📝 Plain English Summary:**
[Explain what this document is about in simple terms]

**⚠️ Key Risks & Obligations:**
[List important risks, responsibilities, and obligations]

**📜 Important Terms & Definitions:**
[Define complex legal terms used in the document]

**🔴 Red Flags:**
[Highlight any concerning clauses or unusual terms]

**✅ Recommendations:**
[Suggest actions or considerations for the reader]

Document:
{content}"""

ANALYSIS_SYSTEM = (
    "You are an expert analyst who provides deep insights and critical "
    "analysis of content."
)
ANALYSIS_TEMPLATE = """Provide a comprehensive analysis of the following content:

🔍 **CONTENT ANALYSIS**

**🎯 Purpose & Context:**
[What is the main purpose and context?]

**📊 Key Arguments:**
[Main arguments and supporting evidence]

**🔄 Strengths & Weaknesses:**
[Critical evaluation of the content]

**💡 Insights:**
[Deeper insights and implications]

**🔮 Conclusions:**
[Final thoughts and recommendations]

Content:
{content}"""

QA_SYSTEM = "You are an expert who creates comprehensive Q&A materials from any content."
QA_TEMPLATE = """Create a comprehensive Q&A based on the following content:

❓ **QUESTIONS & ANSWERS**

**Basic Understanding:**
[5-7 fundamental questions about the content]

**Detailed Analysis:**
[3-5 deeper analytical questions]

**Application Questions:**
[2-3 questions about practical applications]

**Critical Thinking:**
[2-3 questions that require critical analysis]

Provide clear, comprehensive answers for each question.

Content:
{content}"""

DEFAULT_SYSTEM = (
    "You are a helpful AI assistant that processes and transforms content "
    "according to user needs."
)
DEFAULT_TEMPLATE = """Process and transform the following content in a helpful and structured way:

{content}"""

PROMPTS: Dict[str, Tuple[str, str]] = {
    "summary": (SUMMARY_SYSTEM, SUMMARY_TEMPLATE),
    "mindmap": (MINDMAP_SYSTEM, MINDMAP_TEMPLATE),
    "notes": (NOTES_SYSTEM, NOTES_TEMPLATE),
    "legal": (LEGAL_SYSTEM, LEGAL_TEMPLATE),
    "analysis": (ANALYSIS_SYSTEM, ANALYSIS_TEMPLATE),
    "qa": (QA_SYSTEM, QA_TEMPLATE),
}


def build_prompt(transformation_type: str, content: str) -> Tuple[str, str]:
    """Build the (system_prompt, prompt) pair for a transformation.

    Unknown types fall back to a generic transformation prompt.
    """
    system_prompt, template = PROMPTS.get(transformation_type, (DEFAULT_SYSTEM, DEFAULT_TEMPLATE))
    # str.replace rather than str.format: content may contain braces
    return system_prompt, template.replace("{content}", content)


def combine_prompt(system_prompt: str, prompt: str) -> str:
    """Join a system prompt and a prompt into a single completion request text."""
    return f"{system_prompt}\n\n{prompt}"


# ==================== File Processing ====================

FILE_SYSTEM_PROMPTS = {
    "summary": (
        "You are an expert at creating concise, accurate summaries. Analyze the "
        "content and provide a clear summary with key points."
    ),
    "mindmap": (
        "You are an expert at creating visual mind maps. Convert the content into "
        "a hierarchical mind map structure using emojis and indentation."
    ),
    "podcast": (
        "You are an expert podcast scriptwriter. Convert the content into an "
        "engaging podcast script with natural dialogue and storytelling."
    ),
    "notes": (
        "You are an expert at creating study materials. Convert the content into "
        "well-organized study notes with key concepts, definitions, and questions."
    ),
}

FILE_DEFAULT_PROMPT = "Analyze and transform the following content in a helpful way."


def build_file_prompt(
    transformation_type: str,
    extracted_content: str,
    custom_prompt: Optional[str] = None
) -> str:
    """Build the single-text prompt used when transforming an uploaded file.

    The caller's custom prompt is only used for types without a built-in
    file prompt.
    """
    system_prompt = FILE_SYSTEM_PROMPTS.get(transformation_type) or custom_prompt or FILE_DEFAULT_PROMPT
    return f"{system_prompt}\n\nContent to transform:\n{extracted_content}"


# ==================== Q&A ====================

def build_chat_system_message(context: Optional[str]) -> str:
    """System message for Q&A, embedding the source content when given."""
    if context:
        return f"You are an AI assistant helping users understand content. Use this context to answer questions: {context}"
    return "You are an AI assistant helping users understand content. Answer questions clearly and helpfully."


CHAT_FALLBACK_INSTRUCTION = (
    "Please provide a helpful and accurate answer to the user's question. "
    "If you don't know something, say so clearly."
)

CONTEXT_RELATED_QUESTIONS = [
    "Can you explain more about the main topic?",
    "What are the key takeaways from this content?",
    "How does this relate to other similar topics?",
]
