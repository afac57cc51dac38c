"""
Prompt construction for multiple-choice question extraction.

The system prompt is specialised per module and embeds worked good/bad
examples that steer the model away from known failure modes (duplicate
options, truncated question text, guessed answers, merged multi-part
questions). The user prompt carries the chunk plus context hints derived
from the document profile and the discovery pass.
"""

from typing import List, Optional

from ..base import DocumentProfile, DiscoveredQuestionStub, ModuleTag, module_guidelines


SYSTEM_PROMPT_TEMPLATE = """You are an expert question extractor specialized in {module} assessment questions.

CRITICAL EXTRACTION RULES:
1. Extract EVERY question you find - do not skip any
2. Even if a question seems incomplete, include it (mark fields as empty if missing)
3. Preserve the EXACT wording from the source text
4. If options are labeled differently (1,2,3,4 or i,ii,iii,iv), convert to A,B,C,D
5. If correct answer is missing, set it as empty string rather than guessing
6. Handle questions that span multiple lines or pages
7. Recognize questions in tables, bullet points, or numbered formats
8. Extract questions even if formatting is poor or inconsistent
9. If you see "Question X:" or "Q.X" or just a number followed by text, it's likely a question
10. Don't combine multiple questions into one - extract each separately
{correction_guidance}

QUESTION FORMAT REQUIREMENTS:
- Question text: Must be clear and complete (minimum 10 characters)
- Exactly 4 options labeled A, B, C, D
- One correct answer (A, B, C, or D) - can be empty if not found
- Each option should be distinct and meaningful

{guidelines}

EXAMPLES OF VALID QUESTIONS:

GOOD EXAMPLE 1 (Numerical):
Question: "What is 25% of 80?"
A: 15
B: 20
C: 25
D: 30
Correct: B

GOOD EXAMPLE 2 (Vocabulary):
Question: "Which word is a synonym for 'happy'?"
A: Sad
B: Joyful
C: Angry
D: Tired
Correct: B

GOOD EXAMPLE 3 (Complex formatting):
Source text: "15) Calculate: 5 + 3 x 2
(i) 11  (ii) 16  (iii) 13  (iv) 10  Answer: i"
Extracted as:
Question: "Calculate: 5 + 3 x 2"
A: 11
B: 16
C: 13
D: 10
Correct: A

COMMON ERRORS TO AVOID:

ERROR 1: Duplicate or very similar options
BAD: A: "Happy" B: "Joyful" C: "Happy" D: "Glad"
GOOD: A: "Happy" B: "Sad" C: "Angry" D: "Excited"

ERROR 2: Incomplete question text
BAD: "What is the"
GOOD: "What is the capital of France?"

ERROR 3: Options that aren't answers
BAD: A: "Maybe" B: "I don't know" C: "Paris" D: "None"
GOOD: A: "Paris" B: "London" C: "Berlin" D: "Madrid"

ERROR 4: Guessing the answer
If answer key says "Answer: X" but no X option exists, leave correct_answer empty

ERROR 5: Combining multiple questions
If you see "15a)" and "15b)" - extract as TWO separate questions

BE THOROUGH: Your goal is 100% extraction accuracy. Extract every question, even if some details are unclear."""


USER_PROMPT_TEMPLATE = """Extract ALL {module} questions from the following text. Be systematic and thorough:

INSTRUCTIONS:
1. Read through the entire text carefully
2. Identify every question, regardless of formatting
3. Extract each question with its options and correct answer
4. CAPTURE CONTEXT: Include section name, page number, and question number if visible
5. If any field is unclear, extract what you can and leave the rest empty
6. Do not skip questions due to poor formatting
{context_hints}

TEXT TO PARSE:
{text}

Remember: Extract EVERY question you find. Completeness is more important than perfection."""


def build_system_prompt(module: ModuleTag, correction_guidance: str = "") -> str:
    """Module-specialised system prompt, with learned guidance when available."""
    return SYSTEM_PROMPT_TEMPLATE.format(
        module=module.value,
        correction_guidance=correction_guidance,
        guidelines=module_guidelines(module)
    )


def build_context_hints(
    profile: Optional[DocumentProfile],
    discovery_hints: Optional[List[DiscoveredQuestionStub]] = None
) -> str:
    """Bullet lines describing structure cues the extraction should honour."""
    hints = []

    if profile and profile.has_sections:
        hints.append("- PRESERVE section/chapter headers when extracting questions")
    if profile and profile.has_page_numbers:
        hints.append("- CAPTURE page numbers where questions appear")
    if discovery_hints:
        hints.append(
            f"- {len(discovery_hints)} questions were detected in discovery pass - ensure all are extracted"
        )
    if profile and profile.special_instructions:
        hints.append("- Special instructions: " + "; ".join(profile.special_instructions))

    return "\n".join(hints)


def build_user_prompt(
    text: str,
    module: ModuleTag,
    profile: Optional[DocumentProfile] = None,
    discovery_hints: Optional[List[DiscoveredQuestionStub]] = None
) -> str:
    return USER_PROMPT_TEMPLATE.format(
        module=module.value,
        context_hints=build_context_hints(profile, discovery_hints),
        text=text
    )
