from .multiple_choice import MultipleChoiceQuestionExtractor, normalize_answer
from .semantic_dedup import SemanticDeduplicator
from .corrections import ContentCorrection, build_correction_guidance
from .prompts import build_system_prompt, build_user_prompt

__all__ = [
    "MultipleChoiceQuestionExtractor",
    "normalize_answer",
    "SemanticDeduplicator",
    "ContentCorrection",
    "build_correction_guidance",
    "build_system_prompt",
    "build_user_prompt",
]
