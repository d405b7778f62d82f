"""Generation prompt rendering"""

from .compiler import GenerationParams, compile_prompt
from .templates import PromptTemplateLoader, TemplateContext

__all__ = [
    "GenerationParams",
    "compile_prompt",
    "PromptTemplateLoader",
    "TemplateContext",
]
