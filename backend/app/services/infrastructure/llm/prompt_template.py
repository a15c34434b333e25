"""
Prompt template with named placeholders.
"""

import re
from dataclasses import dataclass

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class PromptTemplate:
    """
    A prompt template with {placeholder} slots.

    Segment prompts embed literal JSON examples, so placeholders are filled in
    a single pass rather than with str.format(); unknown braces are left alone
    and substituted values are never scanned again.

    Usage:
        template = PromptTemplate(
            template="Write segment {segment_number} of {total_segments}",
            description="Segment prompt",
        )
        result = template.format(segment_number=2, total_segments=5)
    """
    template: str
    description: str = ""

    def format(self, **kwargs) -> str:
        def substitute(match: re.Match) -> str:
            key = match.group(1)
            return str(kwargs[key]) if key in kwargs else match.group(0)

        return _PLACEHOLDER.sub(substitute, self.template)

    def __str__(self) -> str:
        return f"PromptTemplate({self.description})"
