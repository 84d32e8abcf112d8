from ui.widgets.code_block import CodeBlock
from ui.widgets.typing_area import TypingArea

__all__ = ["CodeBlock", "TypingArea"]
