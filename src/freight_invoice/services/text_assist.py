"""
Abstract base class for the text-assist collaborator.

Text assist is best-effort: implementations never raise to the editor. When
the service is unreachable or unconfigured they hand back the caller's input
(or a deterministic offline result) so editing continues unaffected.

Implementations:
- OfflineTextAssist: no network; passes descriptions through and increments
  invoice numbers locally
- GeminiTextAssist: asks a Gemini model, falling back to the offline rules
"""

import re
from abc import ABC, abstractmethod

_TRAILING_DIGITS = re.compile(r"(\d+)$")
_NO_DIGITS_SUFFIX = "-NEXT"


class TextAssistService(ABC):
    """Contract for the description and invoice-number helpers."""

    @abstractmethod
    def refine_description(self, text: str) -> str:
        """
        Return a short, professional rewrite of a cargo description.

        Args:
            text: Rough description typed by the user.

        Returns:
            The rewrite, or ``text`` unchanged when no rewrite is available.
        """

    @abstractmethod
    def next_invoice_number(self, current: str) -> str:
        """
        Return the invoice number that follows ``current``.

        Args:
            current: The previous invoice number.
        """

    @property
    def ai_available(self) -> bool:
        """
        Check if a generative model backs this service.

        Returns:
            True when calls reach a model. Default implementation returns False.
        """
        return False


def increment_invoice_number(current: str) -> str:
    """
    Increment the trailing digit run of an invoice number.

    The run keeps its width with zero padding (``INV-2023-007`` ->
    ``INV-2023-008``) and grows when it overflows (``A99`` -> ``A100``).
    Numbers without trailing digits get ``-NEXT`` appended.

    Args:
        current: Invoice number to increment.

    Returns:
        The next invoice number.
    """
    match = _TRAILING_DIGITS.search(current)
    if not match:
        return current + _NO_DIGITS_SUFFIX
    digits = match.group(1)
    following = str(int(digits) + 1).zfill(len(digits))
    return current[: match.start(1)] + following
