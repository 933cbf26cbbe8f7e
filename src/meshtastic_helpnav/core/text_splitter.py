"""Splits rendered help text into mesh-sized messages."""

from dataclasses import dataclass


@dataclass
class TextSplitter:
    """Packs whole lines into messages of at most ``max_size`` characters.

    Multi-message output gets a " [n/total]" indicator on each part.
    """

    max_size: int = 230

    # Longest indicator we reserve room for: " [99/99]"
    INDICATOR_RESERVE = 8

    def split(self, text: str) -> list[str]:
        """
        Split text into messages.

        Args:
            text: The text to split.

        Returns:
            List of messages, each <= max_size characters. Empty for
            blank input.
        """
        text = text.strip()
        if not text:
            return []

        if len(text) <= self.max_size:
            return [text]

        effective_max = self.max_size - self.INDICATOR_RESERVE
        if effective_max <= 0:
            raise ValueError(f"max_size must be > {self.INDICATOR_RESERVE}")

        parts = self._pack_lines(text.split("\n"), effective_max)
        total = len(parts)
        return [f"{part} [{i}/{total}]" for i, part in enumerate(parts, 1)]

    def _pack_lines(self, lines: list[str], limit: int) -> list[str]:
        """Greedily pack lines; lines longer than ``limit`` are broken up."""
        parts: list[str] = []
        current = ""

        for line in lines:
            for piece in self._break_line(line, limit):
                candidate = f"{current}\n{piece}" if current else piece
                if len(candidate) <= limit:
                    current = candidate
                    continue
                if current:
                    parts.append(current)
                current = piece

        if current:
            parts.append(current)
        return parts

    def _break_line(self, line: str, limit: int) -> list[str]:
        """Break a single line at spaces, hard-splitting long words."""
        if len(line) <= limit:
            return [line]

        pieces = []
        remaining = line
        while len(remaining) > limit:
            split_at = remaining.rfind(" ", 0, limit + 1)
            if split_at <= limit // 2:
                split_at = limit
            pieces.append(remaining[:split_at].rstrip())
            remaining = remaining[split_at:].lstrip()
        if remaining:
            pieces.append(remaining)
        return pieces
